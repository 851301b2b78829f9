"""
Place repository backed by SQLAlchemy/SQLite.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repositories.models import PlaceORM

PLACE_FIELDS = ("name", "location_name", "category", "points")


class PlaceError(Exception):
    """Base error for place persistence."""


class PlaceNotFoundError(PlaceError):
    def __init__(self, message: str = "Place does not exist"):
        super().__init__(message)


class PlaceNotSavedError(PlaceError):
    def __init__(self, message: str = "Failed to save place"):
        super().__init__(message)


def _place_from_orm(orm: PlaceORM) -> Dict[str, Any]:
    return {
        "id": orm.id,
        "name": orm.name,
        "location_name": orm.location_name,
        "category": orm.category,
        "points": orm.points,
    }


class PlacesRepository:
    """CRUD operations for places."""

    def list_places(self, session: Session) -> List[Dict[str, Any]]:
        try:
            rows = session.query(PlaceORM).order_by(PlaceORM.id).all()
        except SQLAlchemyError as exc:
            raise PlaceError(f"Failed to retrieve places: {exc}") from exc
        return [_place_from_orm(p) for p in rows]

    def get_place(self, session: Session, place_id: int) -> Optional[Dict[str, Any]]:
        orm = session.get(PlaceORM, place_id)
        if not orm:
            return None
        return _place_from_orm(orm)

    def create_place(self, session: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        orm = PlaceORM(**{k: data[k] for k in PLACE_FIELDS})
        try:
            session.add(orm)
            session.commit()
            session.refresh(orm)
        except SQLAlchemyError as exc:
            session.rollback()
            raise PlaceNotSavedError(f"Invalid place data: {exc}") from exc
        if orm.id is None:
            raise PlaceNotSavedError("Place not saved")
        return _place_from_orm(orm)

    def update_place(self, session: Session, place_id: int, data: Dict[str, Any]) -> bool:
        """Apply `data`; returns True when at least one field changed."""
        orm = session.get(PlaceORM, place_id)
        if not orm:
            raise PlaceNotFoundError()
        changed = False
        for key in PLACE_FIELDS:
            if key in data and getattr(orm, key) != data[key]:
                setattr(orm, key, data[key])
                changed = True
        if not changed:
            return False
        try:
            session.add(orm)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise PlaceNotSavedError(f"Invalid place data: {exc}") from exc
        return True

    def delete_place(self, session: Session, place_id: int) -> None:
        orm = session.get(PlaceORM, place_id)
        if not orm:
            raise PlaceNotFoundError()
        try:
            session.delete(orm)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise PlaceNotSavedError(f"Failed to delete place: {exc}") from exc
