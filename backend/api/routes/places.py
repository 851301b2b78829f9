"""
Places API routes.
"""
import logging
from typing import Any, Dict, List
from fastapi import APIRouter, HTTPException, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, Json, StrictStr

from db import SessionLocal
from repositories import PlacesRepository, PlaceNotFoundError, PlaceNotSavedError

router = APIRouter()
places_repo = PlacesRepository()
logger = logging.getLogger(__name__)


class PlaceWrite(BaseModel):
    """Create/update body. `points` arrives as a JSON-encoded string."""
    name: StrictStr = Field(min_length=1)
    location_name: StrictStr = Field(min_length=1)
    category: StrictStr = Field(min_length=1)
    points: Json[Dict[str, Any]]


class PlaceResponse(BaseModel):
    id: int
    name: str
    location_name: str
    category: str
    points: Dict[str, Any]


@router.get("", response_model=List[PlaceResponse])
async def list_places():
    """List all places ordered by id."""
    with SessionLocal() as session:
        return places_repo.list_places(session)


@router.post("", response_model=PlaceResponse, status_code=201)
async def create_place(data: PlaceWrite):
    """Create a new place."""
    with SessionLocal() as session:
        try:
            return places_repo.create_place(session, data.model_dump())
        except PlaceNotSavedError as e:
            logger.error("create_place failed: %s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to create place"})


@router.get("/{place_id}", response_model=PlaceResponse)
async def get_place(place_id: int):
    """Get a place by ID."""
    with SessionLocal() as session:
        place = places_repo.get_place(session, place_id)
        if not place:
            raise HTTPException(status_code=404, detail="Place not found")
        return place


@router.put("/{place_id}", status_code=204)
async def update_place(place_id: int, data: PlaceWrite):
    """Update a place; 304 when nothing changed."""
    with SessionLocal() as session:
        try:
            changed = places_repo.update_place(session, place_id, data.model_dump())
        except PlaceNotFoundError:
            raise HTTPException(status_code=404, detail="Place not found")
        except PlaceNotSavedError as e:
            logger.error("update_place %s failed: %s", place_id, e)
            return Response(status_code=304)
        return Response(status_code=204 if changed else 304)


@router.delete("/{place_id}", status_code=204)
async def delete_place(place_id: int):
    """Delete a place; 304 when it no longer exists."""
    with SessionLocal() as session:
        try:
            places_repo.delete_place(session, place_id)
        except PlaceNotFoundError:
            logger.info("delete_place: %s already absent", place_id)
            return Response(status_code=304)
        except PlaceNotSavedError as e:
            logger.error("delete_place %s failed: %s", place_id, e)
            return Response(status_code=304)
        return Response(status_code=204)
