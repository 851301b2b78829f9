"""
SQLAlchemy ORM models for persistence.
"""
from sqlalchemy import Column, Integer, JSON, String

from db import Base


class PlaceORM(Base):
    __tablename__ = "places"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String, nullable=False)
    location_name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    points = Column(JSON, nullable=False)
