from .places import PlacesRepository, PlaceError, PlaceNotFoundError, PlaceNotSavedError
from . import models

__all__ = ["PlacesRepository", "PlaceError", "PlaceNotFoundError", "PlaceNotSavedError", "models"]
