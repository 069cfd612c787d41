"""Repository layer for database CRUD operations."""

from .base_repository import BaseRepository
from .rider_repository import RiderRepository
from .tag_repository import TagRepository

__all__ = ["BaseRepository", "RiderRepository", "TagRepository"]
