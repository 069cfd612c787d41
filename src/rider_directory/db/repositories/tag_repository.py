"""Read-only tag lookups; tag membership is written elsewhere."""

from ..schema import Rider, Tag
from .base_repository import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """Repository for tag lookups."""

    model_class = Tag

    def get_by_name(self, name: str) -> Tag | None:
        return self.get_by(name=name)

    def riders_for(self, name: str) -> list[Rider]:
        tag = self.get_by_name(name)
        if tag is None:
            return []
        return list(tag.riders)
