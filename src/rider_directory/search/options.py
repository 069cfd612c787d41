"""Search configuration for rider queries."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SEARCH_LIMIT = 100


class SearchOptions(BaseModel):
    """Which rider fields a free-text query is matched against."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=0)
    name_search: bool = True
    email_search: bool = False
    phone_search: bool = False

    def merge(self, **overrides: Any) -> "SearchOptions":
        """Return a copy with ``overrides`` applied and validated."""
        if not overrides:
            return self
        return SearchOptions.model_validate({**self.model_dump(), **overrides})
