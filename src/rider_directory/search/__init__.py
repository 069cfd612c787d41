"""Rider search: predicate construction and popularity ranking."""

from .filter_builder import RiderFilterBuilder, build_rider_filter
from .options import DEFAULT_SEARCH_LIMIT, SearchOptions
from .ranking import build_ranked_query, rank_riders

__all__ = [
    "DEFAULT_SEARCH_LIMIT",
    "SearchOptions",
    "RiderFilterBuilder",
    "build_rider_filter",
    "build_ranked_query",
    "rank_riders",
]
