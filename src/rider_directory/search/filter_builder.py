"""Builds the boolean predicate behind a rider search.

Each enabled search mode contributes one clause and the clauses are ORed
together. With no clause the predicate is false, so a search with no modes
enabled matches nothing, while an empty name query matches everything.
"""

import logging

from sqlalchemy import ColumnElement, false, or_

from rider_directory.core.phone import strip_non_digits
from rider_directory.db.schema import Rider

from .options import SearchOptions

logger = logging.getLogger(__name__)


class RiderFilterBuilder:
    """Accumulates per-mode clauses for a query and folds them into one."""

    def __init__(self, query: str, options: SearchOptions):
        self.query = query
        self.options = options

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []

        if self.options.name_search:
            clauses.append(Rider.name.icontains(self.query, autoescape=True))

        if self.options.email_search:
            clauses.append(Rider.email.icontains(self.query, autoescape=True))

        # Without a digit there is nothing to match a phone against
        digits = strip_non_digits(self.query)
        if self.options.phone_search and digits:
            clauses.append(Rider.phone.contains(digits))

        return clauses

    def build(self) -> ColumnElement[bool]:
        clauses = self.clauses()
        if not clauses:
            logger.debug("No search modes enabled, predicate is always false")
            return false()
        return or_(*clauses)


def build_rider_filter(query: str, options: SearchOptions) -> ColumnElement[bool]:
    return RiderFilterBuilder(query, options).build()
