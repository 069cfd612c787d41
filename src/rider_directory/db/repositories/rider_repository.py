"""Rider repository: directory reads, search, and notifying mutations."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rider_directory.changeset import RiderChangeset, build_changeset
from rider_directory.core.exceptions import (
    InvalidPhoneNumberError,
    NotFoundError,
    RiderValidationError,
)
from rider_directory.core.phone import canonicalize_phone
from rider_directory.directory_logging import log_rider_context
from rider_directory.pubsub.bus import NotificationBus, Subscription
from rider_directory.pubsub.channels import TOPIC_RIDERS, RiderEvent, RiderEventKind
from rider_directory.search.filter_builder import build_rider_filter
from rider_directory.search.options import SearchOptions
from rider_directory.search.ranking import rank_riders
from rider_directory.settings import DirectorySettings

from ..schema import Rider
from ..transaction import transaction
from .base_repository import BaseRepository
from .tag_repository import TagRepository

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("email", "phone")


class RiderRepository(BaseRepository[Rider]):
    """Repository for the rider directory.

    Successful creates and updates publish ``rider_created`` /
    ``rider_updated`` on the riders topic exactly once, after commit.
    Deletes publish nothing.
    """

    model_class = Rider

    def __init__(
        self,
        session: Session,
        bus: NotificationBus,
        settings: DirectorySettings | None = None,
    ) -> None:
        super().__init__(session)
        self.bus = bus
        self.settings = settings or DirectorySettings()

    def list_riders(self) -> list[Rider]:
        return self.list_all()

    def list_riders_with_tag(self, tag_name: str) -> list[Rider]:
        return TagRepository(self.session).riders_for(tag_name)

    def search_riders(
        self,
        query: str = "",
        options: SearchOptions | None = None,
        **overrides: Any,
    ) -> list[Rider]:
        """Search riders and rank them by campaign participation.

        Args:
            query: Free text matched as a case-insensitive substring.
            options: Enabled search modes and result limit. Defaults to a
                name-only search capped at the configured search limit.
            **overrides: Individual option values, applied over ``options``.

        Returns:
            Matching riders, most participations first, at most ``limit``.
        """
        opts = (options or SearchOptions(limit=self.settings.search_limit)).merge(**overrides)
        predicate = build_rider_filter(query, opts)
        riders = rank_riders(self.session, predicate, opts.limit)
        logger.debug("Rider search returned %d results", len(riders))
        return riders

    def get_rider(self, rider_id: int) -> Rider | None:
        return self.get(rider_id)

    def require_rider(self, rider_id: int) -> Rider:
        return self._require(self.get(rider_id), f"No rider with id {rider_id}")

    def get_riders(self, rider_ids: Iterable[int]) -> list[Rider]:
        return self.get_many(list(rider_ids))

    def get_rider_by_email(self, email: str) -> Rider | None:
        return self.get_by(email=self._normalize_email(email))

    def require_rider_by_email(self, email: str) -> Rider:
        return self._require(self.get_rider_by_email(email), "No rider with that email")

    def get_rider_by_phone(self, phone: str) -> Rider | None:
        try:
            return self._lookup_phone(phone)
        except InvalidPhoneNumberError:
            return None

    def require_rider_by_phone(self, phone: str) -> Rider:
        return self._require(self._lookup_phone(phone), "No rider with that phone number")

    def count_riders(self) -> int:
        return self.count()

    def change_rider(
        self, rider: Rider | None = None, attrs: Mapping[str, Any] | None = None
    ) -> RiderChangeset:
        """Validate ``attrs`` against ``rider`` without writing anything."""
        return build_changeset(rider, attrs, self.settings.phone_region)

    def create_rider(self, attrs: Mapping[str, Any] | None = None) -> Rider:
        """Insert a rider and publish ``rider_created``.

        Raises:
            RiderValidationError: If the attributes are invalid or the email
                or phone is already taken. Nothing is published.
        """
        changeset = self.change_rider(None, attrs)
        rider = self._persist(changeset, Rider())
        with log_rider_context(rider.id):
            logger.info("Created rider %s", rider.id)
            self._broadcast(RiderEventKind.CREATED, rider)
        return rider

    def update_rider(self, rider: Rider, attrs: Mapping[str, Any]) -> Rider:
        """Apply ``attrs`` to ``rider`` and publish ``rider_updated``.

        Raises:
            RiderValidationError: If the attributes are invalid or the email
                or phone is already taken. Nothing is published.
        """
        changeset = self.change_rider(rider, attrs)
        with log_rider_context(rider.id):
            self._persist(changeset, rider)
            logger.info("Updated rider %s fields %s", rider.id, sorted(changeset.changes))
            self._broadcast(RiderEventKind.UPDATED, rider)
        return rider

    def delete_rider(self, rider: Rider) -> Rider:
        # No rider_deleted event exists; subscribers only see creates and updates
        rider_id = rider.id
        with transaction(self.session):
            self.session.delete(rider)
        logger.info("Deleted rider %s", rider_id, extra={"rider_id": rider_id})
        return rider

    def subscribe(self) -> Subscription:
        return self.bus.subscribe(TOPIC_RIDERS)

    def _require(self, rider: Rider | None, message: str) -> Rider:
        if rider is None:
            raise NotFoundError(message)
        return rider

    def _normalize_email(self, email: str) -> str:
        return email.strip().lower()

    def _lookup_phone(self, phone: str) -> Rider | None:
        return self.get_by(phone=canonicalize_phone(phone, self.settings.phone_region))

    def _persist(self, changeset: RiderChangeset, rider: Rider) -> Rider:
        if not changeset.valid:
            logger.info(
                "Rejected rider attributes: %s",
                ", ".join(error["field"] for error in changeset.errors),
            )
            raise RiderValidationError("Invalid rider attributes", changeset)

        try:
            with transaction(self.session):
                self.session.add(changeset.apply(rider))
        except IntegrityError as e:
            taken = self._taken_fields(changeset, rider)
            if not taken:
                raise
            changeset.errors.extend(
                {"field": field, "message": "has already been taken"} for field in taken
            )
            raise RiderValidationError("Rider email or phone is already taken", changeset) from e

        self.session.refresh(rider)
        return rider

    def _taken_fields(self, changeset: RiderChangeset, rider: Rider) -> list[str]:
        taken = []
        for field in UNIQUE_FIELDS:
            value = changeset.changes.get(field)
            if value is None:
                continue
            existing = self.get_by(**{field: value})
            if existing is not None and existing is not rider:
                taken.append(field)
        return taken

    def _broadcast(self, kind: RiderEventKind, rider: Rider) -> None:
        self.bus.publish(TOPIC_RIDERS, RiderEvent.from_rider(kind, rider))
