"""Pub/sub topic definitions and event payloads for rider lifecycle events."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from rider_directory.db.schema import Rider

# Topic names
TOPIC_RIDERS = "riders"

ALL_TOPICS = [TOPIC_RIDERS]


class RiderEventKind(str, Enum):
    """Lifecycle events published on the riders topic."""

    CREATED = "rider_created"
    UPDATED = "rider_updated"


class RiderSnapshot(BaseModel):
    """Immutable copy of a rider's attributes at publish time."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    pronouns: str | None
    postal: str | None
    city: str
    province: str
    country: str


@dataclass(frozen=True)
class RiderEvent:
    """A lifecycle event paired with the affected rider."""

    kind: RiderEventKind
    rider: Rider
    snapshot: RiderSnapshot
    published_at: datetime

    @classmethod
    def from_rider(cls, kind: RiderEventKind, rider: Rider) -> "RiderEvent":
        return cls(
            kind=kind,
            rider=rider,
            snapshot=RiderSnapshot.model_validate(rider),
            published_at=datetime.now(UTC),
        )

    def to_message(self) -> dict[str, Any]:
        """JSON-serializable form used when mirroring events off-process."""
        return {
            "event": self.kind.value,
            "rider": self.snapshot.model_dump(mode="json"),
            "published_at": self.published_at.isoformat(),
        }
