"""Rider directory: search, ranking and lifecycle notifications for riders."""

from .core.exceptions import (
    DirectoryError,
    InvalidPhoneNumberError,
    NotFoundError,
    RiderValidationError,
)
from .db.repositories.rider_repository import RiderRepository
from .pubsub.bus import NotificationBus, Subscription
from .pubsub.channels import TOPIC_RIDERS, RiderEvent, RiderEventKind
from .runtime import DirectoryRuntime
from .search.options import SearchOptions

__all__ = [
    "DirectoryRuntime",
    "RiderRepository",
    "SearchOptions",
    "NotificationBus",
    "Subscription",
    "RiderEvent",
    "RiderEventKind",
    "TOPIC_RIDERS",
    "DirectoryError",
    "NotFoundError",
    "InvalidPhoneNumberError",
    "RiderValidationError",
]
