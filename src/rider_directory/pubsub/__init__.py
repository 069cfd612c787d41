"""Rider lifecycle notifications."""

from .bus import NotificationBus, Subscription
from .channels import ALL_TOPICS, TOPIC_RIDERS, RiderEvent, RiderEventKind, RiderSnapshot

__all__ = [
    "ALL_TOPICS",
    "TOPIC_RIDERS",
    "NotificationBus",
    "Subscription",
    "RiderEvent",
    "RiderEventKind",
    "RiderSnapshot",
]
