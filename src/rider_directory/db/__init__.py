"""Database persistence module."""

from .database import init_database
from .schema import Base, CampaignRider, Rider, Tag, riders_tags
from .transaction import transaction

__all__ = [
    "init_database",
    "Base",
    "Rider",
    "Tag",
    "CampaignRider",
    "riders_tags",
    "transaction",
]
