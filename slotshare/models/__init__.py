"""SQLAlchemy ORM models."""

from slotshare.models.availability import Availability
from slotshare.models.owner_index import OwnerIndex

__all__ = [
    "Availability",
    "OwnerIndex",
]
