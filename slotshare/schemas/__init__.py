"""Pydantic schemas for request/response validation."""

from slotshare.schemas.availability import (
    Availability,
    AvailabilityCreate,
    AvailabilityUpdate,
    BusyTimeBlock,
    BusyTimesUpdate,
    RegeneratedId,
    TimeSlot,
)
from slotshare.schemas.search import EmailBatch, UsernameBatch

__all__ = [
    "Availability",
    "AvailabilityCreate",
    "AvailabilityUpdate",
    "BusyTimeBlock",
    "BusyTimesUpdate",
    "EmailBatch",
    "RegeneratedId",
    "TimeSlot",
    "UsernameBatch",
]
