"""Availability schemas."""

from pydantic import BaseModel, ConfigDict, NonNegativeInt


class TimeSlot(BaseModel):
    """Recurring weekly window, minutes since midnight, end exclusive."""

    day_of_week: NonNegativeInt  # 0=Sunday ... 6=Saturday
    start_time: NonNegativeInt
    end_time: NonNegativeInt


class BusyTimeBlock(BaseModel):
    """Already-occupied interval in epoch seconds."""

    start_time: NonNegativeInt
    end_time: NonNegativeInt


class AvailabilityBase(BaseModel):
    """Base availability schema."""

    title: str
    description: str = ""
    slots: list[TimeSlot]
    timezone: str


class AvailabilityCreate(AvailabilityBase):
    """Schema for creating an availability."""

    owner_email: str | None = None
    owner_name: str | None = None
    busy_times: list[BusyTimeBlock] | None = None


class AvailabilityUpdate(BaseModel):
    """Schema for updating an availability. Absent fields are left unchanged."""

    title: str | None = None
    description: str | None = None
    slots: list[TimeSlot] | None = None
    timezone: str | None = None


class BusyTimesUpdate(BaseModel):
    """Schema for replacing an availability's busy times."""

    busy_times: list[BusyTimeBlock]


class Availability(AvailabilityBase):
    """Schema for availability response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    owner_email: str | None = None
    owner_name: str | None = None
    busy_times: list[BusyTimeBlock] | None = None
    created_at: int
    updated_at: int
    is_favorite: bool
    display_order: int


class RegeneratedId(BaseModel):
    """Schema for an ID regeneration result."""

    id: str
    previous_id: str
