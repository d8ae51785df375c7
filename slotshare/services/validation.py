"""Validation of availability titles, descriptions and weekly time slots.

All checks are pure: they raise ``ValidationFailure`` with the first problem
found and never touch stored state.
"""

from collections.abc import Sequence

from slotshare.errors import ValidationFailure
from slotshare.schemas.availability import TimeSlot

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MINUTES_PER_DAY = 1440
SATURDAY = 6


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def validate_title(title: str) -> None:
    """Reject empty titles and titles over 100 characters."""
    if not title or len(title) > MAX_TITLE_LENGTH:
        raise ValidationFailure(f"title must be 1-{MAX_TITLE_LENGTH} characters")


def validate_description(description: str) -> None:
    """Reject descriptions over 500 characters."""
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationFailure(f"description must be 0-{MAX_DESCRIPTION_LENGTH} characters")


def validate_time_slot(slot: TimeSlot) -> None:
    """Check one slot's day and half-open minute interval."""
    if not 0 <= slot.day_of_week <= SATURDAY:
        raise ValidationFailure("day_of_week must be 0-6 (Sunday-Saturday)")

    if not 0 <= slot.start_time < MINUTES_PER_DAY:
        raise ValidationFailure("start_time must be 0-1439 (minutes in a day)")

    if not 0 <= slot.end_time < MINUTES_PER_DAY:
        raise ValidationFailure("end_time must be 0-1439 (minutes in a day)")

    if slot.start_time >= slot.end_time:
        raise ValidationFailure("start_time must be less than end_time")


def check_slot_overlaps(slots: Sequence[TimeSlot]) -> None:
    """Reject any two slots on the same day whose intervals intersect.

    Pairwise comparison; slot sets are a handful of weekly windows.
    """
    for i, first in enumerate(slots):
        for second in slots[i + 1 :]:
            if first.day_of_week != second.day_of_week:
                continue
            if first.start_time < second.end_time and second.start_time < first.end_time:
                raise ValidationFailure(
                    f"Overlapping slots on day {first.day_of_week}: "
                    f"{_format_minutes(first.start_time)}-{_format_minutes(first.end_time)} and "
                    f"{_format_minutes(second.start_time)}-{_format_minutes(second.end_time)}"
                )


def validate_slots(slots: Sequence[TimeSlot]) -> None:
    """Validate a complete replacement slot set."""
    if not slots:
        raise ValidationFailure("at least 1 slot is required")

    for slot in slots:
        validate_time_slot(slot)

    check_slot_overlaps(slots)


def validate_availability(title: str, description: str, slots: Sequence[TimeSlot]) -> None:
    """Validate the fields of a new availability."""
    validate_title(title)
    validate_description(description)
    validate_slots(slots)
