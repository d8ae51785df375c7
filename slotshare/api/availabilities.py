"""Availability API endpoints."""

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from slotshare.api.deps import get_caller
from slotshare.database import get_db
from slotshare.errors import AvailabilityError, NotOwner
from slotshare.models.availability import Availability as AvailabilityModel
from slotshare.schemas.availability import (
    Availability,
    AvailabilityCreate,
    AvailabilityUpdate,
    BusyTimesUpdate,
    RegeneratedId,
)
from slotshare.services.availability import AvailabilityService, get_availability_service
from slotshare.services.calendar_sync import (
    CalendarSyncError,
    CalendarSyncService,
    get_calendar_sync_service,
)

router = APIRouter(prefix="/api/v1/availabilities", tags=["availabilities"])


def _http_error(error: AvailabilityError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.reason)


@router.post("/", response_model=Availability, status_code=201)
def create_availability(
    availability: AvailabilityCreate,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityModel:
    """Create a new availability owned by the caller."""
    try:
        return service.create(db, caller, availability)
    except AvailabilityError as e:
        raise _http_error(e)


@router.get("/", response_model=list[Availability])
def list_availabilities(
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> list[AvailabilityModel]:
    """List the caller's availabilities in display order."""
    return service.list_for_owner(db, caller)


@router.get("/{availability_id}", response_model=Availability)
def get_availability(
    availability_id: str,
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityModel:
    """Get an availability by its share ID."""
    try:
        return service.get(db, availability_id)
    except AvailabilityError as e:
        raise _http_error(e)


@router.patch("/{availability_id}", response_model=Availability)
def update_availability(
    availability_id: str,
    availability_update: AvailabilityUpdate,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityModel:
    """Update an availability's title, description, slots or timezone."""
    try:
        return service.update(db, caller, availability_id, availability_update)
    except AvailabilityError as e:
        raise _http_error(e)


@router.delete("/{availability_id}", status_code=204)
def delete_availability(
    availability_id: str,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> None:
    """Delete an availability."""
    try:
        service.delete(db, caller, availability_id)
    except AvailabilityError as e:
        raise _http_error(e)


@router.post("/{availability_id}/regenerate", response_model=RegeneratedId)
def regenerate_availability_id(
    availability_id: str,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> RegeneratedId:
    """Move an availability to a new share ID, invalidating the old link."""
    try:
        new_id = service.regenerate_id(db, caller, availability_id)
    except AvailabilityError as e:
        raise _http_error(e)
    return RegeneratedId(id=new_id, previous_id=availability_id)


@router.post("/{availability_id}/favorite", status_code=204)
def set_favorite_availability(
    availability_id: str,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> None:
    """Make an availability the caller's favorite and re-rank the others."""
    try:
        service.set_favorite(db, caller, availability_id)
    except AvailabilityError as e:
        raise _http_error(e)


@router.put("/{availability_id}/busy-times", response_model=Availability)
def update_busy_times(
    availability_id: str,
    request: BusyTimesUpdate,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityModel:
    """Replace an availability's busy times."""
    try:
        return service.update_busy_times(db, caller, availability_id, request.busy_times)
    except AvailabilityError as e:
        raise _http_error(e)


@router.post("/{availability_id}/busy-times/sync", response_model=Availability)
async def sync_busy_times(
    availability_id: str,
    x_calendar_token: str = Header(...),
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db),
    service: AvailabilityService = Depends(get_availability_service),
    calendar: CalendarSyncService = Depends(get_calendar_sync_service),
) -> AvailabilityModel:
    """Refresh busy times from the caller's Google Calendar.

    Ownership is checked before the calendar fetch and checked again when
    the result is stored, since the record may change while the fetch is
    in flight.
    """
    try:
        availability = service.get(db, availability_id)
        if availability.owner != caller:
            raise NotOwner("Only the owner can update busy times")
    except AvailabilityError as e:
        raise _http_error(e)

    try:
        busy_times = await calendar.fetch_busy_times(x_calendar_token)
    except CalendarSyncError as e:
        raise HTTPException(status_code=502, detail=str(e))

    # Drop state loaded before the fetch so ownership is re-read from the store
    db.expire_all()

    try:
        return service.update_busy_times(db, caller, availability_id, busy_times)
    except AvailabilityError as e:
        raise _http_error(e)
