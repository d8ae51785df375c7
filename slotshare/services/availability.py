"""Availability store operations: CRUD, ID regeneration, busy times and favorites."""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from slotshare.errors import EmptyCollection, NotFound, NotOwner
from slotshare.models.availability import Availability as AvailabilityModel
from slotshare.models.owner_index import OwnerIndex
from slotshare.schemas.availability import AvailabilityCreate, AvailabilityUpdate, BusyTimeBlock
from slotshare.services.clock import MonotonicClock, get_clock
from slotshare.services.identifiers import IdGenerator, get_id_generator
from slotshare.services.lookup import LookupIndex, get_lookup_index
from slotshare.services.validation import (
    validate_availability,
    validate_description,
    validate_slots,
    validate_title,
)

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service owning the availability store and the per-owner index.

    Every mutating operation validates first, then stages all of its store
    and index writes and commits them together, so a failure leaves no
    partial state behind.
    """

    def __init__(
        self,
        lookup: LookupIndex,
        id_generator: IdGenerator | None = None,
        clock: MonotonicClock | None = None,
    ) -> None:
        self.lookup = lookup
        self.id_generator = id_generator or get_id_generator()
        self.clock = clock or get_clock()

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

    def _new_id(self, db: Session) -> str:
        return self.id_generator.generate(
            lambda candidate: db.get(AvailabilityModel, candidate) is not None
        )

    def _lock_owner_index(self, db: Session, owner: str) -> OwnerIndex | None:
        return db.get(OwnerIndex, owner, with_for_update=True)

    def _get_owned(
        self, db: Session, caller: str, availability_id: str, action: str
    ) -> AvailabilityModel:
        availability = self.get(db, availability_id)
        if availability.owner != caller:
            raise NotOwner(f"Only the owner can {action}")
        return availability

    def _fetch_many(self, db: Session, ids: Sequence[str]) -> dict[str, AvailabilityModel]:
        if not ids:
            return {}
        rows = db.scalars(select(AvailabilityModel).where(AvailabilityModel.id.in_(ids)))
        return {availability.id: availability for availability in rows}

    def create(self, db: Session, caller: str, request: AvailabilityCreate) -> AvailabilityModel:
        """Create an availability owned by ``caller``.

        The owner's first availability becomes their favorite; later ones
        are ranked after the existing ones.
        """
        validate_availability(request.title, request.description, request.slots)

        availability_id = self._new_id(db)
        index = self._lock_owner_index(db, caller)
        if index is None:
            index = OwnerIndex(owner=caller, availability_ids=[])
            db.add(index)

        display_order = len(index.availability_ids)
        now = self.clock.now()

        availability = AvailabilityModel(
            id=availability_id,
            owner=caller,
            owner_email=request.owner_email,
            owner_name=request.owner_name,
            title=request.title,
            description=request.description,
            slots=[slot.model_dump() for slot in request.slots],
            timezone=request.timezone,
            busy_times=(
                [block.model_dump() for block in request.busy_times]
                if request.busy_times is not None
                else None
            ),
            created_at=now,
            updated_at=now,
            is_favorite=display_order == 0,
            display_order=display_order,
        )
        db.add(availability)
        index.availability_ids = [*index.availability_ids, availability.id]

        self._commit(db)
        db.refresh(availability)

        self.lookup.record(caller, email=request.owner_email, username=request.owner_name)

        logger.info(f"Created availability {availability.id} for {caller}")
        return availability

    def get(self, db: Session, availability_id: str) -> AvailabilityModel:
        """Get an availability by ID. Reads are public."""
        availability = db.get(AvailabilityModel, availability_id)
        if availability is None:
            raise NotFound()
        return availability

    def update(
        self, db: Session, caller: str, availability_id: str, request: AvailabilityUpdate
    ) -> AvailabilityModel:
        """Apply the fields present in ``request``, each validated like on create."""
        availability = self._get_owned(db, caller, availability_id, "update this availability")

        if request.title is not None:
            validate_title(request.title)
        if request.description is not None:
            validate_description(request.description)
        if request.slots is not None:
            validate_slots(request.slots)

        if request.title is not None:
            availability.title = request.title
        if request.description is not None:
            availability.description = request.description
        if request.slots is not None:
            availability.slots = [slot.model_dump() for slot in request.slots]
        if request.timezone is not None:
            availability.timezone = request.timezone

        availability.updated_at = self.clock.now()

        self._commit(db)
        db.refresh(availability)

        logger.info(f"Updated availability {availability_id}")
        return availability

    def delete(self, db: Session, caller: str, availability_id: str) -> None:
        """Delete an availability and drop it from the owner index.

        Remaining display orders and the favorite flag are left as they are.
        """
        availability = self._get_owned(db, caller, availability_id, "delete this availability")

        index = self._lock_owner_index(db, caller)
        db.delete(availability)
        if index is not None:
            index.availability_ids = [
                existing for existing in index.availability_ids if existing != availability_id
            ]

        self._commit(db)

        logger.info(f"Deleted availability {availability_id}")

    def list_for_owner(self, db: Session, owner: str) -> list[AvailabilityModel]:
        """List an owner's availabilities in owner-index order.

        IDs in the index that are missing from the store are skipped.
        """
        index = db.get(OwnerIndex, owner)
        if index is None:
            return []

        records = self._fetch_many(db, index.availability_ids)
        return [
            records[availability_id]
            for availability_id in index.availability_ids
            if availability_id in records
        ]

    def regenerate_id(self, db: Session, caller: str, old_id: str) -> str:
        """Move an availability to a freshly minted ID, keeping its index position."""
        availability = self._get_owned(db, caller, old_id, "regenerate this availability ID")

        new_id = self._new_id(db)
        index = self._lock_owner_index(db, caller)

        availability.id = new_id
        availability.updated_at = self.clock.now()
        if index is not None:
            index.availability_ids = [
                new_id if existing == old_id else existing for existing in index.availability_ids
            ]

        self._commit(db)

        logger.info(f"Regenerated availability ID: {old_id} -> {new_id}")
        return new_id

    def update_busy_times(
        self, db: Session, caller: str, availability_id: str, busy_times: Sequence[BusyTimeBlock]
    ) -> AvailabilityModel:
        """Replace an availability's busy times wholesale."""
        availability = self._get_owned(db, caller, availability_id, "update busy times")

        availability.busy_times = [block.model_dump() for block in busy_times]
        availability.updated_at = self.clock.now()

        self._commit(db)
        db.refresh(availability)

        logger.info(
            f"Updated busy times for availability {availability_id} ({len(busy_times)} blocks)"
        )
        return availability

    def set_favorite(self, db: Session, caller: str, availability_id: str) -> None:
        """Make ``availability_id`` the caller's only favorite and re-rank the rest.

        The favorite takes display order 0; the others are numbered from 1
        in their existing owner-index order.
        """
        target = self._get_owned(db, caller, availability_id, "set favorite")

        index = self._lock_owner_index(db, caller)
        ids = list(index.availability_ids) if index is not None else []
        if not ids:
            raise EmptyCollection()

        records = self._fetch_many(db, ids)
        now = self.clock.now()

        for record in records.values():
            record.is_favorite = False
            record.updated_at = now

        target.is_favorite = True
        target.display_order = 0
        target.updated_at = now

        order = 1
        for existing in ids:
            if existing == availability_id or existing not in records:
                continue
            records[existing].display_order = order
            order += 1

        self._commit(db)

        logger.info(f"Set favorite availability {availability_id} for {caller}")


def get_availability_service() -> AvailabilityService:
    """Get an availability service bound to the process-wide lookup index."""
    return AvailabilityService(lookup=get_lookup_index())
