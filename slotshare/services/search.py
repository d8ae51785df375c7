"""Availability search by owner, email and username, single and batched."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from slotshare.models.availability import Availability as AvailabilityModel
from slotshare.services.availability import AvailabilityService, get_availability_service


class SearchService:
    """Resolve lookup keys to an owner and list that owner's availabilities."""

    def __init__(self, availabilities: AvailabilityService) -> None:
        self.availabilities = availabilities
        self.lookup = availabilities.lookup

    def _list_or_empty(self, db: Session, owner: str | None) -> list[AvailabilityModel]:
        if owner is None:
            return []
        return self.availabilities.list_for_owner(db, owner)

    def by_owner(self, db: Session, owner: str) -> list[AvailabilityModel]:
        return self.availabilities.list_for_owner(db, owner)

    def by_email(self, db: Session, email: str) -> list[AvailabilityModel]:
        return self._list_or_empty(db, self.lookup.owner_for_email(email))

    def by_username(self, db: Session, username: str) -> list[AvailabilityModel]:
        return self._list_or_empty(db, self.lookup.owner_for_username(username))

    def by_emails(self, db: Session, emails: Iterable[str]) -> list[list[AvailabilityModel]]:
        """One result list per email, in input order; unknown emails yield ``[]``."""
        return [self.by_email(db, email) for email in emails]

    def by_usernames(
        self, db: Session, usernames: Iterable[str]
    ) -> list[list[AvailabilityModel]]:
        """One result list per username, in input order; unknown usernames yield ``[]``."""
        return [self.by_username(db, username) for username in usernames]


def get_search_service() -> SearchService:
    """Get a search service backed by the process-wide lookup index."""
    return SearchService(get_availability_service())
