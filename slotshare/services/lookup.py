"""In-process lookup indices from owner email and username to owner."""

import logging
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.orm import Session

from slotshare.models.availability import Availability

logger = logging.getLogger(__name__)


class LookupIndex:
    """Best-effort email -> owner and username -> owner maps.

    Entries are last-write-wins and are not pruned when an availability is
    deleted. The maps live in process memory only; ``rebuild`` re-derives
    them from the availability store, e.g. after a restart.
    """

    def __init__(self) -> None:
        self._by_email: dict[str, str] = {}
        self._by_username: dict[str, str] = {}

    def record(self, owner: str, email: str | None = None, username: str | None = None) -> None:
        """Point the given email and username at ``owner``."""
        if email is not None:
            self._by_email[email] = owner
        if username is not None:
            self._by_username[username] = owner

    def owner_for_email(self, email: str) -> str | None:
        return self._by_email.get(email)

    def owner_for_username(self, username: str) -> str | None:
        return self._by_username.get(username)

    def rebuild(self, db: Session) -> None:
        """Re-derive both maps from the store, latest creation winning."""
        by_email: dict[str, str] = {}
        by_username: dict[str, str] = {}

        rows = db.execute(
            select(Availability.owner, Availability.owner_email, Availability.owner_name).order_by(
                Availability.created_at.asc()
            )
        )
        for owner, email, username in rows:
            if email is not None:
                by_email[email] = owner
            if username is not None:
                by_username[username] = owner

        self._by_email = by_email
        self._by_username = by_username
        logger.info(
            f"Rebuilt lookup indices: {len(by_email)} emails, {len(by_username)} usernames"
        )


@lru_cache
def get_lookup_index() -> LookupIndex:
    """Get the process-wide lookup index."""
    return LookupIndex()
