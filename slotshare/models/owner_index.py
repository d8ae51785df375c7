"""Owner index model."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from slotshare.database import Base


class OwnerIndex(Base):
    """Ordered list of availability IDs per owning account.

    The list order is the default listing order and the source of truth
    that ``display_order`` is re-derived from when a favorite is chosen.
    """

    __tablename__ = "owner_indexes"

    owner: Mapped[str] = mapped_column(String(255), primary_key=True)
    availability_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<OwnerIndex(owner='{self.owner}', count={len(self.availability_ids or [])})>"
