"""Availability model."""

from typing import Any

from sqlalchemy import JSON, BigInteger, Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from slotshare.database import Base


class Availability(Base):
    """Availability model for storing shareable weekly time windows.

    Slots are stored as a JSON list of ``{day_of_week, start_time, end_time}``
    objects (minutes since midnight, Sunday is day 0). Busy times are absolute
    epoch-second intervals supplied by the calendar sync.
    """

    __tablename__ = "availabilities"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    owner: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    timezone: Mapped[str] = mapped_column(String(100), nullable=False)
    slots: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    busy_times: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)  # epoch nanoseconds
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    __table_args__ = (
        Index("idx_availabilities_owner", "owner"),
        Index("idx_availabilities_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Availability(id='{self.id}', owner='{self.owner}', title='{self.title}')>"
