from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.fairgroup.models import Base, Subcommittee


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        Index("idx_events_start_datetime", "start_datetime"),
        Index("idx_events_subcommittee", "associated_subcommittee_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_datetime: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_datetime: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # NULL means a group-wide event.
    associated_subcommittee_id: Mapped[int | None] = mapped_column(
        ForeignKey("subcommittees.id", ondelete="SET NULL"), nullable=True
    )

    created_by: Mapped[int | None] = mapped_column(ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    subcommittee: Mapped[Subcommittee | None] = relationship(lazy="joined")
