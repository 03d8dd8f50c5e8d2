from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"
VALID_ROLES = (ROLE_MEMBER, ROLE_ADMIN)


class Base(DeclarativeBase):
    pass


class MemberSubcommittee(Base):
    __tablename__ = "member_subcommittees"
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id", ondelete="CASCADE"), primary_key=True)
    subcommittee_id: Mapped[int] = mapped_column(ForeignKey("subcommittees.id", ondelete="CASCADE"), primary_key=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_MEMBER)  # member, admin
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")  # active, inactive
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    subcommittees: Mapped[list["Subcommittee"]] = relationship(
        secondary="member_subcommittees",
        back_populates="members",
        lazy="selectin",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class Subcommittee(Base):
    __tablename__ = "subcommittees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    meeting_schedule: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Leadership is identity on these two columns; there is no separate roles table.
    chair_id: Mapped[int | None] = mapped_column(ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    vice_chair_id: Mapped[int | None] = mapped_column(ForeignKey("members.id", ondelete="SET NULL"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    chair: Mapped[Member | None] = relationship(foreign_keys=[chair_id], lazy="joined")
    vice_chair: Mapped[Member | None] = relationship(foreign_keys=[vice_chair_id], lazy="joined")
    members: Mapped[list[Member]] = relationship(
        secondary="member_subcommittees",
        back_populates="subcommittees",
        lazy="selectin",
        order_by="Member.last_name",
    )


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.fairgroup.modules.events.models import Event  # noqa: E402,F401
from app.fairgroup.modules.attendance.models import Attendance  # noqa: E402,F401
from app.fairgroup.modules.resources.models import Resource  # noqa: E402,F401
from app.fairgroup.modules.public.models import PublicContact  # noqa: E402,F401
