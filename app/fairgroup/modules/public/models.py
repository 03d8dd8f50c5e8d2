from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.fairgroup.models import Base


class PublicContact(Base):
    """Contact details left by a visitor through the public signup form."""

    __tablename__ = "public_contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    county_or_city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    system_impact: Mapped[str] = mapped_column(String(32), nullable=False)  # Yes, No, Prefer not to say
    involvement_interest: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
