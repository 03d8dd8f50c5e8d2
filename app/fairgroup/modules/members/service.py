from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from app.fairgroup.errors import NotFound, ValidationError
from app.fairgroup.utils import clean_str, isoformat

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.fairgroup.access import SessionContext
    from app.fairgroup.models import Member

logger = logging.getLogger(__name__)


def serialize_profile(member: "Member") -> dict:
    return {
        "id": member.id,
        "first_name": member.first_name,
        "last_name": member.last_name,
        "email": member.email,
        "phone": member.phone,
        "role": member.role,
    }


def serialize_roster_entry(member: "Member") -> dict:
    """Admin roster row: profile plus status, timestamps and subcommittee names."""
    data = serialize_profile(member)
    data.update(
        {
            "status": member.status,
            "created_at": isoformat(member.created_at),
            "updated_at": isoformat(member.updated_at),
            "subcommittees": sorted(sc.name for sc in member.subcommittees),
        }
    )
    return data


def get_own_profile(s: "Session", ctx: "SessionContext") -> "Member":
    from app.fairgroup.models import Member

    member = s.get(Member, ctx.member_id)
    if member is None:
        raise NotFound("Member not found")
    return member


def update_own_profile(s: "Session", ctx: "SessionContext", payload: dict) -> "Member":
    """Self-service edit of name and phone. Email and role are not editable here."""
    member = get_own_profile(s, ctx)

    first_name = clean_str(payload.get("first_name"))
    last_name = clean_str(payload.get("last_name"))
    errors = []
    if "first_name" in payload and not first_name:
        errors.append("first_name cannot be empty.")
    if "last_name" in payload and not last_name:
        errors.append("last_name cannot be empty.")
    if errors:
        raise ValidationError(" ".join(errors))

    if first_name:
        member.first_name = first_name
    if last_name:
        member.last_name = last_name
    if "phone" in payload:
        member.phone = clean_str(payload.get("phone"))
    member.updated_at = datetime.utcnow()

    logger.info("Member profile updated (member_id=%s)", member.id)
    return member


def list_members(s: "Session") -> list["Member"]:
    from app.fairgroup.models import Member

    return s.query(Member).order_by(Member.last_name.asc(), Member.first_name.asc()).all()
