from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from app.fairgroup.access import require_subcommittee_leadership
from app.fairgroup.errors import InvalidOperation, NotFound
from app.fairgroup.models import Member, MemberSubcommittee, Subcommittee
from app.fairgroup.utils import clean_str, isoformat

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.fairgroup.access import SessionContext

logger = logging.getLogger(__name__)


def _person(member: Member | None) -> dict | None:
    if member is None:
        return None
    return {"id": member.id, "name": member.full_name, "email": member.email}


def serialize_subcommittee(subcommittee: Subcommittee, *, include_members: bool = False) -> dict:
    data = {
        "id": subcommittee.id,
        "name": subcommittee.name,
        "description": subcommittee.description,
        "meeting_schedule": subcommittee.meeting_schedule,
        "chair_id": subcommittee.chair_id,
        "vice_chair_id": subcommittee.vice_chair_id,
        "created_at": isoformat(subcommittee.created_at),
        "chair": _person(subcommittee.chair),
        "vice_chair": _person(subcommittee.vice_chair),
    }
    if include_members:
        data["members"] = [_person(m) for m in subcommittee.members]
    return data


def list_subcommittees(s: "Session") -> list[Subcommittee]:
    return s.query(Subcommittee).order_by(Subcommittee.name.asc()).all()


def get_subcommittee(s: "Session", subcommittee_id: int) -> Subcommittee:
    subcommittee = s.get(Subcommittee, subcommittee_id)
    if subcommittee is None:
        raise NotFound("Subcommittee not found")
    return subcommittee


def update_subcommittee(s: "Session", ctx: "SessionContext", subcommittee_id: int, payload: dict) -> Subcommittee:
    """Leadership edit of the public-facing fields. Name and leadership are admin data."""
    subcommittee = require_subcommittee_leadership(s, ctx, subcommittee_id)
    subcommittee.description = clean_str(payload.get("description"))
    subcommittee.meeting_schedule = clean_str(payload.get("meeting_schedule"))
    logger.info("Subcommittee updated (subcommittee_id=%s by member_id=%s)", subcommittee.id, ctx.member_id)
    return subcommittee


def is_enrolled(s: "Session", member_id: int, subcommittee_id: int, *, lock: bool = False) -> bool:
    stmt = select(MemberSubcommittee).where(
        MemberSubcommittee.member_id == member_id,
        MemberSubcommittee.subcommittee_id == subcommittee_id,
    )
    if lock:
        stmt = stmt.with_for_update()
    return s.execute(stmt).scalar_one_or_none() is not None


def add_member(s: "Session", ctx: "SessionContext", subcommittee_id: int, member_id: int) -> MemberSubcommittee:
    require_subcommittee_leadership(s, ctx, subcommittee_id)
    if s.get(Member, member_id) is None:
        raise NotFound("Member not found")
    if is_enrolled(s, member_id, subcommittee_id):
        raise InvalidOperation("Member already in this subcommittee")

    row = MemberSubcommittee(member_id=member_id, subcommittee_id=subcommittee_id)
    s.add(row)
    logger.info(
        "Roster add (subcommittee_id=%s member_id=%s by member_id=%s)", subcommittee_id, member_id, ctx.member_id
    )
    return row


def remove_member(s: "Session", ctx: "SessionContext", subcommittee_id: int, member_id: int) -> None:
    require_subcommittee_leadership(s, ctx, subcommittee_id)
    row = s.get(MemberSubcommittee, (member_id, subcommittee_id))
    if row is None:
        raise NotFound("Member not in this subcommittee")
    s.delete(row)
    logger.info(
        "Roster remove (subcommittee_id=%s member_id=%s by member_id=%s)", subcommittee_id, member_id, ctx.member_id
    )
