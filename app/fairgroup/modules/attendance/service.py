"""
Attendance recording for subcommittee meetings.

One row per (event, member). Recording again overwrites status, notes,
recorder and timestamp in place; no history of earlier values is kept.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from app.fairgroup.access import require_subcommittee_leadership
from app.fairgroup.errors import InvalidOperation, ValidationError
from app.fairgroup.models import Member
from app.fairgroup.modules.attendance.models import Attendance
from app.fairgroup.modules.events.service import get_event
from app.fairgroup.modules.subcommittees.service import is_enrolled
from app.fairgroup.utils import clean_str, isoformat, parse_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.fairgroup.access import SessionContext

logger = logging.getLogger(__name__)


def serialize_attendance(row: Attendance, member: Member | None = None) -> dict:
    data = {
        "id": row.id,
        "event_id": row.event_id,
        "member_id": row.member_id,
        "status": row.status,
        "notes": row.notes,
        "recorded_by": row.recorded_by,
        "created_at": isoformat(row.created_at),
    }
    if member is not None:
        data.update({"first_name": member.first_name, "last_name": member.last_name, "email": member.email})
    return data


def list_attendance(s: "Session", event_id: int) -> list[tuple[Attendance, Member]]:
    stmt = (
        select(Attendance, Member)
        .join(Member, Attendance.member_id == Member.id)
        .where(Attendance.event_id == event_id)
        .order_by(Member.last_name.asc(), Member.first_name.asc())
    )
    return [(a, m) for a, m in s.execute(stmt).all()]


def _upsert_statement(s: "Session", values: dict):
    dialect = s.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = pg_insert(Attendance).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite_insert(Attendance).values(**values)
    else:
        raise RuntimeError(f"Attendance upsert not supported on dialect {dialect!r}")
    return stmt.on_conflict_do_update(
        index_elements=[Attendance.event_id, Attendance.member_id],
        set_={
            "status": stmt.excluded.status,
            "notes": stmt.excluded.notes,
            "recorded_by": stmt.excluded.recorded_by,
            "created_at": stmt.excluded.created_at,
        },
    )


def record_attendance(s: "Session", ctx: "SessionContext", event_id: int, payload: dict) -> Attendance:
    """
    Record or overwrite one member's attendance at a subcommittee meeting.

    Order of checks: event exists (404), event belongs to a subcommittee (400),
    caller leads that subcommittee or is admin (403), payload is valid (400),
    member is enrolled (400). The enrollment row is locked until commit so it
    cannot be removed between the check and the write.
    """
    event = get_event(s, event_id)
    subcommittee_id = event.associated_subcommittee_id
    if subcommittee_id is None:
        raise InvalidOperation("Attendance only for subcommittee meetings")

    require_subcommittee_leadership(s, ctx, subcommittee_id)

    member_id = parse_int(payload.get("memberId"), "memberId")
    status = clean_str(payload.get("status"))
    if not status:
        raise ValidationError("status is required")

    if not is_enrolled(s, member_id, subcommittee_id, lock=True):
        raise InvalidOperation("Member not in this subcommittee")

    s.execute(
        _upsert_statement(
            s,
            {
                "event_id": event.id,
                "member_id": member_id,
                "status": status,
                "notes": clean_str(payload.get("notes")),
                "recorded_by": ctx.member_id,
                "created_at": datetime.utcnow(),
            },
        )
    )
    row = s.execute(
        select(Attendance)
        .where(Attendance.event_id == event.id, Attendance.member_id == member_id)
        .execution_options(populate_existing=True)
    ).scalar_one()
    logger.info(
        "Attendance recorded (event_id=%s member_id=%s status=%s by member_id=%s)",
        event.id,
        member_id,
        status,
        ctx.member_id,
    )
    return row
