from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_, select

from app.fairgroup.access import require_event_management
from app.fairgroup.errors import NotFound, ValidationError
from app.fairgroup.models import MemberSubcommittee
from app.fairgroup.modules.events.models import Event
from app.fairgroup.utils import clean_str, isoformat, parse_datetime, parse_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.fairgroup.access import SessionContext

logger = logging.getLogger(__name__)

FILTER_MY_SUBCOMMITTEES = "my-subcommittees"


def serialize_event(event: Event) -> dict:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "start_datetime": isoformat(event.start_datetime),
        "end_datetime": isoformat(event.end_datetime),
        "location": event.location,
        "associated_subcommittee_id": event.associated_subcommittee_id,
        "subcommittee_name": event.subcommittee.name if event.subcommittee else None,
        "created_by": event.created_by,
        "created_at": isoformat(event.created_at),
    }


def list_events(s: "Session", ctx: "SessionContext", event_filter: str | None = None) -> list[Event]:
    """
    All events by start time. With the my-subcommittees filter, only group-wide
    events and those of subcommittees the caller belongs to.
    """
    q = s.query(Event)
    if event_filter == FILTER_MY_SUBCOMMITTEES:
        mine = select(MemberSubcommittee.subcommittee_id).where(MemberSubcommittee.member_id == ctx.member_id)
        q = q.filter(
            or_(
                Event.associated_subcommittee_id.in_(mine),
                Event.associated_subcommittee_id.is_(None),
            )
        )
    return q.order_by(Event.start_datetime.asc(), Event.id.asc()).all()


def get_event(s: "Session", event_id: int) -> Event:
    event = s.get(Event, event_id)
    if event is None:
        raise NotFound("Event not found")
    return event


def create_event(s: "Session", ctx: "SessionContext", payload: dict) -> Event:
    """Create an event after the admin / leadership check for its scope."""
    subcommittee_id = parse_int(payload.get("associated_subcommittee_id"), "associated_subcommittee_id", required=False)

    event = Event(associated_subcommittee_id=subcommittee_id, created_by=ctx.member_id)

    # Authorization first so an unauthorized caller learns nothing from field errors.
    require_event_management(s, ctx, event)

    event.title = clean_str(payload.get("title")) or ""
    event.description = clean_str(payload.get("description"))
    event.start_datetime = parse_datetime(payload.get("start_datetime"), "start_datetime")
    event.end_datetime = parse_datetime(payload.get("end_datetime"), "end_datetime")
    event.location = clean_str(payload.get("location"))

    errors = []
    if not event.title:
        errors.append("title is required.")
    if event.start_datetime is None:
        errors.append("start_datetime is required.")
    if event.start_datetime and event.end_datetime and event.end_datetime < event.start_datetime:
        errors.append("end_datetime must not be before start_datetime.")
    if errors:
        raise ValidationError(" ".join(errors))

    s.add(event)
    s.flush()
    logger.info(
        "Event created (event_id=%s subcommittee_id=%s by member_id=%s)",
        event.id,
        subcommittee_id,
        ctx.member_id,
    )
    return event
