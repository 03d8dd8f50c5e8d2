"""
Access predicates: who may manage which subcommittee or event.

Every function here takes the caller's `SessionContext` explicitly. The
predicates are pure; the `require_*` guards resolve what they need from the
database and raise NotFound / Forbidden so a missing resource is never
reported as a denial.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from app.fairgroup.errors import Forbidden, NotFound
from app.fairgroup.models import ROLE_ADMIN, Subcommittee


@dataclass(frozen=True)
class SessionContext:
    """Authenticated identity for a single request."""

    member_id: int
    role: str


class HasLeadership(Protocol):
    chair_id: int | None
    vice_chair_id: int | None


class HasSubcommittee(Protocol):
    associated_subcommittee_id: int | None


SubcommitteeLookup = Callable[[int], HasLeadership]


def is_admin(ctx: SessionContext) -> bool:
    return ctx.role == ROLE_ADMIN


def is_subcommittee_leader(ctx: SessionContext, subcommittee: HasLeadership) -> bool:
    return ctx.member_id in (subcommittee.chair_id, subcommittee.vice_chair_id)


def can_manage_subcommittee(ctx: SessionContext, subcommittee: HasLeadership) -> bool:
    return is_admin(ctx) or is_subcommittee_leader(ctx, subcommittee)


def can_manage_event(ctx: SessionContext, event: HasSubcommittee, subcommittee_lookup: SubcommitteeLookup) -> bool:
    """
    Group-wide events are admin-only. Scoped events also admit the chair and
    vice-chair of the owning subcommittee.

    `subcommittee_lookup` must raise NotFound for an unknown id; it is always
    called for scoped events so a dangling reference surfaces as 404.
    """
    if event.associated_subcommittee_id is None:
        return is_admin(ctx)
    subcommittee = subcommittee_lookup(event.associated_subcommittee_id)
    return can_manage_subcommittee(ctx, subcommittee)


def subcommittee_lookup(s: Session) -> SubcommitteeLookup:
    """Build a lookup over `s` that raises NotFound for unknown subcommittees."""

    def _lookup(subcommittee_id: int) -> Subcommittee:
        subcommittee = s.get(Subcommittee, subcommittee_id)
        if subcommittee is None:
            raise NotFound("Subcommittee not found")
        return subcommittee

    return _lookup


def require_admin(ctx: SessionContext) -> None:
    if not is_admin(ctx):
        raise Forbidden("Admin access required")


def require_subcommittee_leadership(s: Session, ctx: SessionContext, subcommittee_id: int) -> Subcommittee:
    subcommittee = subcommittee_lookup(s)(subcommittee_id)
    if not can_manage_subcommittee(ctx, subcommittee):
        raise Forbidden("Only subcommittee leadership can perform this action")
    return subcommittee


def require_event_management(s: Session, ctx: SessionContext, event: HasSubcommittee) -> None:
    if can_manage_event(ctx, event, subcommittee_lookup(s)):
        return
    if event.associated_subcommittee_id is None:
        raise Forbidden("Only admins can create group-wide events")
    raise Forbidden("Only subcommittee leadership can create meetings")
