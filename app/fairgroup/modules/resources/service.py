from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from app.fairgroup.errors import NotFound, ValidationError
from app.fairgroup.models import Member, Subcommittee
from app.fairgroup.modules.resources.models import Resource
from app.fairgroup.utils import clean_str, isoformat, parse_int

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from app.fairgroup.access import SessionContext

logger = logging.getLogger(__name__)


def serialize_resource(resource: Resource, created_by_name: str | None = None) -> dict:
    data = {
        "id": resource.id,
        "title": resource.title,
        "description": resource.description,
        "url": resource.url,
        "category": resource.category,
        "scope": resource.scope,
        "subcommittee_id": resource.subcommittee_id,
        "created_by": resource.created_by,
        "created_at": isoformat(resource.created_at),
    }
    if created_by_name is not None:
        data["created_by_name"] = created_by_name
    return data


def list_resources(s: "Session", *, scope: str | None = None, subcommittee_id: int | None = None) -> list[tuple[Resource, str]]:
    stmt = select(Resource, Member).join(Member, Resource.created_by == Member.id)
    if scope:
        stmt = stmt.where(Resource.scope == scope)
    if subcommittee_id is not None:
        stmt = stmt.where(Resource.subcommittee_id == subcommittee_id)
    stmt = stmt.order_by(Resource.created_at.desc(), Resource.id.desc())
    return [(r, m.full_name) for r, m in s.execute(stmt).all()]


def validate_resource_payload(payload: dict) -> list[str]:
    errors = []
    if not clean_str(payload.get("title")):
        errors.append("title is required.")
    url = clean_str(payload.get("url"))
    if url and not url.lower().startswith(("http://", "https://")):
        errors.append("url must start with http:// or https://.")
    return errors


def create_resource(s: "Session", ctx: "SessionContext", payload: dict) -> Resource:
    errors = validate_resource_payload(payload)
    if errors:
        raise ValidationError(" ".join(errors))

    subcommittee_id = parse_int(payload.get("subcommittee_id"), "subcommittee_id", required=False)
    if subcommittee_id is not None and s.get(Subcommittee, subcommittee_id) is None:
        raise NotFound("Subcommittee not found")

    resource = Resource(
        title=clean_str(payload.get("title")),
        description=clean_str(payload.get("description")),
        url=clean_str(payload.get("url")),
        category=clean_str(payload.get("category")),
        scope=clean_str(payload.get("scope")),
        subcommittee_id=subcommittee_id,
        created_by=ctx.member_id,
    )
    s.add(resource)
    s.flush()
    logger.info("Resource created (resource_id=%s by member_id=%s)", resource.id, ctx.member_id)
    return resource
