from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.fairgroup.access import SessionContext
from app.fairgroup.auth import require_auth
from app.fairgroup.db import db_session
from app.fairgroup.models import Member
from app.fairgroup.modules.resources.service import create_resource, list_resources, serialize_resource
from app.fairgroup.utils import clean_str, json_body, parse_int

bp = Blueprint("resources", __name__)


@bp.get("")
@require_auth
def resources_list(ctx: SessionContext):
    s = db_session()
    scope = clean_str(request.args.get("scope"))
    subcommittee_id = parse_int(request.args.get("subcommittee_id"), "subcommittee_id", required=False)
    rows = list_resources(s, scope=scope, subcommittee_id=subcommittee_id)
    return jsonify([serialize_resource(r, name) for r, name in rows])


@bp.post("")
@require_auth
def resources_create(ctx: SessionContext):
    s = db_session()
    resource = create_resource(s, ctx, json_body())
    s.commit()
    creator = s.get(Member, ctx.member_id)
    return jsonify(serialize_resource(resource, creator.full_name if creator else None)), 201
