from __future__ import annotations

from flask import Blueprint, jsonify

from app.fairgroup.access import SessionContext, require_admin
from app.fairgroup.auth import require_auth
from app.fairgroup.db import db_session
from app.fairgroup.modules.members.service import (
    get_own_profile,
    list_members,
    serialize_profile,
    serialize_roster_entry,
    update_own_profile,
)
from app.fairgroup.utils import json_body

bp = Blueprint("members", __name__)


@bp.get("/me")
@require_auth
def me_get(ctx: SessionContext):
    s = db_session()
    return jsonify(serialize_profile(get_own_profile(s, ctx)))


@bp.put("/me")
@require_auth
def me_put(ctx: SessionContext):
    s = db_session()
    member = update_own_profile(s, ctx, json_body())
    s.commit()
    return jsonify(serialize_profile(member))


@bp.get("")
@require_auth
def members_list(ctx: SessionContext):
    require_admin(ctx)
    s = db_session()
    return jsonify([serialize_roster_entry(m) for m in list_members(s)])
