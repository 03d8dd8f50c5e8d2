from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.fairgroup.access import SessionContext
from app.fairgroup.auth import require_auth
from app.fairgroup.db import db_session
from app.fairgroup.modules.events.service import create_event, list_events, serialize_event
from app.fairgroup.utils import json_body

bp = Blueprint("events", __name__)


@bp.get("")
@require_auth
def events_list(ctx: SessionContext):
    s = db_session()
    event_filter = (request.args.get("filter") or "").strip() or None
    return jsonify([serialize_event(e) for e in list_events(s, ctx, event_filter)])


@bp.post("")
@require_auth
def events_create(ctx: SessionContext):
    s = db_session()
    event = create_event(s, ctx, json_body())
    s.commit()
    return jsonify(serialize_event(event)), 201
