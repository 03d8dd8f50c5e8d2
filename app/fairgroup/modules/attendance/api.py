from __future__ import annotations

from flask import Blueprint, jsonify

from app.fairgroup.access import SessionContext
from app.fairgroup.auth import require_auth
from app.fairgroup.db import db_session
from app.fairgroup.modules.attendance.service import list_attendance, record_attendance, serialize_attendance
from app.fairgroup.utils import json_body

bp = Blueprint("attendance", __name__)


@bp.get("/<int:event_id>")
@require_auth
def attendance_list(ctx: SessionContext, event_id: int):
    s = db_session()
    return jsonify([serialize_attendance(a, m) for a, m in list_attendance(s, event_id)])


@bp.post("/<int:event_id>")
@require_auth
def attendance_record(ctx: SessionContext, event_id: int):
    s = db_session()
    row = record_attendance(s, ctx, event_id, json_body())
    s.commit()
    return jsonify(serialize_attendance(row))
