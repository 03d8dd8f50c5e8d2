from __future__ import annotations

from flask import Blueprint, jsonify

from app.fairgroup.access import SessionContext
from app.fairgroup.auth import require_auth
from app.fairgroup.db import db_session
from app.fairgroup.modules.subcommittees.service import (
    add_member,
    get_subcommittee,
    list_subcommittees,
    remove_member,
    serialize_subcommittee,
    update_subcommittee,
)
from app.fairgroup.utils import json_body, parse_int

bp = Blueprint("subcommittees", __name__)


@bp.get("")
@require_auth
def subcommittees_list(ctx: SessionContext):
    s = db_session()
    return jsonify([serialize_subcommittee(sc) for sc in list_subcommittees(s)])


@bp.get("/<int:subcommittee_id>")
@require_auth
def subcommittee_detail(ctx: SessionContext, subcommittee_id: int):
    s = db_session()
    return jsonify(serialize_subcommittee(get_subcommittee(s, subcommittee_id), include_members=True))


@bp.put("/<int:subcommittee_id>")
@require_auth
def subcommittee_update(ctx: SessionContext, subcommittee_id: int):
    s = db_session()
    subcommittee = update_subcommittee(s, ctx, subcommittee_id, json_body())
    s.commit()
    return jsonify(serialize_subcommittee(subcommittee))


@bp.post("/<int:subcommittee_id>/members")
@require_auth
def subcommittee_member_add(ctx: SessionContext, subcommittee_id: int):
    s = db_session()
    member_id = parse_int(json_body().get("memberId"), "memberId")
    add_member(s, ctx, subcommittee_id, member_id)
    s.commit()
    return jsonify({"message": "Member added"})


@bp.delete("/<int:subcommittee_id>/members/<int:member_id>")
@require_auth
def subcommittee_member_remove(ctx: SessionContext, subcommittee_id: int, member_id: int):
    s = db_session()
    remove_member(s, ctx, subcommittee_id, member_id)
    s.commit()
    return jsonify({"message": "Member removed"})
