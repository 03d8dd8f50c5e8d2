from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timedelta
from functools import wraps
from typing import Any

from flask import Blueprint, current_app, g, jsonify, request, session
from werkzeug.security import check_password_hash

from app.fairgroup.access import SessionContext
from app.fairgroup.db import db_session
from app.fairgroup.errors import TooManyRequests, Unauthorized, ValidationError
from app.fairgroup.models import Member

bp = Blueprint("auth", __name__)
_login_attempts: dict[str, list[datetime]] = {}
_login_attempts_lock = threading.Lock()
_LOGIN_RATE_LIMIT = 5
_LOGIN_RATE_WINDOW = 300  # seconds


def _prune_attempts(now: datetime) -> None:
    """Drop expired attempts; IPs left with none are forgotten. Caller holds the lock."""
    cutoff = now - timedelta(seconds=_LOGIN_RATE_WINDOW)
    for ip in list(_login_attempts):
        recent = [t for t in _login_attempts[ip] if t > cutoff]
        if recent:
            _login_attempts[ip] = recent
        else:
            del _login_attempts[ip]


def _check_rate_limit(ip: str) -> bool:
    with _login_attempts_lock:
        _prune_attempts(datetime.utcnow())
        return len(_login_attempts.get(ip, ())) >= _LOGIN_RATE_LIMIT


def _record_attempt(ip: str) -> None:
    with _login_attempts_lock:
        _login_attempts.setdefault(ip, []).append(datetime.utcnow())


def _clear_attempts(ip: str) -> None:
    with _login_attempts_lock:
        _login_attempts.pop(ip, None)


def load_session_context() -> SessionContext | None:
    """
    Build the caller's SessionContext from the signed session cookie.

    The member row is re-read on every request so a role change or
    deactivation takes effect immediately; a stale cookie is cleared.
    """
    member_id = session.get("member_id")
    if not member_id:
        return None

    s = db_session()
    member = s.get(Member, int(member_id))
    if not member or not member.is_active:
        session.clear()
        return None
    if session.get("role") != member.role:
        session["role"] = member.role
    return SessionContext(member_id=member.id, role=member.role)


def require_auth(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Pass the caller's SessionContext as the view's first argument; 401 without one."""

    @wraps(fn)
    def wrapped(*args: Any, **kwargs: Any):
        ctx = load_session_context()
        if ctx is None:
            raise Unauthorized("Authentication required")
        return fn(ctx, *args, **kwargs)

    return wrapped


def _member_summary(member: Member) -> dict:
    return {
        "id": member.id,
        "first_name": member.first_name,
        "last_name": member.last_name,
        "email": member.email,
        "role": member.role,
    }


@bp.post("/login")
def login():
    body = request.get_json(silent=True) or {}
    email = str(body.get("email") or "").strip().lower()
    password = str(body.get("password") or "")
    ip = request.remote_addr or "unknown"

    if not email or not password:
        raise ValidationError("Email and password are required")

    if _check_rate_limit(ip):
        raise TooManyRequests("Too many login attempts. Please wait 5 minutes.")

    _record_attempt(ip)

    s = db_session()
    member = s.query(Member).filter(Member.email == email).one_or_none()
    if (
        not member
        or not member.is_active
        or not member.password_hash
        or not check_password_hash(member.password_hash, password)
    ):
        current_app.logger.info("Login failed (email=%s request_id=%s)", email, getattr(g, "request_id", None))
        raise Unauthorized("Invalid credentials")

    session.clear()
    session.permanent = True
    session["member_id"] = member.id
    session["role"] = member.role
    _clear_attempts(ip)
    current_app.logger.info("Login ok (member_id=%s)", member.id)
    return jsonify({"message": "Logged in", "member": _member_summary(member)})


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"message": "Logged out"})


@bp.get("/session")
@require_auth
def session_status(ctx: SessionContext):
    member = db_session().get(Member, ctx.member_id)
    return jsonify({"authenticated": True, "member": _member_summary(member)})
