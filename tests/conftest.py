from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from app.fairgroup import create_app
from app.fairgroup.auth import _login_attempts
from app.fairgroup.db import session_scope
from app.fairgroup.models import Base, Member, MemberSubcommittee, Subcommittee
from app.fairgroup.modules.events.models import Event


def _member(email, first, last, role="member", status="active"):
    return Member(
        first_name=first,
        last_name=last,
        email=email,
        password_hash=generate_password_hash("pw"),
        role=role,
        status=status,
    )


@pytest.fixture()
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    for k in ("CORS_ORIGIN", "SESSION_SECRET", "SESSION_LIFETIME_DAYS"):
        monkeypatch.delenv(k, raising=False)
    _login_attempts.clear()

    app = create_app()
    app.config["TESTING"] = True

    engine = app.extensions["sqlalchemy_engine"]
    Base.metadata.create_all(bind=engine)
    return app


@pytest.fixture()
def seed(app):
    """
    admin: role admin, no subcommittee
    chair / vice: leadership of "Policy"; both on its roster
    member: plain member, on no roster
    roster: plain member enrolled in "Policy"
    "Outreach" has no leadership. One Policy meeting and one group-wide event.
    """
    with session_scope(app) as s:
        admin = _member("admin@example.com", "Ada", "Admin", role="admin")
        chair = _member("chair@example.com", "Carla", "Chair")
        vice = _member("vice@example.com", "Victor", "Vice")
        member = _member("member@example.com", "Mia", "Member")
        roster = _member("roster@example.com", "Rob", "Roster")
        inactive = _member("inactive@example.com", "Ivan", "Inactive", status="inactive")
        s.add_all([admin, chair, vice, member, roster, inactive])
        s.flush()

        policy = Subcommittee(name="Policy", description="Policy work", chair_id=chair.id, vice_chair_id=vice.id)
        outreach = Subcommittee(name="Outreach")
        s.add_all([policy, outreach])
        s.flush()

        s.add_all(
            [
                MemberSubcommittee(member_id=chair.id, subcommittee_id=policy.id),
                MemberSubcommittee(member_id=vice.id, subcommittee_id=policy.id),
                MemberSubcommittee(member_id=roster.id, subcommittee_id=policy.id),
            ]
        )

        meeting = Event(
            title="Policy meeting",
            start_datetime=datetime(2026, 11, 2, 18, 0),
            associated_subcommittee_id=policy.id,
            created_by=chair.id,
        )
        general = Event(title="General assembly", start_datetime=datetime(2026, 11, 1, 18, 0), created_by=admin.id)
        s.add_all([meeting, general])
        s.flush()

        ids = {
            "admin": admin.id,
            "chair": chair.id,
            "vice": vice.id,
            "member": member.id,
            "roster": roster.id,
            "inactive": inactive.id,
            "policy": policy.id,
            "outreach": outreach.id,
            "meeting": meeting.id,
            "general": general.id,
        }
    return ids


@pytest.fixture()
def client(app, seed):
    return app.test_client()


def login(client, who):
    r = client.post("/api/auth/login", json={"email": f"{who}@example.com", "password": "pw"})
    assert r.status_code == 200, r.json
    return r
