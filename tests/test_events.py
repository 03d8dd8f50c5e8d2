"""Tests for the events module."""
from datetime import datetime

from conftest import login

from app.fairgroup.db import session_scope
from app.fairgroup.modules.events.models import Event


def _event(**overrides):
    body = {
        "title": "Planning session",
        "description": "Quarterly planning",
        "start_datetime": "2026-12-01T18:00:00",
        "end_datetime": "2026-12-01T20:00:00",
        "location": "Library",
    }
    body.update(overrides)
    return body


def test_events_list_ordered_by_start(client, seed):
    login(client, "member")
    r = client.get("/api/events")
    assert r.status_code == 200
    titles = [e["title"] for e in r.json]
    assert titles == ["General assembly", "Policy meeting"]
    meeting = r.json[1]
    assert meeting["subcommittee_name"] == "Policy"
    assert r.json[0]["subcommittee_name"] is None


def test_events_filter_my_subcommittees(client, app, seed):
    with session_scope(app) as s:
        s.add(
            Event(
                title="Outreach canvass",
                start_datetime=datetime(2026, 11, 5, 10, 0),
                associated_subcommittee_id=seed["outreach"],
            )
        )

    login(client, "roster")
    r = client.get("/api/events?filter=my-subcommittees")
    titles = {e["title"] for e in r.json}
    assert titles == {"General assembly", "Policy meeting"}

    login(client, "member")
    r = client.get("/api/events?filter=my-subcommittees")
    assert {e["title"] for e in r.json} == {"General assembly"}

    r = client.get("/api/events")
    assert len(r.json) == 3


def test_group_wide_event_rejected_for_non_admin(client, seed):
    for who in ("member", "chair"):
        login(client, who)
        r = client.post("/api/events", json=_event(associated_subcommittee_id=None))
        assert r.status_code == 403, who
        assert r.json["error"] == "Only admins can create group-wide events"


def test_group_wide_event_accepted_for_admin(client, seed):
    login(client, "admin")
    r = client.post("/api/events", json=_event())
    assert r.status_code == 201
    assert r.json["associated_subcommittee_id"] is None
    assert r.json["created_by"] == seed["admin"]
    assert r.json["start_datetime"] == "2026-12-01T18:00:00"


def test_leadership_can_create_subcommittee_meeting(client, seed):
    for who in ("chair", "vice"):
        login(client, who)
        r = client.post("/api/events", json=_event(associated_subcommittee_id=seed["policy"]))
        assert r.status_code == 201, who
        assert r.json["subcommittee_name"] == "Policy"


def test_non_leader_cannot_create_subcommittee_meeting(client, seed):
    for who in ("member", "roster"):
        login(client, who)
        r = client.post("/api/events", json=_event(associated_subcommittee_id=seed["policy"]))
        assert r.status_code == 403, who
        assert r.json["error"] == "Only subcommittee leadership can create meetings"


def test_chair_cannot_create_meeting_for_other_subcommittee(client, seed):
    login(client, "chair")
    r = client.post("/api/events", json=_event(associated_subcommittee_id=seed["outreach"]))
    assert r.status_code == 403


def test_admin_can_create_meeting_for_any_subcommittee(client, seed):
    login(client, "admin")
    r = client.post("/api/events", json=_event(associated_subcommittee_id=seed["outreach"]))
    assert r.status_code == 201


def test_unknown_subcommittee_is_404_not_403(client, seed):
    login(client, "member")
    r = client.post("/api/events", json=_event(associated_subcommittee_id=9999))
    assert r.status_code == 404
    assert r.json["error"] == "Subcommittee not found"


def test_event_validation(client, seed):
    login(client, "admin")
    r = client.post("/api/events", json=_event(title="  "))
    assert r.status_code == 400

    r = client.post("/api/events", json=_event(start_datetime="next tuesday"))
    assert r.status_code == 400

    r = client.post("/api/events", json=_event(end_datetime="2026-11-30T09:00:00"))
    assert r.status_code == 400


def test_event_accepts_utc_timestamps(client, seed):
    login(client, "admin")
    r = client.post("/api/events", json=_event(start_datetime="2026-12-01T18:00:00Z", end_datetime=None))
    assert r.status_code == 201
    assert r.json["start_datetime"] == "2026-12-01T18:00:00"
