"""Tests for the public signup endpoint."""
import pytest

from app.fairgroup.db import session_scope
from app.fairgroup.modules.public.models import PublicContact
from app.fairgroup.modules.public.service import normalize_email, validate_signup_payload


def _payload(**overrides):
    body = {
        "first_name": "Jo",
        "last_name": "Public",
        "email": "  Jo.Public@Example.COM ",
        "phone": "555-0199",
        "county_or_city": "Springfield",
        "system_impact": "Prefer not to say",
        "involvement_interest": "Testifying at hearings",
    }
    body.update(overrides)
    return body


def test_signup_stores_contact_without_session(client, app):
    r = client.post("/api/public/signup", json=_payload())
    assert r.status_code == 201
    assert r.json == {"message": "Thank you, we'll follow up with more information."}

    with session_scope(app) as s:
        contact = s.query(PublicContact).one()
        assert contact.email == "jo.public@example.com"
        assert contact.county_or_city == "Springfield"


def test_signup_escapes_markup(client, app):
    r = client.post("/api/public/signup", json=_payload(first_name="<b>Jo</b>"))
    assert r.status_code == 201
    with session_scope(app) as s:
        assert s.query(PublicContact).one().first_name == "&lt;b&gt;Jo&lt;&#x2F;b&gt;"


def test_signup_optional_fields(client, app):
    r = client.post("/api/public/signup", json=_payload(phone=None, county_or_city="", involvement_interest=None))
    assert r.status_code == 201
    with session_scope(app) as s:
        contact = s.query(PublicContact).one()
        assert contact.phone is None
        assert contact.county_or_city is None


def test_signup_validation_errors_listed(client, app):
    r = client.post("/api/public/signup", json=_payload(first_name="", email="not-an-email", system_impact="Maybe"))
    assert r.status_code == 400
    assert r.json["error"] == "Validation failed"
    assert {e["field"] for e in r.json["errors"]} == {"first_name", "email", "system_impact"}
    with session_scope(app) as s:
        assert s.query(PublicContact).count() == 0


@pytest.mark.parametrize("choice", ["Yes", "No", "Prefer not to say"])
def test_system_impact_choices(choice):
    assert validate_signup_payload(_payload(system_impact=choice)) == []


def test_missing_body_reports_every_required_field():
    fields = {e["field"] for e in validate_signup_payload({})}
    assert fields == {"first_name", "last_name", "email", "system_impact"}


def test_signup_escapes_slash_backslash_and_backtick(client, app):
    r = client.post("/api/public/signup", json=_payload(county_or_city="a/b\\c`d"))
    assert r.status_code == 201
    with session_scope(app) as s:
        assert s.query(PublicContact).one().county_or_city == "a&#x2F;b&#x5C;c&#96;d"


@pytest.mark.parametrize(
    "email",
    ["<script>alert(1)</script>@x.io", "jo@example..com", "jo@", "@example.com", "jo example@example.com"],
)
def test_signup_rejects_malformed_email(client, app, email):
    r = client.post("/api/public/signup", json=_payload(email=email))
    assert r.status_code == 400
    assert [e["field"] for e in r.json["errors"]] == ["email"]
    with session_scope(app) as s:
        assert s.query(PublicContact).count() == 0


def test_normalize_email():
    assert normalize_email("  Jo.Public@Example.COM ") == "jo.public@example.com"
    assert normalize_email("not-an-email") is None
    assert normalize_email(None) is None
