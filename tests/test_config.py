"""Tests for configuration loading and CORS handling."""
import pytest

from app.fairgroup import create_app
from app.fairgroup.config import load_config, normalize_database_url
from app.fairgroup.security import allowed_origins


def test_normalize_database_url():
    assert normalize_database_url("postgres://u:p@h/db") == "postgresql://u:p@h/db"
    assert normalize_database_url("postgresql://u:p@h/db") == "postgresql://u:p@h/db"
    assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_secret_falls_back_to_session_secret(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.setenv("SESSION_SECRET", "from-session-secret")
    assert load_config()["SECRET_KEY"] == "from-session-secret"


def test_session_lifetime_defaults_to_thirty_days(app):
    assert app.config["PERMANENT_SESSION_LIFETIME"].days == 30


def test_production_requires_postgres(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "a-strong-secret")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///prod.db")
    with pytest.raises(RuntimeError):
        create_app()


def test_allowed_origins_parsing():
    assert allowed_origins("") == set()
    assert allowed_origins("https://a.org/, https://b.org") == {"https://a.org", "https://b.org"}


def test_cors_headers_for_configured_origin(tmp_path, monkeypatch):
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'cors.db'}")
    monkeypatch.setenv("CORS_ORIGIN", "https://app.example.org")
    client = create_app().test_client()

    r = client.get("/health", headers={"Origin": "https://app.example.org"})
    assert r.headers["Access-Control-Allow-Origin"] == "https://app.example.org"
    assert r.headers["Access-Control-Allow-Credentials"] == "true"

    r = client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert "Access-Control-Allow-Origin" not in r.headers

    r = client.options("/api/events", headers={"Origin": "https://app.example.org"})
    assert r.status_code == 204
    assert "PUT" in r.headers["Access-Control-Allow-Methods"]
