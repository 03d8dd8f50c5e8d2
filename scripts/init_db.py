#!/usr/bin/env python3
"""Seed the first admin member (idempotent).

Usage:
  python scripts/init_db.py [--reset-password]

Reads ADMIN_EMAIL / ADMIN_PASSWORD / DATABASE_URL from the environment (.env is loaded).
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from werkzeug.security import generate_password_hash

# Ensure repo root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.fairgroup.models import ROLE_ADMIN, Member
from scripts._db_utils import database_url_from_env, script_session


def seed_only(*, database_url: str | None = None, reset_password: bool = False) -> None:
    """
    Ensure an active admin member exists for ADMIN_EMAIL.
    Does NOT overwrite an existing member's password unless reset_password is set.
    """
    admin_email = (os.environ.get("ADMIN_EMAIL") or "admin@fairgroup.org").strip().lower()
    admin_password = os.environ.get("ADMIN_PASSWORD") or "change-me"

    with script_session(database_url_from_env(database_url)) as s:
        member = s.query(Member).filter(Member.email == admin_email).one_or_none()
        if not member:
            member = Member(
                first_name="Admin",
                last_name="User",
                email=admin_email,
                password_hash=generate_password_hash(admin_password),
            )
            s.add(member)
        elif reset_password or not member.password_hash:
            member.password_hash = generate_password_hash(admin_password)
        member.role = ROLE_ADMIN
        member.status = "active"

    print("Initialized database (seed_only).")
    print(f"Admin email: {admin_email}")
    print("Admin password: (from ADMIN_PASSWORD)")


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser()
    parser.add_argument("--reset-password", action="store_true", help="Overwrite the admin password from ADMIN_PASSWORD")
    args = parser.parse_args()
    seed_only(database_url=None, reset_password=args.reset_password)


if __name__ == "__main__":
    main()
