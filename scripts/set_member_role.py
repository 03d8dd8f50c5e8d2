#!/usr/bin/env python3
"""Set a member's role (idempotent).

Usage:
  python scripts/set_member_role.py --email chair@example.org --role admin
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.fairgroup.models import VALID_ROLES, Member
from scripts._db_utils import database_url_from_env, script_session


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser()
    parser.add_argument("--email", required=True, help="Member email")
    parser.add_argument("--role", required=True, choices=VALID_ROLES)
    args = parser.parse_args()

    with script_session(database_url_from_env()) as s:
        member = s.query(Member).filter(Member.email.ilike(args.email.strip())).one_or_none()
        if not member:
            print(f"Member not found: {args.email}")
            return
        if member.role == args.role:
            print(f"Member already has role {args.role}: {args.email}")
            return
        member.role = args.role
    print(f"Role {args.role} set for {args.email}")


if __name__ == "__main__":
    main()
