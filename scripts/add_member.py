#!/usr/bin/env python3
"""
Register a member directly in the database so preferences can be stored for it.

Usage:
  python scripts/add_member.py --username alice [--issue-session]
"""
from __future__ import annotations

import argparse
import sys

from redfin_api.repositories.sql_repository import SQLRepository
from redfin_api.services.session_service import issue_session


def main() -> None:
    ap = argparse.ArgumentParser(description="Register a member")
    ap.add_argument("--username", required=True, help="Login name of the member (ex.: alice)")
    ap.add_argument("--issue-session", action="store_true", help="Also print a bearer token for manual testing")
    args = ap.parse_args()

    repo = SQLRepository()
    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Invalid username")
    if repo.get_member(username):
        raise SystemExit(f"Member '{username}' already exists")

    member = repo.create_member(username)
    print("OK: member registered")
    print(f"  id: {member.id}")
    print(f"  username: {member.username}")
    if args.issue_session:
        print(f"  token: {issue_session(member.username)}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
