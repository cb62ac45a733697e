"""Register a user profile and print a development identity token.

Usage:
    python -m notespace.scripts.create_user --user-id u_123 --email ada@example.com [--name Ada]

Production tokens come from the identity provider; this is for local use.
"""

from __future__ import annotations

import argparse

from notespace.db.session import SessionLocal
from notespace.services.identity import create_identity_token, sync_user


def main() -> None:
    parser = argparse.ArgumentParser(description="Register a NoteSpace user profile")
    parser.add_argument("--user-id", required=True, help="Opaque user id from the identity provider")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user, created = sync_user(db, args.user_id, email=args.email, name=args.name)
        state = "created" if created else "already existed"
        print(f"User '{user.user_id}' {state}.")
        print(create_identity_token(user.user_id, email=user.email, name=user.name))
    finally:
        db.close()


if __name__ == "__main__":
    main()
