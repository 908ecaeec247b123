# scripts/create_session.py
"""
Provision a profile and print a bearer token for it.

Sessions are normally issued by the identity provider; this is the operator
path, and the only way to create the first admin.

Usage:
    python scripts/create_session.py someone@example.org [--role admin]
"""
import argparse
import sys

from elakitty.crud.auth import create_session
from elakitty.crud.profile import apply_role, get_or_create_profile
from elakitty.db import SessionLocal, init_db
from elakitty.errors import ElaKittyError
from elakitty.models.enums import ASSIGNABLE_ROLES, Role


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument(
        "--role", choices=[r.value for r in ASSIGNABLE_ROLES], default=None,
        help="set this role on the profile (created or existing)",
    )
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        profile = get_or_create_profile(db, args.email)
        if args.role and profile.role != Role(args.role):
            apply_role(db, profile, args.role)
        session = create_session(db, profile)
        print(f"{profile.email} ({Role(profile.role).value})")
        print(session.token)
        return 0
    except ElaKittyError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
