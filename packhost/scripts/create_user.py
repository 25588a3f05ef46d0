"""Create an operator account for PackHost.

Usage:
    python -m packhost.scripts.create_user --username admin --password <password>
"""

from __future__ import annotations

import argparse
import sys

from packhost.db.session import SessionLocal
from packhost.services.auth import create_user, find_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a PackHost operator")
    parser.add_argument("--username", required=True, help="Username for the new operator")
    parser.add_argument("--password", required=True, help="Password for the new operator")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        if find_user(db, args.username) is not None:
            print(f"User '{args.username}' already exists.")
            return 1

        user = create_user(db, args.username, args.password)
        print(f"User '{user.username}' created successfully (id={user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
