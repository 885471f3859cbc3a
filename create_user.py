#!/usr/bin/env python3
"""
Create a Portfolio API user or reset an existing user's password.

There is no registration endpoint: accounts allowed to log in are
provisioned with this script.  The database is migrated first, so the
script also works on a fresh installation.  It never reads or reveals
existing passwords.

Usage:
    python create_user.py --email admin@example.com --name Admin --password "NewStrongPass!234"
    python create_user.py --email admin@example.com --reset
    python create_user.py --email admin@example.com --password secret --token

If --password is omitted, you will be prompted to enter it securely.
``DATABASE_URL`` selects the SQLite file as for the API itself.
"""

import argparse
import asyncio
import getpass
import sys

from portfolio_api.app.core.db import get_database_path, init_db
from portfolio_api.app.services.token_service import TokenService
from portfolio_api.app.services.user_service import UserService


async def run(args: argparse.Namespace, password: str) -> int:
    init_db()
    if args.reset:
        if not await UserService.set_password(args.email, password):
            print(f"[!] No user found with email: {args.email}", file=sys.stderr)
            return 2
        print(f"[+] Password updated for user: {args.email}")
        user = await UserService.get_by_email(args.email)
    else:
        try:
            user = await UserService.create_user(args.name or args.email, args.email, password)
        except ValueError as exc:
            print(f"[!] {exc}; use --reset to change the password.", file=sys.stderr)
            return 2
        print(f"[+] Created user {user.id}: {user.email}")
    if args.token:
        print(await TokenService.issue(user.id, name="cli_token"))
    return 0


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a Portfolio API user or reset its password.")
    ap.add_argument("--email", required=True, help="User email")
    ap.add_argument("--name", help="Display name (defaults to the email)")
    ap.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    ap.add_argument("--reset", action="store_true", help="Reset the password of an existing user")
    ap.add_argument("--token", action="store_true", help="Print a new bearer token for the user")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    print(f"[*] Database: {get_database_path()}")
    sys.exit(asyncio.run(run(args, password)))


if __name__ == "__main__":
    main()
