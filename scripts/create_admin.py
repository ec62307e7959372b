#!/usr/bin/env python3
"""
Create an administrator account (role 3).

The createUser endpoint always assigns the member role, so the first admin
has to be bootstrapped from the command line.

Usage:
  python scripts/create_admin.py --name "Jane Doe" --username jane --email jane@example.com
  # Prompts for the password unless --password is given
  # Requires DATABASE_URL and SECRET_KEY in .env (or export)
"""
import argparse
import asyncio
import getpass
import os
import sys

from dotenv import load_dotenv

# Load .env from project root
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_root, ".env"))

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import AsyncSessionLocal, close_db
from app.models.enums import UserRole
from app.services.user_service import UserService
from app.store import Stores


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("--name", required=True)
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="read from a prompt when omitted")
    return parser.parse_args(argv)


async def create_admin(name: str, username: str, email: str, password: str) -> dict:
    async with AsyncSessionLocal() as session:
        service = UserService(Stores(session))
        return await service.create_user(
            {"name": name, "username": username, "email": email, "password": password},
            role=UserRole.ADMIN,
        )


async def _run(args: argparse.Namespace, password: str) -> dict:
    try:
        return await create_admin(args.name, args.username, args.email, password)
    finally:
        await close_db()


def main(argv=None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")

    result = asyncio.run(_run(args, password))
    if "error" in result:
        print(f"FAILED: {result['error']}")
        return 1
    print(f"SUCCESS: admin {result['user']['username']} created ({result['user']['id']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
