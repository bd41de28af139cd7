#!/usr/bin/env python3
"""Create an administrator account, or promote an existing user to admin.

Usage (from the project directory):
    python tools/create_admin.py --email admin@labtim.org --password secret
    python tools/create_admin.py --email admin@labtim.org --password secret --name "Lab Admin"
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from app.config import settings
from app.db import Database
from app.models import User, UserRole
from app.services.auth import auth_service


async def create_admin(email: str, password: str, full_name: str | None) -> None:
    database = Database(settings.database_url)
    database.connect()
    try:
        async with database.session() as db:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()

            if user is None:
                user = User(
                    email=email,
                    hashed_password=auth_service.hash_password(password),
                    full_name=full_name,
                    role=UserRole.ADMIN,
                    is_active=True,
                )
                db.add(user)
                print(f"Creating admin {email}...")
            else:
                user.hashed_password = auth_service.hash_password(password)
                user.role = UserRole.ADMIN
                user.is_active = True
                if full_name:
                    user.full_name = full_name
                print(f"User {email} exists, promoting to admin and resetting password...")

            await db.commit()
            await db.refresh(user)
            print(f"Done. Admin id: {user.id}")
    finally:
        await database.close()


def main():
    parser = argparse.ArgumentParser(description="Create or promote a CMS administrator.")
    parser.add_argument("--email", "-e", required=True, help="Admin email address")
    parser.add_argument("--password", "-p", required=True, help="Admin password")
    parser.add_argument("--name", "-n", default=None, help="Full name")
    args = parser.parse_args()

    if len(args.password) < 8:
        print("ERROR: password must be at least 8 characters.")
        sys.exit(1)

    asyncio.run(create_admin(args.email.strip().lower(), args.password, args.name))


if __name__ == "__main__":
    main()
