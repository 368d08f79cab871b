#!/usr/bin/env python3
"""
Create an admin user for the content panel, or print a bcrypt hash.

Usage:
    python create_admin.py --email admin@example.com --password secret --full-name "Admin User"
    python create_admin.py --hash-only --password secret
"""

import sys
import asyncio
import argparse
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from app.database import async_session_maker, init_db
from app.models.user import User
from app.services.auth import auth_service

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def create_admin(email: str, password: str, full_name: str = None) -> int:
    await init_db()
    async with async_session_maker() as db:
        result = await db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            logger.error(f"User {email} already exists")
            return 1

        user = await auth_service.create_user(
            db=db,
            email=email,
            password=password,
            full_name=full_name,
            is_admin=True,
        )
        logger.info(f"Created admin user {user.id} ({user.email})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", help="Login email")
    parser.add_argument("--password", required=True, help="Plain-text password")
    parser.add_argument("--full-name", help="Display name")
    parser.add_argument("--hash-only", action="store_true", help="Only print the bcrypt hash")
    args = parser.parse_args()

    if args.hash_only:
        print(auth_service.get_password_hash(args.password))
        return 0

    if not args.email:
        parser.error("--email is required unless --hash-only is given")

    return asyncio.run(create_admin(args.email, args.password, args.full_name))


if __name__ == "__main__":
    sys.exit(main())
