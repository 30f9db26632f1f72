"""Create an admin account for the reports dashboard.

Usage:
    python create_admin.py admin@example.com
"""

import argparse
import asyncio
import getpass
import logging
import sys

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


async def main(email: str, password: str) -> int:
    from sqlalchemy.exc import IntegrityError

    from app.admin import admin_auth_service
    from app.core.database import AsyncSessionLocal, init_database, engine

    try:
        await init_database()
        async with AsyncSessionLocal() as db:
            try:
                admin = await admin_auth_service.create_admin(email, password, db)
            except IntegrityError:
                logger.error(f"An admin with email {email} already exists")
                return 1
        logger.info(f"Created admin {admin.email} ({admin.id})")
        return 0
    finally:
        await engine.dispose()


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Create a dashboard admin account")
    parser.add_argument("email")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if not password or password != getpass.getpass("Repeat password: "):
        logger.error("Passwords are empty or do not match")
        sys.exit(1)

    sys.exit(asyncio.run(main(args.email, password)))
