#!/usr/bin/env python
"""
Seed the permission catalog, default roles and the admin user.

Safe to run repeatedly: each step is skipped when its table already
has rows.
"""

import argparse
import asyncio

from gatekeeper.config import settings
from gatekeeper.core.database import Base, async_engine, async_session_factory
from gatekeeper.core.logging import configure_logging
from gatekeeper.core.permissions.seed import (
    seed_admin_user,
    seed_permissions,
    seed_roles,
)


async def main(create_schema: bool, admin_email: str, admin_password: str) -> None:
    """Run the seed against the configured database."""
    if create_schema:
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        print("Schema created")

    async with async_session_factory() as session:
        permissions = await seed_permissions(session)
        roles = await seed_roles(session)
        admin = await seed_admin_user(session, admin_email, admin_password)
        await session.commit()

    print(f"Permissions created: {permissions}")
    print(f"Roles created: {roles}")
    print(f"Admin user created: {'yes' if admin else 'no'}")

    await async_engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the RBAC tables")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create tables before seeding (instead of running migrations)",
    )
    parser.add_argument(
        "--admin-email",
        default=settings.admin_email,
        help="Email for the initial admin user",
    )
    parser.add_argument(
        "--admin-password",
        default=settings.admin_password,
        help="Password for the initial admin user",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)
    asyncio.run(main(args.create_schema, args.admin_email, args.admin_password))
