# scripts/provision_tenant.py
"""
Create a restaurant and its first dashboard admin.

    python scripts/provision_tenant.py "Pizzaria Bella" admin@bella.com s3cret
    python scripts/provision_tenant.py "Pizzaria Bella" admin@bella.com s3cret --slug bella --status SUSPENDED
"""

import argparse
import asyncio
import sys

from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.exceptions import UserAlreadyExists

from orderdesk.auth.manager import UserManager
from orderdesk.core.config import get_settings, setup_logging
from orderdesk.core.errors import ValidationError
from orderdesk.crud.tenant import get_tenant_by_slug, validate_tenant_slug
from orderdesk.db import Database
from orderdesk.models.tenant import Tenant, TenantStatus
from orderdesk.models.user import User
from orderdesk.schemas.user import UserCreate


async def provision(business_name: str, email: str, password: str, slug: str = None, status: str = "ACTIVE"):
    settings = get_settings()
    setup_logging(settings)

    try:
        slug = validate_tenant_slug(slug or business_name)
    except ValidationError as e:
        print(f"Invalid slug: {e.message}")
        return 1

    db = Database(settings.database_url, echo=settings.database_echo)
    await db.create_all()

    try:
        async with db.session() as session:
            tenant = await get_tenant_by_slug(session, slug)
            if tenant:
                print(f"Tenant '{slug}' already exists (id={tenant.id}).")
            else:
                tenant = Tenant(slug=slug, business_name=business_name, email=email, status=TenantStatus(status))
                session.add(tenant)
                await session.commit()
                print(f"Created tenant: {tenant.business_name} ({tenant.slug}, id={tenant.id})")

            manager = UserManager(SQLAlchemyUserDatabase(session, User))
            try:
                user = await manager.create(
                    UserCreate(email=email, password=password, name=business_name, tenant_id=tenant.id)
                )
                print(f"Created admin: {user.email} -> tenant {tenant.slug}")
            except UserAlreadyExists:
                print(f"User {email} already exists. Skipping.")
    finally:
        await db.dispose()
    return 0


def main():
    parser = argparse.ArgumentParser(description="Provision a restaurant and its first admin user")
    parser.add_argument("business_name")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--slug", help="URL slug (defaults to the slugified business name)")
    parser.add_argument("--status", choices=[s.value for s in TenantStatus], default="ACTIVE")
    args = parser.parse_args()

    sys.exit(asyncio.run(provision(args.business_name, args.email, args.password, args.slug, args.status)))


if __name__ == "__main__":
    main()
