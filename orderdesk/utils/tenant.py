# orderdesk/utils/tenant.py
from typing import Optional

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.crud.tenant import get_fallback_tenant, get_tenant_by_slug, require_tenant_by_slug
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant


async def resolve_public_tenant(db: AsyncSession, header_slug: Optional[str] = None) -> Optional[Tenant]:
    """
    Storefront tenant for read-only routes without a slug in the path: the
    X-Tenant-Slug header when it names a restaurant, otherwise the first
    active one, otherwise any. Never raises; None means nothing provisioned.
    """
    slug = (header_slug or "").strip()
    if slug:
        tenant = await get_tenant_by_slug(db, slug)
        if tenant:
            return tenant
    return await get_fallback_tenant(db)


async def get_storefront_tenant(
    x_tenant_slug: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> Optional[Tenant]:
    return await resolve_public_tenant(db, header_slug=x_tenant_slug)


async def get_path_tenant(tenant_slug: str, db: AsyncSession = Depends(get_db)) -> Tenant:
    return await require_tenant_by_slug(db, tenant_slug)


async def get_path_tenant_or_none(tenant_slug: str, db: AsyncSession = Depends(get_db)) -> Optional[Tenant]:
    return await get_tenant_by_slug(db, tenant_slug)


async def get_query_tenant(
    tenant_slug: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> Tenant:
    return await require_tenant_by_slug(db, tenant_slug)
