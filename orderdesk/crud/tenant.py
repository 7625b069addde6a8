import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import (
    DEFAULT_PUBLIC_CONFIG,
    ORDER_NUMBER_PREFIX,
    ORDER_NUMBER_WIDTH,
    PUBLIC_CONFIG_FIELDS,
    RESERVED_SLUGS,
)
from orderdesk.core.errors import TenantNotFound, ValidationError
from orderdesk.models.tenant import Tenant, TenantStatus
from orderdesk.schemas.tenant_config import ConfigUpdate
from orderdesk.utils.security import encrypt_api_key
from orderdesk.utils.slug import slugify

log = logging.getLogger(__name__)


async def get_tenant(db: AsyncSession, tenant_id: int) -> Tenant:
    tenant = await db.get(Tenant, tenant_id)
    if not tenant:
        raise TenantNotFound()
    return tenant


async def get_tenant_by_slug(db: AsyncSession, slug: str) -> Optional[Tenant]:
    result = await db.execute(select(Tenant).where(Tenant.slug == slug))
    return result.scalar_one_or_none()


async def require_tenant_by_slug(db: AsyncSession, slug: str) -> Tenant:
    tenant = await get_tenant_by_slug(db, slug)
    if not tenant:
        raise TenantNotFound()
    return tenant


async def get_fallback_tenant(db: AsyncSession) -> Optional[Tenant]:
    """First active restaurant, else the first one at all, else None."""
    result = await db.execute(
        select(Tenant).where(Tenant.status == TenantStatus.ACTIVE).order_by(Tenant.id).limit(1)
    )
    tenant = result.scalar_one_or_none()
    if tenant:
        return tenant

    result = await db.execute(select(Tenant).order_by(Tenant.id).limit(1))
    tenant = result.scalar_one_or_none()
    if not tenant:
        log.info("No tenant provisioned; public endpoints serve defaults")
    return tenant


def validate_tenant_slug(slug: str) -> str:
    """Check a slug for a new restaurant; returns it normalized."""
    normalized = slugify(slug)
    if not normalized:
        raise ValidationError("Slug must contain letters or digits")
    if normalized in RESERVED_SLUGS:
        raise ValidationError(f"Slug \"{normalized}\" is reserved", details={"reserved": list(RESERVED_SLUGS)})
    return normalized


def public_config(tenant: Optional[Tenant]) -> dict:
    if tenant is None:
        return dict(DEFAULT_PUBLIC_CONFIG)
    return {field: getattr(tenant, field) for field in PUBLIC_CONFIG_FIELDS}


async def update_config(db: AsyncSession, tenant: Tenant, updates: ConfigUpdate) -> Tenant:
    data = updates.model_dump(exclude_none=True)
    changed = ", ".join(sorted(data))

    ai_key = data.pop("ai_api_key", None)
    if ai_key is not None:
        tenant.ai_api_key_encrypted = encrypt_api_key(ai_key.strip()) or None

    for key, value in data.items():
        setattr(tenant, key, value)

    await db.commit()
    await db.refresh(tenant)
    log.info("Tenant %s config updated: %s", tenant.id, changed)
    return tenant


async def set_image(db: AsyncSession, tenant: Tenant, field: str, url: str) -> Tenant:
    setattr(tenant, field, url)
    await db.commit()
    await db.refresh(tenant)
    return tenant


def format_order_number(n: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}{n:0{ORDER_NUMBER_WIDTH}d}"


async def next_order_number(db: AsyncSession, tenant_id: int) -> str:
    """
    Bump the tenant's order counter and return the formatted number.

    The UPDATE holds the tenant row lock until the caller commits, so
    concurrent checkouts for one restaurant are numbered one after another.
    """
    await db.execute(
        update(Tenant)
        .where(Tenant.id == tenant_id)
        .values(last_order_number=Tenant.last_order_number + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(select(Tenant.last_order_number).where(Tenant.id == tenant_id))
    return format_order_number(result.scalar_one())
