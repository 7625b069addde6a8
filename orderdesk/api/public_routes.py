from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.crud import category as category_crud
from orderdesk.crud import product as product_crud
from orderdesk.crud.tenant import public_config
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.category import CategoryRead
from orderdesk.schemas.product import ProductRead
from orderdesk.schemas.tenant_config import PublicConfigRead
from orderdesk.utils.tenant import get_path_tenant, get_path_tenant_or_none, get_storefront_tenant

router = APIRouter(prefix="/api/public", tags=["storefront"])


async def _categories(db: AsyncSession, tenant: Optional[Tenant]):
    if tenant is None:
        return []
    return await category_crud.list_categories(db, tenant.id, active_only=True)


async def _products(db: AsyncSession, tenant: Optional[Tenant]):
    if tenant is None:
        return []
    return await product_crud.list_products(db, tenant.id, available=True)


# ----- Single-restaurant storefront (tenant from header or first active)
@router.get("/categories", response_model=List[CategoryRead])
async def list_public_categories(
    tenant: Optional[Tenant] = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await _categories(db, tenant)


@router.get("/products", response_model=List[ProductRead])
async def list_public_products(
    tenant: Optional[Tenant] = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await _products(db, tenant)


@router.get("/config", response_model=PublicConfigRead)
async def get_public_config(tenant: Optional[Tenant] = Depends(get_storefront_tenant)):
    return public_config(tenant)


# ----- Slug-addressed storefront
@router.get("/{tenant_slug}/categories", response_model=List[CategoryRead])
async def list_tenant_categories(
    tenant: Tenant = Depends(get_path_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await _categories(db, tenant)


@router.get("/{tenant_slug}/products", response_model=List[ProductRead])
async def list_tenant_products(
    tenant: Tenant = Depends(get_path_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await _products(db, tenant)


@router.get("/{tenant_slug}/products/{slug}", response_model=ProductRead)
async def get_tenant_product(
    slug: str,
    tenant: Tenant = Depends(get_path_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.get_product_by_slug(db, slug, tenant.id)


@router.get("/{tenant_slug}/config", response_model=PublicConfigRead)
async def get_tenant_public_config(tenant: Optional[Tenant] = Depends(get_path_tenant_or_none)):
    # Unknown slug still gets the default storefront payload
    return public_config(tenant)
