from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.auth.dependencies import get_admin_tenant
from orderdesk.crud import category as category_crud
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.category import CategoryAdminRead, CategoryCreate, CategoryRead, CategoryUpdate
from orderdesk.utils.storage import ImageStorage, get_storage

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post("", response_model=CategoryRead, status_code=201)
async def create_category(
    data: CategoryCreate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await category_crud.create_category(db, tenant.id, data)


@router.get("", response_model=List[CategoryAdminRead])
async def list_categories(
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    """All categories, inactive included, with how many products each holds"""
    categories = await category_crud.list_categories(db, tenant.id)
    counts = await category_crud.product_counts(db, tenant.id)
    return [
        CategoryAdminRead.model_validate(c).model_copy(update={"product_count": counts.get(c.id, 0)})
        for c in categories
    ]


@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: str,
    updates: CategoryUpdate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await category_crud.update_category(db, category_id, tenant.id, updates)


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_storage),
):
    images = await category_crud.delete_category(db, category_id, tenant.id)
    for image in images:
        await storage.delete(image)
    return Response(status_code=204)
