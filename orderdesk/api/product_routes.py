import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.auth.dependencies import get_admin_tenant
from orderdesk.crud import product as product_crud
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.product import ProductCreate, ProductRead, ProductUpdate
from orderdesk.utils.security import generate_safe_filename, validate_and_read_image
from orderdesk.utils.storage import ImageStorage, get_storage

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post("", response_model=ProductRead, status_code=201)
async def create_product(
    data: ProductCreate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.create_product(db, tenant.id, data)


@router.get("", response_model=List[ProductRead])
async def list_products(
    category_id: Optional[str] = None,
    available: Optional[bool] = None,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.list_products(db, tenant.id, category_id=category_id, available=available)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.get_product(db, product_id, tenant.id)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    updates: ProductUpdate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.update_product(db, product_id, tenant.id, updates)


@router.post("/{product_id}/image", response_model=ProductRead)
async def upload_product_image(
    product_id: str,
    image: UploadFile = File(...),
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_storage),
):
    product = await product_crud.get_product(db, product_id, tenant.id)
    body = await validate_and_read_image(image)

    previous = product.image
    url = await storage.save(generate_safe_filename(image.filename), body, image.content_type)
    product = await product_crud.set_product_image(db, product, url)

    if previous and previous != url:
        await storage.delete(previous)
    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: str,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_storage),
):
    product = await product_crud.delete_product(db, product_id, tenant.id)
    if product.image:
        await storage.delete(product.image)
    return Response(status_code=204)
