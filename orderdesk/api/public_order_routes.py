from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.crud import order as order_crud
from orderdesk.db import get_db
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.order import OrderHistoryRead, OrderRead, PublicOrderCreate
from orderdesk.utils.tenant import get_query_tenant

router = APIRouter(prefix="/api/public/orders", tags=["storefront orders"])


@router.post("", response_model=OrderRead, status_code=201)
async def create_public_order(data: PublicOrderCreate, db: AsyncSession = Depends(get_db)):
    """Checkout without an account. The tenant comes from ``tenant_slug`` in the body."""
    return await order_crud.create_public_order(db, data)


@router.get("/by-phone/{phone}", response_model=List[OrderHistoryRead])
async def list_orders_by_phone(
    phone: str,
    tenant: Tenant = Depends(get_query_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.list_orders_by_phone(db, tenant.id, phone.strip())


@router.get("/{order_number}", response_model=OrderRead)
async def get_order_by_number(
    order_number: str,
    phone: str = Query(..., min_length=1),
    tenant: Tenant = Depends(get_query_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.get_order_by_number(db, tenant.id, order_number, phone)
