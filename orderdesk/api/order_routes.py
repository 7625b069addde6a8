from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.auth.dependencies import get_admin_tenant
from orderdesk.crud import order as order_crud
from orderdesk.db import get_db
from orderdesk.models.customer.order import OrderStatus
from orderdesk.models.tenant import Tenant
from orderdesk.schemas.order import OrderRead, OrderStatusUpdate

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[OrderRead])
async def list_orders(
    status: Optional[OrderStatus] = None,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.list_orders(db, tenant.id, status)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: str,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.get_order(db, order_id, tenant.id)


@router.patch("/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    tenant: Tenant = Depends(get_admin_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.update_order_status(db, order_id, tenant.id, data.status)
