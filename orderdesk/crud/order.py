import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderdesk.core.constants import CENTS, ORDER_NUMBER_PREFIX
from orderdesk.core.errors import OrderNotFound, ProductsUnavailable, TenantUnavailable, ValidationError
from orderdesk.crud import customer as customer_crud
from orderdesk.crud.tenant import next_order_number, require_tenant_by_slug
from orderdesk.models.catalog import Product
from orderdesk.models.customer.order import FINAL_STATUSES, Order, OrderItem, OrderStatus
from orderdesk.schemas.order import OrderItemCreate, PublicOrderCreate

log = logging.getLogger(__name__)


def _with_details(query):
    return query.options(
        selectinload(Order.items).selectinload(OrderItem.product),
        selectinload(Order.customer),
    )


def line_subtotal(price: Decimal, quantity: int) -> Decimal:
    return (Decimal(price) * quantity).quantize(CENTS)


def price_lines(items: List[OrderItemCreate], products: dict) -> tuple:
    """Build OrderItem rows with price snapshots; returns (rows, total)."""
    rows = []
    total = Decimal("0.00")
    for item in items:
        product = products[item.product_id]
        subtotal = line_subtotal(product.price, item.quantity)
        total += subtotal
        rows.append(
            OrderItem(
                product_id=product.id,
                quantity=item.quantity,
                price=product.price,
                subtotal=subtotal,
                notes=item.notes,
            )
        )
    return rows, total.quantize(CENTS)


async def create_public_order(db: AsyncSession, data: PublicOrderCreate) -> Order:
    tenant = await require_tenant_by_slug(db, data.tenant_slug)
    if not tenant.accepts_orders:
        raise TenantUnavailable()

    requested_ids = {item.product_id for item in data.items}
    result = await db.execute(
        select(Product).where(
            Product.id.in_(requested_ids),
            Product.tenant_id == tenant.id,
            Product.available == True,  # noqa: E712
        )
    )
    products = {p.id: p for p in result.scalars().all()}

    if len(products) < len(requested_ids):
        missing = sorted(requested_ids - set(products))
        raise ProductsUnavailable(details={"product_ids": missing})

    rows, total = price_lines(data.items, products)
    address = data.delivery_address.model_dump(exclude_none=True) if data.delivery_address else None

    try:
        customer = await customer_crud.upsert_customer(
            db,
            tenant.id,
            name=data.customer_name.strip(),
            phone=data.phone,
            email=data.email,
            address=address,
        )

        order_number = await next_order_number(db, tenant.id)

        order = Order(
            tenant_id=tenant.id,
            customer_id=customer.id,
            order_number=order_number,
            type=data.type,
            status=OrderStatus.PENDING,
            payment_method=data.payment_method,
            delivery_address=address,
            notes=data.notes,
            total=total,
            items=rows,
        )
        db.add(order)
        await db.flush()

        await customer_crud.record_order(db, customer.id, total)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    # Totals were bumped in SQL; reload before the customer is serialized
    await db.refresh(customer)
    log.info("order created: tenant=%s number=%s total=%s items=%d", tenant.id, order_number, total, len(rows))
    return await get_order(db, order.id, tenant.id)


async def get_order(db: AsyncSession, order_id: str, tenant_id: int) -> Order:
    result = await db.execute(
        _with_details(select(Order).where(Order.id == order_id, Order.tenant_id == tenant_id))
        .execution_options(populate_existing=True)
    )
    order = result.scalar_one_or_none()
    if not order:
        raise OrderNotFound()
    return order


async def list_orders_by_phone(db: AsyncSession, tenant_id: int, phone: str) -> List[Order]:
    customer = await customer_crud.get_customer_by_phone(db, tenant_id, phone)
    if customer is None:
        return []

    result = await db.execute(
        _with_details(
            select(Order)
            .where(Order.tenant_id == tenant_id, Order.customer_id == customer.id)
            .order_by(Order.created_at.desc(), Order.order_number.desc())
        )
    )
    return list(result.scalars().all())


def normalize_order_number(order_number: str) -> str:
    order_number = order_number.strip()
    return order_number if order_number.startswith(ORDER_NUMBER_PREFIX) else f"{ORDER_NUMBER_PREFIX}{order_number}"


async def get_order_by_number(db: AsyncSession, tenant_id: int, order_number: str, phone: str) -> Order:
    result = await db.execute(
        _with_details(
            select(Order).where(
                Order.tenant_id == tenant_id,
                Order.order_number == normalize_order_number(order_number),
            )
        )
    )
    order = result.scalar_one_or_none()

    # A wrong phone looks exactly like a missing order
    if order is None or order.customer.phone != phone.strip():
        raise OrderNotFound()
    return order


async def list_orders(db: AsyncSession, tenant_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
    query = select(Order).where(Order.tenant_id == tenant_id)
    if status is not None:
        query = query.where(Order.status == status)
    query = query.order_by(Order.created_at.desc(), Order.order_number.desc())

    result = await db.execute(_with_details(query))
    return list(result.scalars().all())


async def update_order_status(db: AsyncSession, order_id: str, tenant_id: int, status: OrderStatus) -> Order:
    order = await get_order(db, order_id, tenant_id)

    if order.status in FINAL_STATUSES and status != order.status:
        raise ValidationError(f"Order {order.order_number} is {order.status.value} and can no longer change")

    previous = order.status
    order.status = status
    await db.commit()

    log.info("order status: tenant=%s number=%s %s -> %s", tenant_id, order.order_number, previous.value, status.value)
    return await get_order(db, order_id, tenant_id)
