import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.models.customer import Customer

log = logging.getLogger(__name__)


def _same_address(a: dict, b: dict) -> bool:
    return a.get("street") == b.get("street") and a.get("number") == b.get("number")


def merge_address(addresses: Optional[list], address: Optional[dict]) -> list:
    """Append ``address`` unless one with the same street + number is saved."""
    addresses = list(addresses or [])
    if address and not any(_same_address(saved, address) for saved in addresses):
        addresses.append(address)
    return addresses


async def get_customer_by_phone(db: AsyncSession, tenant_id: int, phone: str) -> Optional[Customer]:
    result = await db.execute(
        select(Customer).where(Customer.tenant_id == tenant_id, Customer.phone == phone)
    )
    return result.scalar_one_or_none()


async def upsert_customer(
    db: AsyncSession,
    tenant_id: int,
    *,
    name: str,
    phone: str,
    email: Optional[str] = None,
    address: Optional[dict] = None,
) -> Customer:
    """
    Find the restaurant's customer for ``phone`` or create one. Runs inside the
    caller's transaction; nothing is committed here.
    """
    customer = await get_customer_by_phone(db, tenant_id, phone)

    if customer is None:
        customer = Customer(
            tenant_id=tenant_id,
            name=name,
            phone=phone,
            email=email,
            addresses=[address] if address else [],
            total_orders=0,
            total_spent=Decimal("0"),
        )
        try:
            async with db.begin_nested():
                db.add(customer)
        except IntegrityError:
            # Someone else registered this phone first; use their row
            existing = await get_customer_by_phone(db, tenant_id, phone)
            if existing is None:
                raise
            log.info("customer upsert lost insert race: tenant=%s phone=%s", tenant_id, phone)
            customer = existing
        else:
            log.info("customer created: tenant=%s customer=%s", tenant_id, customer.id)
            return customer

    merged = merge_address(customer.addresses, address)
    if len(merged) != len(customer.addresses or []):
        # New list object so the JSON column is flagged dirty
        customer.addresses = merged
        await db.flush()

    return customer


async def record_order(db: AsyncSession, customer_id: str, total: Decimal) -> None:
    await db.execute(
        update(Customer)
        .where(Customer.id == customer_id)
        .values(
            total_orders=Customer.total_orders + 1,
            total_spent=Customer.total_spent + total,
        )
        .execution_options(synchronize_session=False)
    )
