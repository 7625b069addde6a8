import asyncio

import pytest

from orderdesk.crud.order import create_public_order
from orderdesk.models.customer import Customer
from orderdesk.schemas.order import PublicOrderCreate
from tests.conftest import count_rows, order_payload

pytestmark = pytest.mark.anyio


async def test_concurrent_checkouts_get_distinct_numbers(database, bella):
    async def checkout(phone):
        data = PublicOrderCreate(**order_payload("bella", [(bella.margherita.id, 1)], phone=phone))
        async with database.session() as session:
            order = await create_public_order(session, data)
            return order.order_number

    numbers = await asyncio.gather(*(checkout(f"1198765432{i}") for i in range(4)))

    assert sorted(numbers) == ["#0001", "#0002", "#0003", "#0004"]


async def test_concurrent_first_orders_share_one_customer(database, bella):
    async def checkout():
        data = PublicOrderCreate(**order_payload("bella", [(bella.calabresa.id, 1)]))
        async with database.session() as session:
            return await create_public_order(session, data)

    first, second = await asyncio.gather(checkout(), checkout())

    assert first.customer_id == second.customer_id
    assert first.order_number != second.order_number
    assert await count_rows(database, Customer) == 1
