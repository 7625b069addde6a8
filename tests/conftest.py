import os
from decimal import Decimal
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

os.environ.setdefault("ENV_MODE", "development")
os.environ.setdefault("ENCRYPTION_MASTER_KEY", "test-master-key")

from orderdesk.auth.routes import current_active_user  # noqa: E402
from orderdesk.core.config import Settings  # noqa: E402
from orderdesk.db import Database  # noqa: E402
from orderdesk.main import create_app  # noqa: E402
from orderdesk.models.catalog import Category, Product  # noqa: E402
from orderdesk.models.tenant import Tenant, TenantStatus  # noqa: E402
from orderdesk.utils.slug import slugify  # noqa: E402
from orderdesk.utils.storage import LocalImageStorage  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'orderdesk.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def storage(tmp_path):
    return LocalImageStorage(str(tmp_path / "uploads"), "/uploads")


@pytest.fixture
def app(database, storage, tmp_path):
    settings = Settings(database_url=database.url, uploads_dir=str(tmp_path / "uploads"))
    application = create_app(settings)
    # ASGITransport does not run the lifespan; wire state by hand
    application.state.db = database
    application.state.storage = storage
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def login_as(app):
    """Authenticate admin requests as a user of ``tenant``."""

    def _login(tenant):
        user = SimpleNamespace(id="admin-" + tenant.slug, email=f"admin@{tenant.slug}.test", tenant_id=tenant.id)
        app.dependency_overrides[current_active_user] = lambda: user
        return user

    return _login


# ----- Seed helpers
# Each helper uses its own short-lived session: an open SQLite transaction
# holds the write lock and would stall the app's requests.
async def make_tenant(database, slug, status=TenantStatus.ACTIVE, **fields):
    fields.setdefault("business_name", slug.title())
    async with database.session() as s:
        tenant = Tenant(slug=slug, status=status, **fields)
        s.add(tenant)
        await s.commit()
        return tenant


async def make_category(database, tenant, name="Burgers", **fields):
    async with database.session() as s:
        category = Category(tenant_id=tenant.id, name=name, slug=slugify(name), **fields)
        s.add(category)
        await s.commit()
        return category


async def make_product(database, tenant, category, name, price, available=True, **fields):
    async with database.session() as s:
        product = Product(
            tenant_id=tenant.id,
            category_id=category.id,
            name=name,
            slug=slugify(name),
            price=Decimal(price),
            available=available,
            **fields,
        )
        s.add(product)
        await s.commit()
        return product


async def count_rows(database, model, **filters):
    async with database.session() as s:
        query = select(func.count()).select_from(model)
        for column, value in filters.items():
            query = query.where(getattr(model, column) == value)
        return await s.scalar(query)


async def fetch_one(database, model, **filters):
    async with database.session() as s:
        query = select(model)
        for column, value in filters.items():
            query = query.where(getattr(model, column) == value)
        return (await s.execute(query)).scalar_one()


@pytest.fixture
async def bella(database):
    """Active restaurant with a small menu."""
    tenant = await make_tenant(database, "bella", business_name="Pizzaria Bella")
    category = await make_category(database, tenant, "Pizzas")
    margherita = await make_product(database, tenant, category, "Margherita", "29.90")
    calabresa = await make_product(database, tenant, category, "Calabresa", "12.33")
    hidden = await make_product(database, tenant, category, "Quatro Queijos", "39.90", available=False)
    return SimpleNamespace(
        tenant=tenant, category=category, margherita=margherita, calabresa=calabresa, hidden=hidden
    )


@pytest.fixture
async def roma(database):
    tenant = await make_tenant(database, "roma", business_name="Cantina Roma")
    category = await make_category(database, tenant, "Massas")
    lasagna = await make_product(database, tenant, category, "Lasanha", "45.00")
    return SimpleNamespace(tenant=tenant, category=category, lasagna=lasagna)


def order_payload(tenant_slug, items, /, phone="11987654321", **overrides):
    payload = {
        "customer_name": "Maria Silva",
        "phone": phone,
        "email": "maria@gmail.com",
        "type": "PICKUP",
        "payment_method": "PIX",
        "items": [{"product_id": pid, "quantity": qty} for pid, qty in items],
        "tenant_slug": tenant_slug,
    }
    payload.update(overrides)
    return payload


ADDRESS = {
    "street": "Rua das Flores",
    "number": "123",
    "district": "Centro",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01000-000",
}
