from decimal import Decimal

import pytest

from orderdesk.models.catalog import Category, Product
from tests.conftest import count_rows, make_category, order_payload

pytestmark = pytest.mark.anyio

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# ----- Storefront
async def test_public_products_only_available(client, bella, roma):
    resp = await client.get("/api/public/bella/products")

    assert resp.status_code == 200
    names = {p["name"] for p in resp.json()}
    assert names == {"Margherita", "Calabresa"}
    assert all(p["category"]["name"] == "Pizzas" for p in resp.json())


async def test_public_categories_only_active(client, database, bella):
    await make_category(database, bella.tenant, "Bebidas", order=2)
    await make_category(database, bella.tenant, "Antigas", active=False)

    resp = await client.get("/api/public/bella/categories")

    assert [c["name"] for c in resp.json()] == ["Pizzas", "Bebidas"]


async def test_public_product_by_slug(client, bella):
    resp = await client.get("/api/public/bella/products/margherita")

    assert resp.status_code == 200
    assert Decimal(resp.json()["price"]) == Decimal("29.90")

    resp = await client.get("/api/public/roma/products/margherita")
    assert resp.status_code == 404


async def test_unknown_slug_catalog_is_404(client, bella):
    resp = await client.get("/api/public/nope/products")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Restaurant not found"}


async def test_storefront_without_slug(client, bella, roma):
    resp = await client.get("/api/public/products")
    assert {p["name"] for p in resp.json()} == {"Margherita", "Calabresa"}

    resp = await client.get("/api/public/products", headers={"X-Tenant-Slug": "roma"})
    assert [p["name"] for p in resp.json()] == ["Lasanha"]


async def test_storefront_without_any_tenant(client):
    assert (await client.get("/api/public/products")).json() == []
    assert (await client.get("/api/public/categories")).json() == []


# ----- Admin
async def test_admin_requires_login(client, bella):
    assert (await client.get("/api/products")).status_code == 401
    assert (await client.get("/api/categories")).status_code == 401


async def test_category_crud(client, bella, login_as):
    login_as(bella.tenant)

    created = await client.post("/api/categories", json={"name": "Sobremesas Doces", "icon": "🍰", "order": 5})
    assert created.status_code == 201
    category = created.json()
    assert category["slug"] == "sobremesas-doces"
    assert category["active"] is True

    updated = await client.put(f"/api/categories/{category['id']}", json={"name": "Doces", "active": False})
    assert updated.json()["slug"] == "doces"
    assert updated.json()["active"] is False

    listed = await client.get("/api/categories")
    counts = {c["name"]: c["product_count"] for c in listed.json()}
    assert counts == {"Pizzas": 3, "Doces": 0}

    deleted = await client.delete(f"/api/categories/{category['id']}")
    assert deleted.status_code == 204


async def test_product_crud(client, bella, login_as):
    login_as(bella.tenant)

    created = await client.post(
        "/api/products",
        json={
            "name": "Pizza Doce de Chocolate",
            "description": "Com morangos",
            "price": "34.50",
            "category_id": bella.category.id,
            "tags": ["doce"],
            "allergens": ["leite"],
        },
    )
    assert created.status_code == 201
    product = created.json()
    assert product["slug"] == "pizza-doce-de-chocolate"
    assert product["category"]["id"] == bella.category.id

    updated = await client.put(f"/api/products/{product['id']}", json={"price": "36.00", "available": False})
    assert Decimal(updated.json()["price"]) == Decimal("36.00")
    assert updated.json()["available"] is False

    unavailable = await client.get("/api/products", params={"available": "false"})
    assert {p["name"] for p in unavailable.json()} == {"Pizza Doce de Chocolate", "Quatro Queijos"}

    assert (await client.delete(f"/api/products/{product['id']}")).status_code == 204
    assert (await client.get(f"/api/products/{product['id']}")).status_code == 404


async def test_product_price_must_be_positive(client, bella, login_as):
    login_as(bella.tenant)

    resp = await client.post(
        "/api/products", json={"name": "Free", "price": "0", "category_id": bella.category.id}
    )

    assert resp.status_code == 400


async def test_admin_never_sees_other_tenant(client, database, bella, roma, login_as):
    login_as(bella.tenant)

    listed = await client.get("/api/products")
    assert "Lasanha" not in {p["name"] for p in listed.json()}

    assert (await client.get(f"/api/products/{roma.lasagna.id}")).status_code == 404
    assert (await client.put(f"/api/products/{roma.lasagna.id}", json={"price": "1.00"})).status_code == 404
    assert (await client.delete(f"/api/products/{roma.lasagna.id}")).status_code == 404
    assert (await client.delete(f"/api/categories/{roma.category.id}")).status_code == 404

    # Products cannot be filed under another restaurant's category
    resp = await client.post(
        "/api/products", json={"name": "Intruso", "price": "10.00", "category_id": roma.category.id}
    )
    assert resp.status_code == 404

    assert await count_rows(database, Product, tenant_id=roma.tenant.id) == 1
    assert await count_rows(database, Category, tenant_id=roma.tenant.id) == 1


async def test_ordered_product_cannot_be_deleted(client, bella, login_as):
    placed = await client.post("/api/public/orders", json=order_payload("bella", [(bella.margherita.id, 1)]))
    assert placed.status_code == 201

    login_as(bella.tenant)
    resp = await client.delete(f"/api/products/{bella.margherita.id}")
    assert resp.status_code == 400

    resp = await client.delete(f"/api/categories/{bella.category.id}")
    assert resp.status_code == 400


async def test_product_image_upload_replaces_previous(client, storage, bella, login_as):
    login_as(bella.tenant)
    url = f"/api/products/{bella.margherita.id}/image"

    first = await client.post(url, files={"image": ("a.png", PNG, "image/png")})
    second = await client.post(url, files={"image": ("b.webp", b"RIFF", "image/webp")})

    assert first.status_code == second.status_code == 200
    assert second.json()["image"].endswith(".webp")
    assert not (storage.directory / first.json()["image"].rsplit("/", 1)[-1]).exists()

    public = await client.get("/api/public/bella/products/margherita")
    assert public.json()["image"] == second.json()["image"]


async def test_unknown_header_slug_falls_back(client, bella):
    headers = {"X-Tenant-Slug": "ghost"}

    products = await client.get("/api/public/products", headers=headers)
    categories = await client.get("/api/public/categories", headers=headers)

    assert products.status_code == categories.status_code == 200
    assert {p["name"] for p in products.json()} == {"Margherita", "Calabresa"}
    assert [c["name"] for c in categories.json()] == ["Pizzas"]


async def test_unknown_header_slug_without_tenants_is_empty(client):
    headers = {"X-Tenant-Slug": "ghost"}

    assert (await client.get("/api/public/products", headers=headers)).json() == []
    assert (await client.get("/api/public/categories", headers=headers)).json() == []


async def test_deleting_category_removes_product_images(client, database, storage, bella, login_as):
    login_as(bella.tenant)
    uploaded = await client.post(
        f"/api/products/{bella.margherita.id}/image", files={"image": ("m.png", PNG, "image/png")}
    )
    stored = storage.directory / uploaded.json()["image"].rsplit("/", 1)[-1]
    assert stored.exists()

    resp = await client.delete(f"/api/categories/{bella.category.id}")

    assert resp.status_code == 204
    assert not stored.exists()
    assert await count_rows(database, Product, tenant_id=bella.tenant.id) == 0
