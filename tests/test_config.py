import pytest

from orderdesk.core.constants import DEFAULT_PUBLIC_CONFIG
from orderdesk.models.tenant import Tenant, TenantStatus
from orderdesk.utils.security import decrypt_api_key
from tests.conftest import fetch_one, make_tenant

pytestmark = pytest.mark.anyio

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def test_default_payload_without_any_tenant(client):
    first = await client.get("/api/public/config")
    second = await client.get("/api/public/config")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert first.json()["business_name"] == DEFAULT_PUBLIC_CONFIG["business_name"]
    assert first.json()["schedule"]["monday"] == {"open": "18:00", "close": "23:00", "closed": False}


async def test_unknown_slug_gets_default_payload(client, bella):
    resp = await client.get("/api/public/nope/config")

    assert resp.status_code == 200
    assert resp.json()["business_name"] == "Demo Restaurant"


async def test_public_config_exposes_only_storefront_fields(client, database):
    await make_tenant(database, "bella", business_name="Pizzaria Bella", email="owner@bella.com", city="Santos")

    resp = await client.get("/api/public/bella/config")

    body = resp.json()
    assert body["business_name"] == "Pizzaria Bella"
    assert body["primary_color"] == "#ea580c"
    assert "email" not in body
    assert "city" not in body
    assert "ai_api_key_encrypted" not in body


async def test_fallback_prefers_active_tenant(client, database):
    await make_tenant(database, "old", business_name="Old Place", status=TenantStatus.SUSPENDED)
    await make_tenant(database, "live", business_name="Live Place")

    resp = await client.get("/api/public/config")
    assert resp.json()["business_name"] == "Live Place"

    resp = await client.get("/api/public/config", headers={"X-Tenant-Slug": "old"})
    assert resp.json()["business_name"] == "Old Place"


async def test_fallback_uses_any_tenant_when_none_active(client, database):
    await make_tenant(database, "old", business_name="Old Place", status=TenantStatus.CANCELLED)

    resp = await client.get("/api/public/config")

    assert resp.json()["business_name"] == "Old Place"


async def test_admin_config_requires_login(client, bella):
    resp = await client.get("/api/config")

    assert resp.status_code == 401
    assert "error" in resp.json()


async def test_update_config_drops_unknown_fields(client, database, bella, login_as):
    login_as(bella.tenant)

    resp = await client.put(
        "/api/config",
        json={
            "business_name": "Bella Napoli",
            "primary_color": "#112233",
            "phone": None,
            "slug": "hijacked",
            "status": "CANCELLED",
            "last_order_number": 999,
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["business_name"] == "Bella Napoli"
    assert body["primary_color"] == "#112233"
    assert body["slug"] == "bella"
    assert body["status"] == "ACTIVE"

    tenant = await fetch_one(database, Tenant, id=bella.tenant.id)
    assert tenant.last_order_number == 0


async def test_update_config_rejects_wrong_types(client, bella, login_as):
    login_as(bella.tenant)

    resp = await client.put("/api/config", json={"is_open": "maybe"})

    assert resp.status_code == 400


async def test_ai_key_is_encrypted_and_never_returned(client, database, bella, login_as):
    login_as(bella.tenant)

    resp = await client.put("/api/config", json={"ai_api_key": "sk-test-123", "ai_enabled": True})

    assert resp.status_code == 200
    body = resp.json()
    assert body["ai_enabled"] is True
    assert body["ai_key_configured"] is True
    assert "ai_api_key" not in body
    assert "ai_api_key_encrypted" not in body

    tenant = await fetch_one(database, Tenant, id=bella.tenant.id)
    assert tenant.ai_api_key_encrypted != "sk-test-123"
    assert decrypt_api_key(tenant.ai_api_key_encrypted) == "sk-test-123"


async def test_upload_logo(client, database, storage, bella, login_as):
    login_as(bella.tenant)

    resp = await client.post(
        "/api/config/upload",
        files={"file": ("logo.PNG", PNG, "image/png")},
        data={"type": "logo"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["type"] == "logo"
    assert body["url"].startswith("/uploads/")
    assert body["url"].endswith(".png")
    assert (storage.directory / body["url"].rsplit("/", 1)[-1]).read_bytes() == PNG

    tenant = await fetch_one(database, Tenant, id=bella.tenant.id)
    assert tenant.logo == body["url"]

    public = await client.get("/api/public/bella/config")
    assert public.json()["logo"] == body["url"]


async def test_replacing_banner_removes_previous_file(client, storage, bella, login_as):
    login_as(bella.tenant)

    first = await client.post(
        "/api/config/upload", files={"file": ("a.jpg", b"one", "image/jpeg")}, data={"type": "banner"}
    )
    second = await client.post(
        "/api/config/upload", files={"file": ("b.jpg", b"two", "image/jpeg")}, data={"type": "banner"}
    )

    assert second.status_code == 200
    assert not (storage.directory / first.json()["url"].rsplit("/", 1)[-1]).exists()
    assert (storage.directory / second.json()["url"].rsplit("/", 1)[-1]).exists()


@pytest.mark.parametrize(
    "files, data, status",
    [
        ({"file": ("doc.pdf", b"%PDF", "application/pdf")}, {"type": "logo"}, 400),
        ({"file": ("logo.png", PNG, "image/png")}, {"type": "avatar"}, 400),
        ({"file": ("logo.png", PNG, "image/png")}, {}, 400),
        (None, {"type": "logo"}, 400),
        ({"file": ("big.png", b"\x00" * (2 * 1024 * 1024 + 1), "image/png")}, {"type": "logo"}, 413),
    ],
)
async def test_upload_rejections(client, database, bella, login_as, files, data, status):
    login_as(bella.tenant)

    resp = await client.post("/api/config/upload", files=files, data=data)

    assert resp.status_code == status
    assert "error" in resp.json()
    tenant = await fetch_one(database, Tenant, id=bella.tenant.id)
    assert tenant.logo is None


async def test_unknown_header_slug_without_tenants_gets_default_payload(client):
    resp = await client.get("/api/public/config", headers={"X-Tenant-Slug": "ghost"})

    assert resp.status_code == 200
    assert resp.json()["business_name"] == "Demo Restaurant"


async def test_unknown_header_slug_falls_back_to_active_tenant(client, bella):
    resp = await client.get("/api/public/config", headers={"X-Tenant-Slug": "ghost"})

    assert resp.status_code == 200
    assert resp.json()["business_name"] == "Pizzaria Bella"


async def test_unreadable_ai_key_is_reported_unconfigured(client, database, login_as):
    # Encrypted under a different master key
    tenant = await make_tenant(database, "bella", ai_api_key_encrypted="gAAAAABstale-token", ai_enabled=True)
    login_as(tenant)

    resp = await client.get("/api/config")

    assert resp.status_code == 200
    assert resp.json()["ai_key_configured"] is False
