import pytest

from orderdesk.core.errors import ValidationError
from orderdesk.crud.tenant import validate_tenant_slug


def test_business_name_becomes_slug():
    assert validate_tenant_slug("Pizzaria Bella") == "pizzaria-bella"


@pytest.mark.parametrize("slug", ["orders", "Orders", " ORDERS! "])
def test_orders_slug_is_reserved(slug):
    # /api/public/orders/... belongs to the order lookup routes
    with pytest.raises(ValidationError):
        validate_tenant_slug(slug)


def test_slug_needs_letters_or_digits():
    with pytest.raises(ValidationError):
        validate_tenant_slug("!!!")
