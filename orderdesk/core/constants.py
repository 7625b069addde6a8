from decimal import Decimal

CENTS = Decimal("0.01")

ORDER_NUMBER_PREFIX = "#"
ORDER_NUMBER_WIDTH = 4

# Taken by /api/public/orders/...; a tenant with this slug would be unreachable
RESERVED_SLUGS = ("orders",)

MIN_PHONE_DIGITS = 10

ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"]
IMAGE_FIELDS = ("logo", "banner")

# Subset of tenant settings the storefront may read without a token
PUBLIC_CONFIG_FIELDS = (
    "business_name",
    "phone",
    "whatsapp_number",
    "logo",
    "banner",
    "primary_color",
    "secondary_color",
    "accent_color",
    "text_color",
    "bg_color",
    "is_open",
    "schedule",
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_SCHEDULE = {day: {"open": "18:00", "close": "23:00", "closed": False} for day in WEEKDAYS}

# Served by /api/public/config when no tenant has been provisioned yet
DEFAULT_PUBLIC_CONFIG = {
    "business_name": "Demo Restaurant",
    "phone": "(11) 99999-9999",
    "whatsapp_number": "5511999999999",
    "logo": None,
    "banner": None,
    "primary_color": "#ea580c",
    "secondary_color": "#18181b",
    "accent_color": "#f97316",
    "text_color": "#ffffff",
    "bg_color": "#0a0a0a",
    "is_open": True,
    "schedule": DEFAULT_SCHEDULE,
}
