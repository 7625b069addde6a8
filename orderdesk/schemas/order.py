from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from orderdesk.core.constants import MIN_PHONE_DIGITS
from orderdesk.models.customer.order import OrderStatus, OrderType, PaymentMethod
from orderdesk.schemas.product import ProductSummary


# ---------- Checkout input ----------
class DeliveryAddress(BaseModel):
    street: str = Field(min_length=1)
    number: str = Field(min_length=1)
    district: str
    city: str
    state: str
    zip_code: Optional[str] = None
    complement: Optional[str] = None
    reference_point: Optional[str] = None


class OrderItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)
    notes: Optional[str] = None


class PublicOrderCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    phone: str
    email: Optional[EmailStr] = None
    type: OrderType
    delivery_address: Optional[DeliveryAddress] = None
    payment_method: PaymentMethod
    notes: Optional[str] = None
    items: List[OrderItemCreate] = Field(min_length=1)
    tenant_slug: str = Field(min_length=1)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        v = v.strip()
        if sum(ch.isdigit() for ch in v) < MIN_PHONE_DIGITS:
            raise ValueError(f"phone must contain at least {MIN_PHONE_DIGITS} digits")
        return v

    @model_validator(mode="after")
    def check_delivery_address(self):
        if self.type == OrderType.DELIVERY and self.delivery_address is None:
            raise ValueError("delivery_address is required for delivery orders")
        if self.type == OrderType.PICKUP:
            self.delivery_address = None
        return self


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# ---------- Output ----------
class CustomerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    phone: str


class CustomerRead(CustomerSummary):
    id: str
    email: Optional[str] = None
    addresses: List[dict] = []
    total_orders: int
    total_spent: Decimal


class OrderItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    quantity: int
    price: Decimal
    subtotal: Decimal
    notes: Optional[str] = None
    product: ProductSummary


class OrderBaseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_number: str
    type: OrderType
    status: OrderStatus
    payment_method: PaymentMethod
    delivery_address: Optional[dict[str, Any]] = None
    notes: Optional[str] = None
    total: Decimal
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []


class OrderRead(OrderBaseRead):
    customer_id: str
    customer: CustomerRead


class OrderHistoryRead(OrderBaseRead):
    """Order as listed for a phone number: customer reduced to name + phone."""

    customer: CustomerSummary
