# orderdesk/models/tenant.py
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import relationship

from orderdesk.models.base import Base, utcnow
from orderdesk.utils.security import decrypt_api_key


class TenantStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    status = Column(Enum(TenantStatus), nullable=False, default=TenantStatus.ACTIVE)

    # Branding / contact
    business_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    whatsapp_number = Column(String, nullable=True)
    logo = Column(String, nullable=True)
    banner = Column(String, nullable=True)
    primary_color = Column(String, nullable=True, default="#ea580c")
    secondary_color = Column(String, nullable=True, default="#18181b")
    accent_color = Column(String, nullable=True, default="#f97316")
    text_color = Column(String, nullable=True, default="#ffffff")
    bg_color = Column(String, nullable=True, default="#0a0a0a")

    # Address
    zip_code = Column(String, nullable=True)
    street = Column(String, nullable=True)
    number = Column(String, nullable=True)
    district = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)

    schedule = Column(JSON, nullable=True)  # {"monday": {"open": "18:00", "close": "23:00", "closed": false}, ...}
    is_open = Column(Boolean, nullable=False, default=True)

    ai_enabled = Column(Boolean, nullable=False, default=False)
    ai_api_key_encrypted = Column(Text, nullable=True)

    # Highest order number handed out so far; bumped under the row lock
    last_order_number = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    users = relationship("User", back_populates="tenant")
    categories = relationship("Category", back_populates="tenant", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="tenant", cascade="all, delete-orphan")
    customers = relationship("Customer", back_populates="tenant", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="tenant", cascade="all, delete-orphan")

    @property
    def ai_key_configured(self) -> bool:
        # False when the stored key no longer decrypts under the current master key
        return bool(decrypt_api_key(self.ai_api_key_encrypted))

    @property
    def accepts_orders(self) -> bool:
        return self.status == TenantStatus.ACTIVE
