from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from orderdesk.models.base import Base, utcnow
import uuid


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(String, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)

    available = Column(Boolean, nullable=False, default=True)
    stock = Column(Integer, nullable=True)
    tags = Column(JSON, nullable=True)

    # Nutrition / ingredient metadata
    calories = Column(Integer, nullable=True)
    ingredients = Column(JSON, nullable=True)
    allergens = Column(JSON, nullable=True)

    image = Column(String, nullable=True)  # public url returned by the image storage

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="products")
    category = relationship("Category", back_populates="products")
    order_items = relationship("OrderItem", back_populates="product")

    __table_args__ = (
        Index("idx_products_tenant_available", "tenant_id", "available"),
        Index("idx_products_tenant_slug", "tenant_id", "slug"),
    )
