from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from orderdesk.models.base import Base, utcnow
import uuid


class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)

    name = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="categories")
    products = relationship("Product", back_populates="category", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_categories_tenant_order", "tenant_id", "order"),
    )
