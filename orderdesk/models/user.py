from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from orderdesk.models.base import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    """Dashboard account. Every admin belongs to exactly one restaurant."""

    __tablename__ = "users"

    name = Column(String, nullable=False, default="")
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    tenant = relationship("Tenant", back_populates="users")
