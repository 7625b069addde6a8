from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from orderdesk.schemas.category import CategoryRead


class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    category_id: str
    tags: Optional[List[str]] = None
    available: bool = True
    stock: Optional[int] = Field(default=None, ge=0)
    calories: Optional[int] = Field(default=None, ge=0)
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    category_id: Optional[str] = None
    tags: Optional[List[str]] = None
    available: Optional[bool] = None
    stock: Optional[int] = Field(default=None, ge=0)
    calories: Optional[int] = Field(default=None, ge=0)
    ingredients: Optional[List[str]] = None
    allergens: Optional[List[str]] = None


class ProductRead(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryRead] = None


class ProductSummary(BaseModel):
    """Product details embedded in order items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: str
    price: Decimal
    image: Optional[str] = None
