from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.errors import CategoryNotFound, ValidationError
from orderdesk.models.catalog import Category, Product
from orderdesk.models.customer.order import OrderItem
from orderdesk.schemas.category import CategoryCreate, CategoryUpdate
from orderdesk.utils.slug import slugify


async def create_category(db: AsyncSession, tenant_id: int, data: CategoryCreate) -> Category:
    category = Category(
        tenant_id=tenant_id,
        name=data.name.strip(),
        slug=slugify(data.name),
        icon=data.icon,
        order=data.order,
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def list_categories(db: AsyncSession, tenant_id: int, active_only: bool = False):
    query = select(Category).where(Category.tenant_id == tenant_id)
    if active_only:
        query = query.where(Category.active == True)  # noqa: E712
    query = query.order_by(Category.order.asc(), Category.name.asc())

    result = await db.execute(query)
    return result.scalars().all()


async def product_counts(db: AsyncSession, tenant_id: int) -> dict:
    result = await db.execute(
        select(Product.category_id, func.count(Product.id))
        .where(Product.tenant_id == tenant_id)
        .group_by(Product.category_id)
    )
    return {category_id: count for category_id, count in result.all()}


async def get_category(db: AsyncSession, category_id: str, tenant_id: int) -> Category:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.tenant_id == tenant_id)
    )
    category = result.scalar_one_or_none()
    if not category:
        raise CategoryNotFound()
    return category


async def update_category(db: AsyncSession, category_id: str, tenant_id: int, updates: CategoryUpdate) -> Category:
    category = await get_category(db, category_id, tenant_id)

    update_data = updates.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data:
        update_data["name"] = update_data["name"].strip()
        update_data["slug"] = slugify(update_data["name"])

    for key, value in update_data.items():
        setattr(category, key, value)

    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category_id: str, tenant_id: int) -> List[str]:
    """Delete a category and its products; returns the product images left to remove from storage."""
    category = await get_category(db, category_id, tenant_id)

    ordered = await db.scalar(
        select(func.count(OrderItem.id))
        .join(Product, Product.id == OrderItem.product_id)
        .where(Product.category_id == category.id)
    )
    if ordered:
        raise ValidationError("Category has products referenced by orders; deactivate it instead")

    result = await db.execute(
        select(Product.image).where(Product.category_id == category.id, Product.image.is_not(None))
    )
    images = list(result.scalars().all())

    await db.delete(category)
    await db.commit()
    return images
