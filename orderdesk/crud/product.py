from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderdesk.core.errors import ProductNotFound, ValidationError
from orderdesk.crud.category import get_category
from orderdesk.models.catalog import Product
from orderdesk.models.customer.order import OrderItem
from orderdesk.schemas.product import ProductCreate, ProductUpdate
from orderdesk.utils.slug import slugify


async def create_product(db: AsyncSession, tenant_id: int, data: ProductCreate) -> Product:
    # Category must live in the same restaurant
    await get_category(db, data.category_id, tenant_id)

    product = Product(
        tenant_id=tenant_id,
        slug=slugify(data.name),
        **data.model_dump(),
    )
    product.name = product.name.strip()
    db.add(product)
    await db.commit()
    return await get_product(db, product.id, tenant_id)


async def list_products(
    db: AsyncSession,
    tenant_id: int,
    category_id: Optional[str] = None,
    available: Optional[bool] = None,
):
    query = select(Product).where(Product.tenant_id == tenant_id)

    if category_id:
        query = query.where(Product.category_id == category_id)
    if available is not None:
        query = query.where(Product.available == available)

    query = query.options(selectinload(Product.category)).order_by(Product.created_at.desc())

    result = await db.execute(query)
    return result.scalars().all()


async def get_product(db: AsyncSession, product_id: str, tenant_id: int) -> Product:
    result = await db.execute(
        select(Product)
        .where(Product.id == product_id, Product.tenant_id == tenant_id)
        .options(selectinload(Product.category))
        .execution_options(populate_existing=True)
    )
    product = result.scalar_one_or_none()
    if not product:
        raise ProductNotFound()
    return product


async def get_product_by_slug(db: AsyncSession, slug: str, tenant_id: int) -> Product:
    result = await db.execute(
        select(Product)
        .where(Product.slug == slug, Product.tenant_id == tenant_id)
        .options(selectinload(Product.category))
        .order_by(Product.created_at.desc())
        .limit(1)
    )
    product = result.scalar_one_or_none()
    if not product:
        raise ProductNotFound()
    return product


async def update_product(db: AsyncSession, product_id: str, tenant_id: int, updates: ProductUpdate) -> Product:
    product = await get_product(db, product_id, tenant_id)

    update_data = updates.model_dump(exclude_unset=True)
    # Only nullable columns may be cleared explicitly
    for key in ("name", "description", "price", "category_id", "available"):
        if update_data.get(key, "") is None:
            update_data.pop(key)

    if "category_id" in update_data:
        await get_category(db, update_data["category_id"], tenant_id)
    if "name" in update_data:
        update_data["name"] = update_data["name"].strip()
        update_data["slug"] = slugify(update_data["name"])

    for key, value in update_data.items():
        setattr(product, key, value)

    await db.commit()
    return await get_product(db, product_id, tenant_id)


async def set_product_image(db: AsyncSession, product: Product, url: str) -> Product:
    product.image = url
    await db.commit()
    return await get_product(db, product.id, product.tenant_id)


async def delete_product(db: AsyncSession, product_id: str, tenant_id: int) -> Product:
    product = await get_product(db, product_id, tenant_id)

    ordered = await db.scalar(select(func.count(OrderItem.id)).where(OrderItem.product_id == product.id))
    if ordered:
        raise ValidationError("Product is referenced by orders; mark it unavailable instead")

    await db.delete(product)
    await db.commit()
    return product
