# scootershop/crud/product.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from scootershop.models.product import Product
from typing import Any, Dict, List, Optional
from datetime import datetime
import uuid
from scootershop.schemas.product import ProductCreate

async def get_products(db: AsyncSession) -> List[Product]:
    result = await db.execute(select(Product).order_by(desc(Product.created_at)))
    return result.scalars().all()

async def get_product_by_id(product_id: uuid.UUID, db: AsyncSession) -> Optional[Product]:
    result = await db.execute(select(Product).where(Product.id == product_id))
    return result.scalar_one_or_none()

async def get_product_by_barcode(barcode: str, db: AsyncSession,
                                 exclude_id: Optional[uuid.UUID] = None) -> Optional[Product]:
    query = select(Product).where(Product.barcode == barcode)
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()

async def create_product(product_in: ProductCreate, db: AsyncSession) -> Product:
    fields = product_in.model_dump()
    fields["category"] = fields["category"] or "General"
    fields["description"] = fields["description"] or ""
    new_product = Product(**fields)
    db.add(new_product)
    await db.commit()
    await db.refresh(new_product)
    return new_product

async def update_product(product: Product, fields: Dict[str, Any], db: AsyncSession) -> Product:
    for field, value in fields.items():
        setattr(product, field, value)
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product

async def adjust_stock(product: Product, delta: int, db: AsyncSession) -> Product:
    """Add `delta` to stock (negative to deduct); stock never goes below zero."""
    product.stock = max(0, (product.stock or 0) + delta)
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product

async def record_sale(product: Product, quantity: int, db: AsyncSession) -> Product:
    product.stock = max(0, (product.stock or 0) - quantity)
    product.total_sold = (product.total_sold or 0) + quantity
    product.last_sale_date = datetime.now()
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product

async def delete_product(product: Product, db: AsyncSession) -> None:
    await db.delete(product)
    await db.commit()
