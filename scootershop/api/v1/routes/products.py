# scootershop/api/v1/routes/products.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from scootershop.core.database import get_async_session
from scootershop.crud.product import (
    adjust_stock,
    create_product,
    delete_product,
    get_product_by_barcode,
    get_product_by_id,
    get_products,
    update_product,
)
from scootershop.schemas.product import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

DUPLICATE_BARCODE = "A product with this barcode already exists"

@router.get("", response_model=List[ProductRead])
async def read_products(db: AsyncSession = Depends(get_async_session)):
    return await get_products(db)

@router.get("/{product_id}", response_model=ProductRead)
async def read_product(product_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    product = await get_product_by_id(product_id, db)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product

@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product_endpoint(product_in: ProductCreate, db: AsyncSession = Depends(get_async_session)):
    if product_in.barcode and await get_product_by_barcode(product_in.barcode, db):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_BARCODE)
    product = await create_product(product_in, db)
    logger.info(f"📦 Product created: {product.name} (stock {product.stock})")
    return product

@router.put("/{product_id}", response_model=ProductRead)
async def update_product_endpoint(
    product_id: uuid.UUID,
    product_in: ProductUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Update a product.

    A body carrying `decrease_stock` only takes that many units out of stock
    (never below zero); any other body replaces the product's fields, and a
    blank barcode clears it.
    """
    product = await get_product_by_id(product_id, db)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    if product_in.decrease_stock is not None:
        product = await adjust_stock(product, -product_in.decrease_stock, db)
        logger.info(f"📦 Stock decreased: {product.name}, remaining {product.stock}")
        return product

    fields = product_in.model_dump(exclude_unset=True, exclude={"decrease_stock"})
    if "barcode" in fields and fields["barcode"]:
        if await get_product_by_barcode(fields["barcode"], db, exclude_id=product.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_BARCODE)
    # Required columns keep their value when sent as null
    for name in ("name", "buy_price", "sell_price", "category", "stock", "min_stock", "description"):
        if name in fields and fields[name] is None:
            fields.pop(name)
    return await update_product(product, fields, db)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product_endpoint(product_id: uuid.UUID, db: AsyncSession = Depends(get_async_session)):
    product = await get_product_by_id(product_id, db)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    await delete_product(product, db)
    return None
