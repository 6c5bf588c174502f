# scootershop/schemas/product.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

def _clean_barcode(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if value in ("", "null", "undefined"):
        return None
    return value

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1)
    buy_price: float = Field(..., ge=0)
    sell_price: float = Field(..., ge=0)
    category: Optional[str] = "General"
    stock: int = Field(0, ge=0)
    min_stock: int = Field(5, ge=0)
    description: Optional[str] = ""
    barcode: Optional[str] = None

    @field_validator("barcode")
    @classmethod
    def _barcode(cls, value: Optional[str]) -> Optional[str]:
        return _clean_barcode(value)

class ProductCreate(ProductBase):
    pass

class ProductUpdate(BaseModel):
    # Either a stock decrement on its own, or a full update
    decrease_stock: Optional[int] = Field(None, gt=0)
    name: Optional[str] = None
    buy_price: Optional[float] = Field(None, ge=0)
    sell_price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    min_stock: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    barcode: Optional[str] = None

    @field_validator("barcode")
    @classmethod
    def _barcode(cls, value: Optional[str]) -> Optional[str]:
        return _clean_barcode(value)

class ProductRead(ProductBase):
    id: uuid.UUID
    total_sold: int
    last_sale_date: Optional[datetime] = None
    profit_margin: float
    stock_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
