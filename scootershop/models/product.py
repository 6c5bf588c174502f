# scootershop/models/product.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, Uuid
from scootershop.core.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(length=150), nullable=False)
    buy_price = Column(Float, nullable=False)
    sell_price = Column(Float, nullable=False)
    category = Column(String(length=100), nullable=False, default="General")
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=5)
    description = Column(String, nullable=False, default="")
    # NULLs do not collide, so only real barcodes must be unique
    barcode = Column(String(length=64), nullable=True, unique=True)
    total_sold = Column(Integer, nullable=False, default=0)
    last_sale_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def profit_margin(self) -> float:
        if not self.buy_price:
            return 0.0
        return round((self.sell_price - self.buy_price) / self.buy_price * 100, 2)

    @property
    def stock_status(self) -> str:
        if self.stock == 0:
            return "out_of_stock"
        if self.stock <= self.min_stock:
            return "low_stock"
        return "in_stock"

    def __repr__(self):
        return f"<Product name={self.name} stock={self.stock}>"
