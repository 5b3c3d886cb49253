# backend/models/product.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from database import Base

# Model Product
# Catalog entry sold in the store: prices in whole currency units,
# stock_quantity never drops below zero (CHECK constraint + checkout guard).
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, index=True)
    brand = Column(String)

    buy_price = Column(Integer, CheckConstraint("buy_price >= 0"), nullable=True)
    sell_price = Column(Integer, CheckConstraint("sell_price >= 0"), nullable=False, default=0)

    stock_quantity = Column(Integer, CheckConstraint("stock_quantity >= 0"), nullable=False, default=0)
    unit = Column(String)
