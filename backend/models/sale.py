# backend/models/sale.py
from sqlalchemy import Column, Integer, ForeignKey, Date
from sqlalchemy.orm import relationship
from database import Base

# Over-the-counter sales transaction recorded by staff
class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    courier_id = Column(Integer, ForeignKey("couriers.id"), nullable=True)
    sale_date = Column(Date, nullable=True, index=True)
    total = Column(Integer, nullable=True)

    customer = relationship("Customer")
    user = relationship("User")
    courier = relationship("Courier")
    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan", passive_deletes=True)


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=True)
    price = Column(Integer, nullable=True)

    sale = relationship("Sale", back_populates="items")
    product = relationship("Product")
