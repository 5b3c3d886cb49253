# backend/models/purchase.py
from sqlalchemy import Column, Integer, ForeignKey, Date
from sqlalchemy.orm import relationship
from database import Base

# Restocking transaction: goods bought from a distributor
class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)
    distributor_id = Column(Integer, ForeignKey("distributors.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    purchase_date = Column(Date, nullable=True, index=True)
    total = Column(Integer, nullable=True)

    distributor = relationship("Distributor")
    user = relationship("User")
    items = relationship("PurchaseItem", back_populates="purchase", cascade="all, delete-orphan", passive_deletes=True)


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, index=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=True)
    price = Column(Integer, nullable=True)

    purchase = relationship("Purchase", back_populates="items")
    product = relationship("Product")
