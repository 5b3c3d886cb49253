# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, CheckConstraint, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# A single pending selection (product + quantity) in a customer's cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), index=True, nullable=False) # Cart owner
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now()) # Creation timestamp

    product = relationship("Product") # Relationship to Product
    customer = relationship("Customer")

    __table_args__ = (
        # One row per product in a customer's cart; adding again bumps the quantity
        UniqueConstraint("customer_id", "product_id", name="uq_cartitem_customer_product"),
    )
