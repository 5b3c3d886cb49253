from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime

from models.order import OrderStatus


# Output schema for an individual order line item
class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int
    product_name: Optional[str] = None
    unit: Optional[str] = None
    quantity: int
    unit_price: int
    line_total: int


# Checkout request; shipping details are accepted but not used by checkout
class CheckoutPayload(BaseModel):
    customer_id: int
    shipping_address: Optional[str] = None
    note: Optional[str] = None

# Output schema representing the full order details
class OrderResponse(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    order_date: date
    status: OrderStatus
    total_amount: int
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)

# Schema for paginated order lists
class OrdersPage(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int

class OrderDetails(BaseModel):
    details: List[OrderItemOut]

# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: OrderStatus
