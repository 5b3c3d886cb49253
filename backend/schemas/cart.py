from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import List, Optional

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    customer_id: int
    product_id: int
    quantity: int = Field(gt=0)

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int = Field(gt=0)

# Raw cart row as stored
class CartItemRow(BaseModel):
    id: int
    customer_id: int
    product_id: int
    quantity: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

# Cart row joined with the product it points to
class CartItemOut(CartItemRow):
    product_name: Optional[str] = None
    sell_price: Optional[int] = None
    stock_quantity: Optional[int] = None
    unit: Optional[str] = None
    line_total: int = 0

# Response schema for the entire cart
class CartOut(BaseModel):
    items: List[CartItemOut]
    total: int
