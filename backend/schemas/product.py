# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    brand: Optional[str] = None
    buy_price: Optional[int] = Field(default=None, ge=0)
    sell_price: int = Field(default=0, ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    unit: Optional[str] = None


# Schema for creating a new product
class ProductCreate(ProductBase):
    pass


# Schema for partial product updates
class ProductUpdate(ORMBase):
    """All fields optional; only the ones sent are applied."""
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    brand: Optional[str] = None
    buy_price: Optional[int] = Field(None, ge=0)
    sell_price: Optional[int] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None


# Full product representation including ID
class ProductOut(ProductBase):
    id: int


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
