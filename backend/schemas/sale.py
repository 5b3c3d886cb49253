# backend/schemas/sale.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import date
from typing import List, Optional


class SaleCreate(BaseModel):
    customer_id: Optional[int] = None
    user_id: Optional[int] = None
    courier_id: Optional[int] = None
    sale_date: Optional[date] = None
    total: Optional[int] = Field(None, ge=0)


class SaleOut(SaleCreate):
    id: int
    customer_name: Optional[str] = None
    username: Optional[str] = None
    user_full_name: Optional[str] = None
    courier_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SalePage(BaseModel):
    items: List[SaleOut]
    total: int
    page: int
    page_size: int


class SaleItemCreate(BaseModel):
    sale_id: int
    product_id: int
    quantity: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)


class SaleItemOut(SaleItemCreate):
    id: int
    product_name: Optional[str] = None
    unit: Optional[str] = None


class SaleDetails(BaseModel):
    details: List[SaleItemOut]
