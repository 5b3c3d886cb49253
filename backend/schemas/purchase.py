# backend/schemas/purchase.py
from pydantic import BaseModel, Field, ConfigDict
from datetime import date
from typing import List, Optional


class PurchaseCreate(BaseModel):
    distributor_id: Optional[int] = None
    user_id: Optional[int] = None
    purchase_date: Optional[date] = None
    total: Optional[int] = Field(None, ge=0)


class PurchaseOut(PurchaseCreate):
    id: int
    distributor_name: Optional[str] = None
    username: Optional[str] = None
    user_full_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PurchasePage(BaseModel):
    items: List[PurchaseOut]
    total: int
    page: int
    page_size: int


class PurchaseItemCreate(BaseModel):
    purchase_id: int
    product_id: int
    quantity: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)


class PurchaseItemOut(PurchaseItemCreate):
    id: int
    product_name: Optional[str] = None
    unit: Optional[str] = None


class PurchaseDetails(BaseModel):
    details: List[PurchaseItemOut]
