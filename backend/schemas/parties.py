# backend/schemas/parties.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ---- Distributor ----
class DistributorCreate(ORMBase):
    name: str = Field(..., min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None

class DistributorUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None

class DistributorOut(DistributorCreate):
    id: int

class DistributorPage(ORMBase):
    items: List[DistributorOut]
    total: int
    page: int
    page_size: int


# ---- Customer ----
class CustomerCreate(ORMBase):
    name: str = Field(..., min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None

class CustomerUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None

class CustomerOut(CustomerCreate):
    id: int

class CustomerPage(ORMBase):
    items: List[CustomerOut]
    total: int
    page: int
    page_size: int


# ---- Courier ----
class CourierCreate(ORMBase):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None

class CourierUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None

class CourierOut(CourierCreate):
    id: int

class CourierPage(ORMBase):
    items: List[CourierOut]
    total: int
    page: int
    page_size: int
