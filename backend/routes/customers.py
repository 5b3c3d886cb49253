# backend/routes/customers.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log, client_ip
from utils.updates import changed_fields, apply_changes
from models.parties import Customer
import schemas.parties as party_schemas

router = APIRouter(prefix="/customers", tags=["Customers"])


def _get_or_404(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("", response_model=party_schemas.CustomerPage)
def list_customers(
    q: Optional[str] = Query(None, description="Search by name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    query = db.query(Customer)
    if q:
        query = query.filter(Customer.name.ilike(f"%{q}%"))
    query = query.order_by(Customer.name.asc(), Customer.id.asc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{customer_id}", response_model=party_schemas.CustomerOut)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, customer_id)


@router.post("", response_model=party_schemas.CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(payload: party_schemas.CustomerCreate, request: Request, db: Session = Depends(get_db)):
    customer = Customer(**payload.model_dump())
    db.add(customer)
    db.commit()
    db.refresh(customer)

    write_log(db, action="CUSTOMER_CREATE", resource="customers", ip=client_ip(request), meta={"id": customer.id})
    return customer


@router.put("/{customer_id}", response_model=party_schemas.CustomerOut)
def update_customer(
    customer_id: int,
    payload: party_schemas.CustomerUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = changed_fields(payload, required=("name",))
    customer = _get_or_404(db, customer_id)

    apply_changes(customer, changes)
    db.commit()
    db.refresh(customer)

    write_log(db, action="CUSTOMER_UPDATE", resource="customers", ip=client_ip(request), meta={"id": customer.id, "fields": sorted(changes)})
    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, request: Request, db: Session = Depends(get_db)):
    customer = _get_or_404(db, customer_id)
    db.delete(customer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Customer has orders or sales")

    write_log(db, action="CUSTOMER_DELETE", resource="customers", ip=client_ip(request), meta={"id": customer_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
