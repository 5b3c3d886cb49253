# backend/routes/couriers.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log, client_ip
from utils.updates import changed_fields, apply_changes
from models.parties import Courier
import schemas.parties as party_schemas

router = APIRouter(prefix="/couriers", tags=["Couriers"])


def _get_or_404(db: Session, courier_id: int) -> Courier:
    courier = db.query(Courier).filter(Courier.id == courier_id).first()
    if not courier:
        raise HTTPException(status_code=404, detail="Courier not found")
    return courier


@router.get("", response_model=party_schemas.CourierPage)
def list_couriers(
    q: Optional[str] = Query(None, description="Search by name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    query = db.query(Courier)
    if q:
        query = query.filter(Courier.name.ilike(f"%{q}%"))
    query = query.order_by(Courier.name.asc(), Courier.id.asc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{courier_id}", response_model=party_schemas.CourierOut)
def get_courier(courier_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, courier_id)


@router.post("", response_model=party_schemas.CourierOut, status_code=status.HTTP_201_CREATED)
def create_courier(payload: party_schemas.CourierCreate, request: Request, db: Session = Depends(get_db)):
    courier = Courier(**payload.model_dump())
    db.add(courier)
    db.commit()
    db.refresh(courier)

    write_log(db, action="COURIER_CREATE", resource="couriers", ip=client_ip(request), meta={"id": courier.id})
    return courier


@router.put("/{courier_id}", response_model=party_schemas.CourierOut)
def update_courier(
    courier_id: int,
    payload: party_schemas.CourierUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = changed_fields(payload, required=("name",))
    courier = _get_or_404(db, courier_id)

    apply_changes(courier, changes)
    db.commit()
    db.refresh(courier)

    write_log(db, action="COURIER_UPDATE", resource="couriers", ip=client_ip(request), meta={"id": courier.id, "fields": sorted(changes)})
    return courier


@router.delete("/{courier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_courier(courier_id: int, request: Request, db: Session = Depends(get_db)):
    courier = _get_or_404(db, courier_id)
    db.delete(courier)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Courier is assigned to sales")

    write_log(db, action="COURIER_DELETE", resource="couriers", ip=client_ip(request), meta={"id": courier_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
