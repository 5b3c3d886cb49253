# backend/routes/distributors.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log, client_ip
from utils.updates import changed_fields, apply_changes
from models.parties import Distributor
import schemas.parties as party_schemas

router = APIRouter(prefix="/distributors", tags=["Distributors"])


def _get_or_404(db: Session, distributor_id: int) -> Distributor:
    distributor = db.query(Distributor).filter(Distributor.id == distributor_id).first()
    if not distributor:
        raise HTTPException(status_code=404, detail="Distributor not found")
    return distributor


@router.get("", response_model=party_schemas.DistributorPage)
def list_distributors(
    q: Optional[str] = Query(None, description="Search by name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    query = db.query(Distributor)
    if q:
        query = query.filter(Distributor.name.ilike(f"%{q}%"))
    query = query.order_by(Distributor.name.asc(), Distributor.id.asc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.get("/{distributor_id}", response_model=party_schemas.DistributorOut)
def get_distributor(distributor_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, distributor_id)


@router.post("", response_model=party_schemas.DistributorOut, status_code=status.HTTP_201_CREATED)
def create_distributor(payload: party_schemas.DistributorCreate, request: Request, db: Session = Depends(get_db)):
    distributor = Distributor(**payload.model_dump())
    db.add(distributor)
    db.commit()
    db.refresh(distributor)

    write_log(db, action="DISTRIBUTOR_CREATE", resource="distributors", ip=client_ip(request), meta={"id": distributor.id})
    return distributor


@router.put("/{distributor_id}", response_model=party_schemas.DistributorOut)
def update_distributor(
    distributor_id: int,
    payload: party_schemas.DistributorUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = changed_fields(payload, required=("name",))
    distributor = _get_or_404(db, distributor_id)

    apply_changes(distributor, changes)
    db.commit()
    db.refresh(distributor)

    write_log(db, action="DISTRIBUTOR_UPDATE", resource="distributors", ip=client_ip(request), meta={"id": distributor.id, "fields": sorted(changes)})
    return distributor


@router.delete("/{distributor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_distributor(distributor_id: int, request: Request, db: Session = Depends(get_db)):
    distributor = _get_or_404(db, distributor_id)
    db.delete(distributor)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Distributor is referenced by purchases")

    write_log(db, action="DISTRIBUTOR_DELETE", resource="distributors", ip=client_ip(request), meta={"id": distributor_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
