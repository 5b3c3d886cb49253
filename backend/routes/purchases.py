# backend/routes/purchases.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from database import get_db
from utils.audit import write_log, client_ip
from models.purchase import Purchase, PurchaseItem
import schemas.purchase as purchase_schemas

router = APIRouter(prefix="/purchases", tags=["Purchases"])


def _purchase_to_out(p: Purchase) -> purchase_schemas.PurchaseOut:
    return purchase_schemas.PurchaseOut(
        id=p.id,
        distributor_id=p.distributor_id,
        user_id=p.user_id,
        purchase_date=p.purchase_date,
        total=p.total,
        distributor_name=p.distributor.name if p.distributor else None,
        username=p.user.username if p.user else None,
        user_full_name=p.user.full_name if p.user else None,
    )


def _item_to_out(it: PurchaseItem) -> purchase_schemas.PurchaseItemOut:
    return purchase_schemas.PurchaseItemOut(
        id=it.id,
        purchase_id=it.purchase_id,
        product_id=it.product_id,
        quantity=it.quantity,
        price=it.price,
        product_name=it.product.name if it.product else None,
        unit=it.product.unit if it.product else None,
    )


def _query(db: Session):
    return db.query(Purchase).options(
        joinedload(Purchase.distributor), joinedload(Purchase.user)
    )


# Restocking purchases, newest first
@router.get("", response_model=purchase_schemas.PurchasePage)
def list_purchases(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    # Undated purchases go last
    query = _query(db).order_by(Purchase.purchase_date.is_(None), Purchase.purchase_date.desc(), Purchase.id.desc())
    total = query.count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": [_purchase_to_out(p) for p in rows], "total": total, "page": page, "page_size": page_size}


@router.get("/{purchase_id}", response_model=purchase_schemas.PurchaseOut)
def get_purchase(purchase_id: int, db: Session = Depends(get_db)):
    purchase = _query(db).filter(Purchase.id == purchase_id).first()
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")
    return _purchase_to_out(purchase)


@router.post("", response_model=purchase_schemas.PurchaseOut, status_code=status.HTTP_201_CREATED)
def create_purchase(payload: purchase_schemas.PurchaseCreate, request: Request, db: Session = Depends(get_db)):
    purchase = Purchase(**payload.model_dump())
    db.add(purchase)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Unknown distributor or user")

    write_log(db, user_id=purchase.user_id, action="PURCHASE_CREATE", resource="purchases", ip=client_ip(request),
              meta={"id": purchase.id, "total": purchase.total})
    return _purchase_to_out(_query(db).filter(Purchase.id == purchase.id).first())


@router.delete("/{purchase_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase(purchase_id: int, request: Request, db: Session = Depends(get_db)):
    purchase = db.query(Purchase).filter(Purchase.id == purchase_id).first()
    if not purchase:
        raise HTTPException(status_code=404, detail="Purchase not found")

    # Detail rows go with the header
    db.delete(purchase)
    db.commit()

    write_log(db, action="PURCHASE_DELETE", resource="purchases", ip=client_ip(request), meta={"id": purchase_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{purchase_id}/details", response_model=purchase_schemas.PurchaseDetails)
def get_purchase_details(purchase_id: int, db: Session = Depends(get_db)):
    rows = (
        db.query(PurchaseItem)
        .options(joinedload(PurchaseItem.product))
        .filter(PurchaseItem.purchase_id == purchase_id)
        .order_by(PurchaseItem.id.asc())
        .all()
    )
    return {"details": [_item_to_out(r) for r in rows]}


@router.post("/details", response_model=purchase_schemas.PurchaseItemOut, status_code=status.HTTP_201_CREATED)
def create_purchase_detail(payload: purchase_schemas.PurchaseItemCreate, request: Request, db: Session = Depends(get_db)):
    item = PurchaseItem(**payload.model_dump())
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Unknown purchase or product")
    db.refresh(item)

    write_log(db, action="PURCHASE_DETAIL_CREATE", resource="purchases", ip=client_ip(request),
              meta={"purchase_id": item.purchase_id, "product_id": item.product_id})
    return _item_to_out(item)
