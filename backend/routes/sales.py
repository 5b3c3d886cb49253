# backend/routes/sales.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from database import get_db
from utils.audit import write_log, client_ip
from models.sale import Sale, SaleItem
import schemas.sale as sale_schemas

router = APIRouter(prefix="/sales", tags=["Sales"])


def _sale_to_out(s: Sale) -> sale_schemas.SaleOut:
    return sale_schemas.SaleOut(
        id=s.id,
        customer_id=s.customer_id,
        user_id=s.user_id,
        courier_id=s.courier_id,
        sale_date=s.sale_date,
        total=s.total,
        customer_name=s.customer.name if s.customer else None,
        username=s.user.username if s.user else None,
        user_full_name=s.user.full_name if s.user else None,
        courier_name=s.courier.name if s.courier else None,
    )


def _item_to_out(it: SaleItem) -> sale_schemas.SaleItemOut:
    return sale_schemas.SaleItemOut(
        id=it.id,
        sale_id=it.sale_id,
        product_id=it.product_id,
        quantity=it.quantity,
        price=it.price,
        product_name=it.product.name if it.product else None,
        unit=it.product.unit if it.product else None,
    )


def _query(db: Session):
    return db.query(Sale).options(
        joinedload(Sale.customer), joinedload(Sale.user), joinedload(Sale.courier)
    )


# Sales transactions, newest first
@router.get("", response_model=sale_schemas.SalePage)
def list_sales(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    # Undated sales go last
    query = _query(db).order_by(Sale.sale_date.is_(None), Sale.sale_date.desc(), Sale.id.desc())
    total = query.count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": [_sale_to_out(s) for s in rows], "total": total, "page": page, "page_size": page_size}


@router.get("/{sale_id}", response_model=sale_schemas.SaleOut)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    sale = _query(db).filter(Sale.id == sale_id).first()
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return _sale_to_out(sale)


@router.post("", response_model=sale_schemas.SaleOut, status_code=status.HTTP_201_CREATED)
def create_sale(payload: sale_schemas.SaleCreate, request: Request, db: Session = Depends(get_db)):
    sale = Sale(**payload.model_dump())
    db.add(sale)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Unknown customer, user or courier")

    write_log(db, user_id=sale.user_id, action="SALE_CREATE", resource="sales", ip=client_ip(request),
              meta={"id": sale.id, "total": sale.total})
    return _sale_to_out(_query(db).filter(Sale.id == sale.id).first())


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(sale_id: int, request: Request, db: Session = Depends(get_db)):
    sale = db.query(Sale).filter(Sale.id == sale_id).first()
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")

    # Detail rows go with the header
    db.delete(sale)
    db.commit()

    write_log(db, action="SALE_DELETE", resource="sales", ip=client_ip(request), meta={"id": sale_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{sale_id}/details", response_model=sale_schemas.SaleDetails)
def get_sale_details(sale_id: int, db: Session = Depends(get_db)):
    rows = (
        db.query(SaleItem)
        .options(joinedload(SaleItem.product))
        .filter(SaleItem.sale_id == sale_id)
        .order_by(SaleItem.id.asc())
        .all()
    )
    return {"details": [_item_to_out(r) for r in rows]}


@router.post("/details", response_model=sale_schemas.SaleItemOut, status_code=status.HTTP_201_CREATED)
def create_sale_detail(payload: sale_schemas.SaleItemCreate, request: Request, db: Session = Depends(get_db)):
    item = SaleItem(**payload.model_dump())
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Unknown sale or product")
    db.refresh(item)

    write_log(db, action="SALE_DETAIL_CREATE", resource="sales", ip=client_ip(request),
              meta={"sale_id": item.sale_id, "product_id": item.product_id})
    return _item_to_out(item)
