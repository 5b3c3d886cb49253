# backend/routes/products.py
from typing import Optional, Literal
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from utils.audit import write_log, client_ip
from utils.updates import changed_fields, apply_changes
from models.product import Product
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])


def _get_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    name: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=1000),
    sort_by: Literal["id", "name", "sell_price", "stock_quantity"] = "name",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
):
    query = db.query(Product)

    if name: query = query.filter(Product.name.ilike(f"%{name}%"))
    if category: query = query.filter(Product.category.ilike(f"%{category}%"))
    if brand: query = query.filter(Product.brand.ilike(f"%{brand}%"))

    allowed = {
        "id": Product.id, "name": Product.name,
        "sell_price": Product.sell_price, "stock_quantity": Product.stock_quantity,
    }
    sort_col = allowed[sort_by]
    query = query.order_by(sort_col.asc() if order == "asc" else sort_col.desc(), Product.id.asc())

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return {"items": items, "total": total, "page": page, "page_size": page_size}


# =========================
# POJEDYNCZY PRODUKT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, product_id)


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    new_product = Product(**payload.model_dump())
    db.add(new_product)
    db.commit()
    db.refresh(new_product)

    write_log(
        db, action="PRODUCT_CREATE", resource="products", ip=client_ip(request),
        meta={"id": new_product.id, "name": new_product.name},
    )
    return new_product


# =========================
# CZĘŚCIOWA EDYCJA PRODUKTU
# =========================
@router.put("/products/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = changed_fields(payload, required=("name", "sell_price", "stock_quantity"))
    product = _get_or_404(db, product_id)

    apply_changes(product, changes)
    db.commit()
    db.refresh(product)

    write_log(
        db, action="PRODUCT_UPDATE", resource="products", ip=client_ip(request),
        meta={"id": product.id, "fields": sorted(changes)},
    )
    return product


# =========================
# USUWANIE PRODUKTU
# =========================
@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    product = _get_or_404(db, product_id)
    db.delete(product)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Product is referenced by orders, sales or purchases")

    write_log(db, action="PRODUCT_DELETE", resource="products", ip=client_ip(request), meta={"id": product_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
