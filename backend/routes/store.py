# backend/routes/store.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
import logging

from database import get_db
from utils.audit import write_log, client_ip
from utils.checkout import checkout
from utils.errors import StoreError, Internal
from models.product import Product
from models.order import Order, OrderItem
from schemas.product import ProductOut, ProductListPage
from schemas.order import CheckoutPayload, OrderResponse, OrdersPage, OrderDetails
from routes.orders import order_to_out, line_item_to_out

router = APIRouter(prefix="/store", tags=["Store"])
logger = logging.getLogger(__name__)


def _in_stock(db: Session):
    return db.query(Product).filter(Product.stock_quantity > 0)


def _page(query, page: int, page_size: int):
    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return {"items": items, "total": total, "page": page, "page_size": page_size}


# Products available to customers (only items with stock > 0)
@router.get("/products", response_model=ProductListPage)
def list_store_products(
    page: int = Query(1, ge=1),
    page_size: int = Query(24, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = _in_stock(db).order_by(Product.name.asc(), Product.id.asc())
    return _page(query, page, page_size)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_store_product(product_id: int, db: Session = Depends(get_db)):
    product = _in_stock(db).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found or out of stock")
    return product


# Search by name/brand and category
@router.get("/search", response_model=ProductListPage)
def search_products(
    q: Optional[str] = Query(None, description="Search by name or brand"),
    category: Optional[str] = Query(None, description="Filter by category"),
    page: int = Query(1, ge=1),
    page_size: int = Query(24, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = _in_stock(db)
    if q:
        like = f"%{q}%"
        query = query.filter(or_(Product.name.ilike(like), Product.brand.ilike(like)))
    if category:
        query = query.filter(Product.category.ilike(f"%{category}%"))
    query = query.order_by(Product.name.asc(), Product.id.asc())
    return _page(query, page, page_size)


# Convert the customer's cart into an order
@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout_cart(payload: CheckoutPayload, request: Request, db: Session = Depends(get_db)):
    try:
        order = checkout(db, payload.customer_id)
    except StoreError as e:
        write_log(
            db, action="CHECKOUT", resource="store", status="FAIL", ip=client_ip(request),
            meta={"customer_id": payload.customer_id, "reason": e.message},
        )
        if isinstance(e, Internal):
            logger.error("Checkout storage failure for customer %s: %s", payload.customer_id, e)
        raise HTTPException(status_code=e.status_code, detail=e.message)

    write_log(
        db, action="CHECKOUT", resource="store", ip=client_ip(request),
        meta={"customer_id": payload.customer_id, "order_id": order.id, "total": order.total_amount},
    )
    return order_to_out(order)


# Orders placed by one customer, newest first
@router.get("/orders/{customer_id}", response_model=OrdersPage)
def get_customer_orders(
    customer_id: int,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    query = (
        db.query(Order)
        .options(joinedload(Order.customer))
        .filter(Order.customer_id == customer_id)
        .order_by(Order.order_date.desc(), Order.id.desc())
    )
    result = _page(query, page, page_size)
    result["items"] = [order_to_out(o, with_items=False) for o in result["items"]]
    return result


@router.get("/orders/details/{order_id}", response_model=OrderDetails)
def get_order_details(order_id: int, db: Session = Depends(get_db)):
    rows = (
        db.query(OrderItem)
        .options(joinedload(OrderItem.product))
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.id.asc())
        .all()
    )
    return {"details": [line_item_to_out(r) for r in rows]}
