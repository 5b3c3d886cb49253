# backend/routes/orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Query
from sqlalchemy.orm import Session, joinedload

from database import get_db
import logging
from utils.audit import write_log, client_ip
from models.order import Order, OrderItem, OrderStatus, FINAL_STATUSES
from schemas.order import OrderResponse, OrdersPage, OrderStatusPatch, OrderItemOut

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger(__name__)

# Map an OrderItem row to its output schema
def line_item_to_out(it: OrderItem) -> OrderItemOut:
    return OrderItemOut(
        id=it.id,
        order_id=it.order_id,
        product_id=it.product_id,
        product_name=it.product.name if it.product else None,
        unit=it.product.unit if it.product else None,
        quantity=it.quantity,
        unit_price=it.unit_price,
        line_total=it.quantity * it.unit_price,
    )

# Map Order model to OrderResponse schema
def order_to_out(order: Order, with_items: bool = True) -> OrderResponse:
    items: List[OrderItemOut] = []
    if with_items:
        items = [line_item_to_out(it) for it in sorted(order.items, key=lambda i: i.id)]
    return OrderResponse(
        id=order.id,
        customer_id=order.customer_id,
        customer_name=order.customer.name if order.customer else None,
        order_date=order.order_date,
        status=order.status,
        total_amount=order.total_amount,
        created_at=order.created_at,
        items=items,
    )

def _load_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product),
        joinedload(Order.customer),
    ).filter(Order.id == order_id).first()


# List all orders for the back office
@router.get("", response_model=OrdersPage)
def list_orders(
    status: Optional[OrderStatus] = Query(None),
    customer_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    q = db.query(Order).options(joinedload(Order.customer))
    if status is not None:
        q = q.filter(Order.status == status)
    if customer_id is not None:
        q = q.filter(Order.customer_id == customer_id)
    q = q.order_by(Order.created_at.desc(), Order.id.desc())

    total = q.count()
    rows = q.offset((page - 1) * page_size).limit(page_size).all()
    items = [order_to_out(o, with_items=False) for o in rows]
    return {"items": items, "total": total, "page": page, "page_size": page_size}


# Get details of a specific order
@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(order_id: int, db: Session = Depends(get_db)):
    o = _load_order(db, order_id)
    if not o:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(o)


# Manually update order status
@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
):
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    old_status, new_status = order.status, payload.status

    if old_status in FINAL_STATUSES and new_status != old_status:
        raise HTTPException(status_code=400, detail=f"Cannot change status from {old_status.value}")

    order.status = new_status
    db.commit()
    logger.info("Order %s status %s -> %s", order.id, old_status.value, new_status.value)
    write_log(db, action="ORDER_STATUS_CHANGE", resource="orders", ip=client_ip(request),
              meta={"order_id": order.id, "old": old_status.value, "new": new_status.value})

    return order_to_out(_load_order(db, order_id))
