# backend/utils/checkout.py
"""Cart to order conversion.

A checkout turns every cart row of one customer into a single order inside
one database transaction: stock is validated for all rows before anything is
written, the order total is computed from current product prices (the same
prices snapshotted into the line items), stock is decremented and the cart is
emptied. Either all of it is committed or none of it is.
"""
import logging
from typing import Dict, List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.cart import CartItem
from models.order import Order, OrderItem, OrderStatus
from models.product import Product
from utils.errors import InvalidArgument, Internal, NotFound, StoreError

logger = logging.getLogger(__name__)


def _insufficient_stock(product: Product, available: int, requested: int) -> InvalidArgument:
    return InvalidArgument(
        f"Insufficient stock for product {product.id} ({product.name}). "
        f"Available: {available}, Requested: {requested}"
    )


# ---- Cart store ----
def _load_cart(db: Session, customer_id: int) -> List[CartItem]:
    stmt = (
        select(CartItem)
        .join(Product, CartItem.product_id == Product.id)
        .where(CartItem.customer_id == customer_id)
        .order_by(CartItem.id)
    )
    return list(db.execute(stmt).scalars().all())


def _clear_cart(db: Session, customer_id: int) -> None:
    db.execute(delete(CartItem).where(CartItem.customer_id == customer_id))


# ---- Product store ----
def _load_products(db: Session, product_ids: List[int]) -> Dict[int, Product]:
    # FOR UPDATE where the backend supports it (ignored by SQLite)
    stmt = select(Product).where(Product.id.in_(product_ids)).with_for_update()
    return {p.id: p for p in db.execute(stmt).scalars().all()}


def _decrement_stock(db: Session, product_id: int, quantity: int) -> bool:
    """Take `quantity` off the product's stock only if enough is left.

    Returns False when no row was updated, i.e. a concurrent checkout already
    consumed the stock seen during validation.
    """
    stmt = (
        update(Product)
        .where(Product.id == product_id, Product.stock_quantity >= quantity)
        .values(stock_quantity=Product.stock_quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    return db.execute(stmt).rowcount == 1


# ---- Order store ----
def _insert_order(db: Session, customer_id: int, total: int) -> Order:
    order = Order(customer_id=customer_id, status=OrderStatus.PENDING, total_amount=total)
    db.add(order)
    db.flush()
    if order.id is None:
        raise Internal("Failed to create order")
    return order


def _insert_line_item(db: Session, order: Order, product_id: int, quantity: int, unit_price: int) -> OrderItem:
    line = OrderItem(order_id=order.id, product_id=product_id, quantity=quantity, unit_price=unit_price)
    db.add(line)
    db.flush()
    return line


def checkout(db: Session, customer_id: int) -> Order:
    """Convert the customer's whole cart into one pending order.

    Raises InvalidArgument for an empty cart or insufficient stock and
    Internal for storage failures; the transaction is rolled back in every
    failure case and nothing is retried.
    """
    try:
        cart = _load_cart(db, customer_id)
        if not cart:
            raise InvalidArgument("Cart is empty")

        products = _load_products(db, [item.product_id for item in cart])

        # Validate every row before the first write
        for item in cart:
            product = products.get(item.product_id)
            if product is None:
                raise NotFound(f"Product {item.product_id} not found")
            if item.quantity > product.stock_quantity:
                raise _insufficient_stock(product, product.stock_quantity, item.quantity)

        total = sum(item.quantity * products[item.product_id].sell_price for item in cart)

        order = _insert_order(db, customer_id, total)
        for item in cart:
            product = products[item.product_id]
            _insert_line_item(db, order, product.id, item.quantity, product.sell_price)
            if not _decrement_stock(db, product.id, item.quantity):
                db.refresh(product)
                raise _insufficient_stock(product, product.stock_quantity, item.quantity)

        _clear_cart(db, customer_id)
        db.commit()
    except StoreError as e:
        db.rollback()
        logger.warning("Checkout rejected for customer %s: %s", customer_id, e)
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Checkout failed for customer %s", customer_id)
        raise Internal(f"Checkout failed: {e}") from e
    except Exception:
        db.rollback()
        raise

    db.refresh(order)
    logger.info("Order %s created for customer %s, total %s", order.id, customer_id, order.total_amount)
    return order
