# backend/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session, joinedload
from database import get_db
from utils.audit import write_log, client_ip
from models.product import Product
from models.parties import Customer
from models.cart import CartItem
from schemas.cart import CartAddItem, CartUpdateItem, CartOut, CartItemOut, CartItemRow

router = APIRouter(prefix="/cart", tags=["Cart"])

def _cart_to_out(items) -> CartOut:
    items_out = []
    total = 0

    for it in items:
        product = it.product
        price = product.sell_price if product else 0
        line_total = price * it.quantity
        total += line_total

        items_out.append(CartItemOut(
            id=it.id,
            customer_id=it.customer_id,
            product_id=it.product_id,
            quantity=it.quantity,
            created_at=it.created_at,
            product_name=product.name if product else None,
            sell_price=price,
            stock_quantity=product.stock_quantity if product else None,
            unit=product.unit if product else None,
            line_total=line_total,
        ))

    # Display total only; checkout recomputes from current prices
    return CartOut(items=items_out, total=total)

def _get_item_or_404(db: Session, cart_id: int) -> CartItem:
    item = db.query(CartItem).filter(CartItem.id == cart_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item

@router.get("/{customer_id}", response_model=CartOut)
def get_cart(customer_id: int, db: Session = Depends(get_db)):
    items = (
        db.query(CartItem)
        .options(joinedload(CartItem.product))
        .filter(CartItem.customer_id == customer_id)
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
        .all()
    )
    return _cart_to_out(items)

@router.post("", response_model=CartItemRow, status_code=status.HTTP_200_OK)
def add_to_cart(payload: CartAddItem, request: Request, db: Session = Depends(get_db)):
    if not db.query(Customer).filter(Customer.id == payload.customer_id).first():
        raise HTTPException(status_code=404, detail="Customer not found")
    if not db.query(Product).filter(Product.id == payload.product_id).first():
        raise HTTPException(status_code=404, detail="Product not found")

    item = db.query(CartItem).filter(
        CartItem.customer_id == payload.customer_id, CartItem.product_id == payload.product_id
    ).first()

    # Stock is validated at checkout, not here
    if item:
        item.quantity = CartItem.quantity + payload.quantity
    else:
        item = CartItem(
            customer_id=payload.customer_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
        db.add(item)

    db.commit()
    db.refresh(item)

    write_log(
        db, action="CART_ADD", resource="cart", ip=client_ip(request),
        meta={"customer_id": payload.customer_id, "product_id": payload.product_id, "qty": payload.quantity},
    )
    return item

@router.put("/{cart_id}", response_model=CartItemRow)
def update_cart_item(cart_id: int, payload: CartUpdateItem, request: Request, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, cart_id)
    item.quantity = payload.quantity
    db.commit()
    db.refresh(item)

    write_log(
        db, action="CART_UPDATE", resource="cart", ip=client_ip(request),
        meta={"cart_id": cart_id, "qty": payload.quantity},
    )
    return item

@router.delete("/clear/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(customer_id: int, request: Request, db: Session = Depends(get_db)):
    removed = db.query(CartItem).filter(CartItem.customer_id == customer_id).delete(synchronize_session=False)
    db.commit()

    write_log(
        db, action="CART_CLEAR", resource="cart", ip=client_ip(request),
        meta={"customer_id": customer_id, "removed": removed},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{cart_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_cart(cart_id: int, request: Request, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, cart_id)
    db.delete(item)
    db.commit()

    write_log(db, action="CART_DELETE", resource="cart", ip=client_ip(request), meta={"cart_id": cart_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
