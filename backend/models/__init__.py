# Import every model so SQLAlchemy registers it in Base.metadata
from models.product import Product
from models.parties import Distributor, Customer, Courier
from models.users import User, UserLevel
from models.cart import CartItem
from models.order import Order, OrderItem, OrderStatus
from models.sale import Sale, SaleItem
from models.purchase import Purchase, PurchaseItem
from models.log import Log

__all__ = [
    "Product", "Distributor", "Customer", "Courier", "User", "UserLevel",
    "CartItem", "Order", "OrderItem", "OrderStatus", "Sale", "SaleItem",
    "Purchase", "PurchaseItem", "Log",
]
