import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from main import app
from models.cart import CartItem
from models.parties import Customer
from models.product import Product


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def make_product(db):
    def _make(name="Gula Pasir 1kg", sell_price=10000, stock_quantity=5, **kwargs):
        product = Product(name=name, sell_price=sell_price, stock_quantity=stock_quantity, **kwargs)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture()
def customer(db):
    c = Customer(name="Budi Santoso", address="Jl. Melati 3", phone="0812")
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


@pytest.fixture()
def add_to_cart(db):
    def _add(customer_id, product_id, quantity):
        item = CartItem(customer_id=customer_id, product_id=product_id, quantity=quantity)
        db.add(item)
        db.commit()
        return item
    return _add
