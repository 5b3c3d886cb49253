from sqlalchemy.exc import SQLAlchemyError

import utils.checkout as checkout_module
from models.cart import CartItem
from models.log import Log
from models.order import Order
from models.product import Product


def _checkout(client, customer_id, **extra):
    return client.post("/store/checkout", json={"customer_id": customer_id, **extra})


def test_checkout_returns_created_order(client, db, customer, make_product, add_to_cart):
    p1 = make_product(name="Beras", sell_price=10000, stock_quantity=5, unit="sak")
    p2 = make_product(name="Gula", sell_price=5000, stock_quantity=3)
    add_to_cart(customer.id, p1.id, 2)
    add_to_cart(customer.id, p2.id, 1)

    res = _checkout(client, customer.id, shipping_address="Jl. Melati 3", note="pagi")

    assert res.status_code == 201
    body = res.json()
    assert body["total_amount"] == 25000
    assert body["status"] == "pending"
    assert body["customer_name"] == "Budi Santoso"
    assert [(i["product_id"], i["quantity"], i["unit_price"], i["line_total"]) for i in body["items"]] == [
        (p1.id, 2, 10000, 20000),
        (p2.id, 1, 5000, 5000),
    ]
    assert body["items"][0]["product_name"] == "Beras"
    assert body["items"][0]["unit"] == "sak"

    db.expire_all()
    assert db.get(Product, p1.id).stock_quantity == 3
    assert db.get(Product, p2.id).stock_quantity == 2
    assert db.query(CartItem).count() == 0


def test_checkout_empty_cart_is_400(client, db, customer):
    res = _checkout(client, customer.id)

    assert res.status_code == 400
    assert res.json()["detail"] == "Cart is empty"
    assert db.query(Order).count() == 0


def test_checkout_insufficient_stock_is_400(client, db, customer, make_product, add_to_cart):
    p1 = make_product(name="Sugar", stock_quantity=5)
    add_to_cart(customer.id, p1.id, 10)

    res = _checkout(client, customer.id)

    assert res.status_code == 400
    assert res.json()["detail"] == f"Insufficient stock for product {p1.id} (Sugar). Available: 5, Requested: 10"
    db.expire_all()
    assert db.get(Product, p1.id).stock_quantity == 5
    assert db.query(CartItem).count() == 1


def test_checkout_storage_failure_is_500(client, db, customer, make_product, add_to_cart, monkeypatch):
    p1 = make_product(stock_quantity=5)
    add_to_cart(customer.id, p1.id, 1)

    def broken(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(checkout_module, "_insert_line_item", broken)

    res = _checkout(client, customer.id)

    assert res.status_code == 500
    assert "connection lost" in res.json()["detail"]
    assert db.query(Order).count() == 0


def test_checkout_writes_activity_log(client, db, customer, make_product, add_to_cart):
    p1 = make_product(stock_quantity=5)
    add_to_cart(customer.id, p1.id, 1)

    _checkout(client, customer.id)
    _checkout(client, customer.id)

    entries = db.query(Log).filter(Log.action == "CHECKOUT").order_by(Log.id).all()
    assert [e.status for e in entries] == ["SUCCESS", "FAIL"]
    assert entries[1].meta["reason"] == "Cart is empty"


def test_checkout_requires_customer_id(client):
    assert client.post("/store/checkout", json={}).status_code == 422


def test_store_lists_only_in_stock_products(client, make_product):
    make_product(name="Teh", stock_quantity=3)
    make_product(name="Air", stock_quantity=0)
    make_product(name="Kopi", stock_quantity=1)

    body = client.get("/store/products").json()

    assert body["total"] == 2
    assert [p["name"] for p in body["items"]] == ["Kopi", "Teh"]


def test_store_product_out_of_stock_is_404(client, make_product):
    gone = make_product(stock_quantity=0)
    there = make_product(name="Ada", stock_quantity=2)

    res = client.get(f"/store/products/{gone.id}")
    assert res.status_code == 404
    assert res.json()["detail"] == "Product not found or out of stock"
    assert client.get(f"/store/products/{there.id}").json()["name"] == "Ada"


def test_store_search_by_name_brand_and_category(client, make_product):
    make_product(name="Kopi Bubuk", brand="Kapal Api", category="Minuman", stock_quantity=5)
    make_product(name="Teh Celup", brand="Sariwangi", category="Minuman", stock_quantity=5)
    make_product(name="Sabun", brand="Lifebuoy", category="Kebersihan", stock_quantity=5)
    make_product(name="Kopi Sachet", brand="ABC", category="Minuman", stock_quantity=0)

    by_name = client.get("/store/search", params={"q": "kopi"}).json()
    by_brand = client.get("/store/search", params={"q": "SARI"}).json()
    by_category = client.get("/store/search", params={"category": "minum"}).json()
    combined = client.get("/store/search", params={"q": "a", "category": "Kebersihan"}).json()

    assert [p["name"] for p in by_name["items"]] == ["Kopi Bubuk"]
    assert [p["name"] for p in by_brand["items"]] == ["Teh Celup"]
    assert by_category["total"] == 2
    assert [p["name"] for p in combined["items"]] == ["Sabun"]


def test_search_input_is_not_sql(client, make_product):
    make_product(name="Gula", stock_quantity=5)

    res = client.get("/store/search", params={"q": "' OR 1=1 --"})

    assert res.status_code == 200
    assert res.json()["total"] == 0


def test_customer_orders_and_details(client, db, customer, make_product, add_to_cart):
    p1 = make_product(name="Beras", sell_price=10000, stock_quantity=10, unit="sak")
    add_to_cart(customer.id, p1.id, 1)
    first = _checkout(client, customer.id).json()
    add_to_cart(customer.id, p1.id, 2)
    second = _checkout(client, customer.id).json()

    orders = client.get(f"/store/orders/{customer.id}").json()
    assert orders["total"] == 2
    assert [o["id"] for o in orders["items"]] == [second["id"], first["id"]]
    assert orders["items"][0]["customer_name"] == "Budi Santoso"
    assert orders["items"][0]["items"] == []

    details = client.get(f"/store/orders/details/{second['id']}").json()["details"]
    assert len(details) == 1
    assert details[0]["product_name"] == "Beras"
    assert details[0]["unit"] == "sak"
    assert (details[0]["quantity"], details[0]["unit_price"], details[0]["line_total"]) == (2, 10000, 20000)


def test_customer_orders_empty_for_other_customer(client):
    body = client.get("/store/orders/999").json()
    assert body["items"] == []
    assert body["total"] == 0
