from models.cart import CartItem


def _add(client, customer_id, product_id, quantity):
    return client.post("/cart", json={"customer_id": customer_id, "product_id": product_id, "quantity": quantity})


def test_add_then_add_again_increments(client, db, customer, make_product):
    p1 = make_product(stock_quantity=5)

    first = _add(client, customer.id, p1.id, 2)
    second = _add(client, customer.id, p1.id, 3)

    assert first.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["quantity"] == 5
    assert db.query(CartItem).count() == 1


def test_add_does_not_check_stock(client, customer, make_product):
    p1 = make_product(stock_quantity=1)

    res = _add(client, customer.id, p1.id, 50)

    assert res.status_code == 200
    assert res.json()["quantity"] == 50


def test_add_unknown_product_or_customer(client, customer, make_product):
    p1 = make_product()

    assert _add(client, customer.id, 999, 1).status_code == 404
    assert _add(client, 999, p1.id, 1).json()["detail"] == "Customer not found"


def test_add_rejects_non_positive_quantity(client, customer, make_product):
    p1 = make_product()

    assert _add(client, customer.id, p1.id, 0).status_code == 422
    assert _add(client, customer.id, p1.id, -2).status_code == 422


def test_get_cart_joins_products(client, customer, make_product):
    p1 = make_product(name="Beras", sell_price=10000, stock_quantity=5, unit="sak")
    p2 = make_product(name="Gula", sell_price=5000, stock_quantity=3)
    _add(client, customer.id, p1.id, 2)
    _add(client, customer.id, p2.id, 1)

    cart = client.get(f"/cart/{customer.id}").json()

    assert cart["total"] == 25000
    rows = {i["product_name"]: i for i in cart["items"]}
    assert rows["Beras"]["line_total"] == 20000
    assert rows["Beras"]["unit"] == "sak"
    assert rows["Gula"]["stock_quantity"] == 3


def test_update_and_remove_item(client, db, customer, make_product):
    p1 = make_product()
    item_id = _add(client, customer.id, p1.id, 1).json()["id"]

    res = client.put(f"/cart/{item_id}", json={"quantity": 4})
    assert res.json()["quantity"] == 4

    assert client.delete(f"/cart/{item_id}").status_code == 204
    assert client.delete(f"/cart/{item_id}").status_code == 404
    assert client.put(f"/cart/{item_id}", json={"quantity": 1}).status_code == 404
    assert db.query(CartItem).count() == 0


def test_clear_cart(client, db, customer, make_product):
    p1 = make_product()
    p2 = make_product(name="Other")
    _add(client, customer.id, p1.id, 1)
    _add(client, customer.id, p2.id, 1)

    assert client.delete(f"/cart/clear/{customer.id}").status_code == 204
    assert client.get(f"/cart/{customer.id}").json() == {"items": [], "total": 0}


def test_deleting_product_removes_it_from_carts(client, db, customer, make_product):
    p1 = make_product()
    _add(client, customer.id, p1.id, 1)

    assert client.delete(f"/products/{p1.id}").status_code == 204
    assert db.query(CartItem).count() == 0
