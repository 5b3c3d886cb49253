from models.purchase import PurchaseItem


def test_purchase_with_details(client, make_product):
    p1 = make_product(name="Beras", unit="sak")
    distributor_id = client.post("/distributors", json={"name": "PT Sumber Makmur"}).json()["id"]
    user_id = client.post("/users", json={"username": "gudang", "password": "x1", "full_name": "Staf Gudang", "level": "warehouse"}).json()["id"]

    res = client.post("/purchases", json={
        "distributor_id": distributor_id, "user_id": user_id, "purchase_date": "2026-03-02", "total": 620000,
    })
    assert res.status_code == 201
    purchase = res.json()
    assert purchase["distributor_name"] == "PT Sumber Makmur"
    assert purchase["username"] == "gudang"
    assert purchase["user_full_name"] == "Staf Gudang"

    client.post("/purchases/details", json={"purchase_id": purchase["id"], "product_id": p1.id, "quantity": 10, "price": 62000})

    details = client.get(f"/purchases/{purchase['id']}/details").json()["details"]
    assert [(d["product_name"], d["quantity"], d["price"]) for d in details] == [("Beras", 10, 62000)]
    assert client.get("/purchases").json()["total"] == 1


def test_unknown_references_are_400(client):
    assert client.post("/purchases", json={"distributor_id": 42}).status_code == 400
    assert client.post("/purchases/details", json={"purchase_id": 42, "product_id": 1}).status_code == 400


def test_delete(client, db, make_product):
    p1 = make_product()
    purchase_id = client.post("/purchases", json={}).json()["id"]
    client.post("/purchases/details", json={"purchase_id": purchase_id, "product_id": p1.id, "quantity": 3})

    assert client.delete(f"/purchases/{purchase_id}").status_code == 204
    assert client.delete(f"/purchases/{purchase_id}").status_code == 404
    assert db.query(PurchaseItem).count() == 0
