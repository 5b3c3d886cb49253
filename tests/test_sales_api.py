from models.sale import SaleItem


def test_sale_with_details(client, db, customer, make_product):
    p1 = make_product(name="Gula", unit="pcs")
    courier_id = client.post("/couriers", json={"name": "Andi"}).json()["id"]

    res = client.post("/sales", json={
        "customer_id": customer.id, "courier_id": courier_id, "sale_date": "2026-03-01", "total": 33000,
    })
    assert res.status_code == 201
    sale = res.json()
    assert sale["customer_name"] == "Budi Santoso"
    assert sale["courier_name"] == "Andi"

    detail = client.post("/sales/details", json={"sale_id": sale["id"], "product_id": p1.id, "quantity": 2, "price": 16500})
    assert detail.status_code == 201
    assert detail.json()["product_name"] == "Gula"

    details = client.get(f"/sales/{sale['id']}/details").json()["details"]
    assert [(d["product_id"], d["quantity"], d["unit"]) for d in details] == [(p1.id, 2, "pcs")]


def test_unknown_references_are_400(client, make_product):
    p1 = make_product()

    assert client.post("/sales", json={"customer_id": 999}).status_code == 400
    assert client.post("/sales/details", json={"sale_id": 999, "product_id": p1.id}).status_code == 400


def test_list_newest_first_undated_last(client):
    for d in ["2026-01-01", None, "2026-02-01"]:
        client.post("/sales", json={"sale_date": d, "total": 1})

    dates = [s["sale_date"] for s in client.get("/sales").json()["items"]]
    assert dates == ["2026-02-01", "2026-01-01", None]


def test_delete_cascades_to_details(client, db, make_product):
    p1 = make_product()
    sale_id = client.post("/sales", json={"total": 10000}).json()["id"]
    client.post("/sales/details", json={"sale_id": sale_id, "product_id": p1.id, "quantity": 1, "price": 10000})

    assert client.delete(f"/sales/{sale_id}").status_code == 204
    assert client.get(f"/sales/{sale_id}").status_code == 404
    assert db.query(SaleItem).count() == 0
