import pytest

from models.purchase import Purchase
from models.sale import Sale

RESOURCES = [
    ("/customers", {"name": "Budi", "address": "Jl. Melati 3", "phone": "0812"}),
    ("/distributors", {"name": "PT Sumber Makmur", "address": "Bekasi", "phone": "021"}),
    ("/couriers", {"name": "Andi", "phone": "0813"}),
]


@pytest.mark.parametrize("path, payload", RESOURCES)
def test_crud_cycle(client, path, payload):
    created = client.post(path, json=payload)
    assert created.status_code == 201
    party_id = created.json()["id"]

    assert client.get(f"{path}/{party_id}").json()["name"] == payload["name"]

    updated = client.put(f"{path}/{party_id}", json={"phone": "0999"})
    assert updated.status_code == 200
    assert updated.json()["phone"] == "0999"
    assert updated.json()["name"] == payload["name"]

    assert client.delete(f"{path}/{party_id}").status_code == 204
    assert client.get(f"{path}/{party_id}").status_code == 404
    assert client.delete(f"{path}/{party_id}").status_code == 404


@pytest.mark.parametrize("path, payload", RESOURCES)
def test_update_rules(client, path, payload):
    party_id = client.post(path, json=payload).json()["id"]

    assert client.put(f"{path}/{party_id}", json={}).json()["detail"] == "No fields to update"
    assert client.put(f"{path}/{party_id}", json={"name": None}).status_code == 400


@pytest.mark.parametrize("path", [p for p, _ in RESOURCES])
def test_list_sorted_and_searchable(client, path):
    for name in ["Citra", "Agus", "Bayu"]:
        client.post(path, json={"name": name})

    body = client.get(path).json()
    assert [p["name"] for p in body["items"]] == ["Agus", "Bayu", "Citra"]
    assert [p["name"] for p in client.get(path, params={"q": "ay"}).json()["items"]] == ["Bayu"]


def test_customer_with_sales_cannot_be_deleted(client, db, customer):
    db.add(Sale(customer_id=customer.id, total=1000))
    db.commit()

    assert client.delete(f"/customers/{customer.id}").status_code == 409


def test_distributor_with_purchases_cannot_be_deleted(client, db):
    distributor_id = client.post("/distributors", json={"name": "CV Sinar Jaya"}).json()["id"]
    db.add(Purchase(distributor_id=distributor_id, total=5000))
    db.commit()

    assert client.delete(f"/distributors/{distributor_id}").status_code == 409
