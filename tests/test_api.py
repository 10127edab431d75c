# tests/test_api.py
from fastapi.testclient import TestClient
from inventory_app.main import app

client = TestClient(app)

def reset():
    client.post("/reset")

def product(**overrides):
    body = {
        "name": "Desk Lamp",
        "sku": "LAMP-01",
        "supplier": "Brightside",
        "category": "Home Decor",
        "quantityInStock": 12,
        "price": 19.99,
        "icon": "home",
    }
    body.update(overrides)
    return body

def test_create_returns_created_record():
    reset()
    r = client.post("/products", json=product())
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Desk Lamp"
    assert body["quantityInStock"] == 12
    assert body["price"] == 19.99
    assert body["id"]
    assert body["createdAt"] == body["updatedAt"]

def test_create_ignores_client_supplied_id():
    reset()
    r = client.post("/products", json=product(id="provisional-123"))
    assert r.status_code == 201
    assert r.json()["id"] != "provisional-123"

def test_create_requires_name():
    reset()
    r = client.post("/products", json=product(name=None))
    assert r.status_code == 400
    assert r.json()["detail"] == "Name is required"
    r2 = client.post("/products", json=product(name="   "))
    assert r2.status_code == 400
    assert client.get("/products").json() == []

def test_duplicate_name_is_a_distinct_client_error():
    reset()
    assert client.post("/products", json=product()).status_code == 201
    r = client.post("/products", json=product(sku="LAMP-02"))
    assert r.status_code == 400
    assert r.json()["detail"] == "Product name must be unique"
    names = [p["name"] for p in client.get("/products").json()]
    assert names == ["Desk Lamp"]

def test_duplicate_sku_rejected():
    reset()
    client.post("/products", json=product())
    r = client.post("/products", json=product(name="Floor Lamp"))
    assert r.status_code == 400
    assert r.json()["detail"] == "Product SKU must be unique"

def test_schema_violations_are_rejected():
    reset()
    r = client.post("/products", json=product(category="Groceries"))
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Invalid product:")
    r2 = client.post("/products", json=product(sku="AB 12"))
    assert r2.status_code == 400
    r3 = client.post("/products", json=product(quantityInStock=-1))
    assert r3.status_code == 400
    assert client.get("/products").json() == []

def test_list_is_newest_first():
    reset()
    for i in range(3):
        client.post("/products", json=product(name=f"Item {i}", sku=f"SKU-{i}"))
    names = [p["name"] for p in client.get("/products").json()]
    assert names == ["Item 2", "Item 1", "Item 0"]

def test_list_filters_by_name_and_categories():
    reset()
    client.post("/products", json=product(name="Chess Set", sku="T-1", category="Toys"))
    client.post("/products", json=product(name="Chess Openings", sku="B-1", category="Books"))
    client.post("/products", json=product(name="Cookbook", sku="B-2", category="Books"))
    client.post("/products", json=product(name="Chess Clock", sku="E-1", category="Electronics"))

    r = client.get("/products", params={"search": "CHESS"})
    assert {p["sku"] for p in r.json()} == {"T-1", "B-1", "E-1"}

    r = client.get("/products", params={"categories": "Books,Toys"})
    assert {p["sku"] for p in r.json()} == {"T-1", "B-1", "B-2"}

    r = client.get("/products", params={"search": "chess", "categories": "Books,Toys,"})
    assert {p["sku"] for p in r.json()} == {"T-1", "B-1"}

def test_get_product_and_not_found():
    reset()
    pid = client.post("/products", json=product()).json()["id"]
    assert client.get(f"/products/{pid}").json()["sku"] == "LAMP-01"
    r = client.get("/products/missing")
    assert r.status_code == 404

def test_update_merges_partial_fields():
    reset()
    created = client.post("/products", json=product()).json()
    r = client.put(f"/products/{created['id']}", json={"price": 24.5, "createdAt": "1999-01-01T00:00:00Z"})
    assert r.status_code == 200
    body = r.json()
    assert body["price"] == 24.5
    assert body["name"] == "Desk Lamp"
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] >= created["updatedAt"]
    assert body["id"] == created["id"]

def test_update_unknown_id_is_not_found():
    reset()
    r = client.put("/products/does-not-exist", json={"price": 1})
    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found"

def test_update_blank_id_is_rejected():
    reset()
    r = client.put("/products/%20", json={"price": 1})
    assert r.status_code == 400
    assert r.json()["detail"] == "Product ID is required"

def test_update_to_duplicate_name_is_rejected():
    reset()
    client.post("/products", json=product())
    other = client.post("/products", json=product(name="Floor Lamp", sku="LAMP-02")).json()
    r = client.put(f"/products/{other['id']}", json={"name": "Desk Lamp"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Product name must be unique"
    assert client.get(f"/products/{other['id']}").json()["name"] == "Floor Lamp"

def test_delete_confirms_even_when_absent():
    reset()
    pid = client.post("/products", json=product()).json()["id"]
    r = client.delete(f"/products/{pid}")
    assert r.status_code == 200
    assert r.json() == {"message": "Deleted successfully", "deleted": True}
    r2 = client.delete(f"/products/{pid}")
    assert r2.status_code == 200
    assert r2.json() == {"message": "Deleted successfully", "deleted": False}
    assert client.get("/products").json() == []
