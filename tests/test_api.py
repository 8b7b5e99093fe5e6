import json

from conftest import ADMIN


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


ORDER = {
    "customer": {"firstName": "Léa", "lastName": "Martin", "email": "lea@example.com", "phone": "0600000000"},
    "items": [{"productId": "p1", "name": "Shampoing Doux", "price": 10, "quantity": 2}],
    "notes": "Merci",
    "subtotal": 20,
    "total": 25.99,
}


# ---------- Public ----------

def test_root_and_health(client):
    assert client.get("/").status_code == 200
    body = client.get("/test").json()
    assert body["backend"].endswith("Running")
    assert set(body["documents"]) == {"products", "orders", "settings"}


def test_public_listing_excludes_hidden_products(client):
    body = client.get("/api/products").json()
    assert [p["id"] for p in body["products"]] == ["p1", "p3", "p4"]
    assert body["total"] == 3
    assert body["currency"]["code"] == "EUR"


def test_public_listing_applies_query_params(client):
    body = client.get("/api/products", params={"category": "shampoo", "sort": "price-desc"}).json()
    assert [p["id"] for p in body["products"]] == ["p3", "p1"]

    body = client.get("/api/products", params={"hairType": "dry", "minPrice": "abc"}).json()
    assert [p["id"] for p in body["products"]] == ["p1", "p4"]

    body = client.get("/api/products", params={"search": "SHAMPOO", "maxPrice": "15"}).json()
    assert [p["id"] for p in body["products"]] == ["p1", "p3"]


def test_listing_returns_camel_case_fields(client):
    product = client.get("/api/products").json()["products"][0]
    assert product["hairType"] == ["dry", "curly"]
    assert product["reviewCount"] == 10
    assert "hair_type" not in product


def test_hidden_product_only_in_admin_listing(client, data_dir):
    (data_dir / "products.json").write_text(json.dumps({"products": [
        {"id": 1, "price": 10, "category": "shampoo", "visible": True},
        {"id": 2, "price": 30, "category": "mask", "visible": False},
    ]}), encoding="utf-8")
    resp = client.get("/api/products")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["products"]] == [1]

    resp = client.get("/api/admin/products", auth=ADMIN)
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["products"]] == [1, 2]

    assert client.get("/api/products/1").json()["product"]["id"] == 1


def test_listing_returns_stored_records_as_is(client, data_dir):
    (data_dir / "products.json").write_text(json.dumps({"products": [
        {"id": "p9", "name": "Huile", "price": 18, "rating": None, "reviewCount": None, "origin": "Maroc"},
    ]}), encoding="utf-8")
    resp = client.get("/api/products", params={"sort": "rating"})
    assert resp.status_code == 200
    product = resp.json()["products"][0]
    assert product["rating"] is None
    assert product["origin"] == "Maroc"


def test_get_product(client):
    body = client.get("/api/products/p3").json()
    assert body["product"]["name"] == "SHAMPOO Volume"
    assert body["currency"]["symbol"] == "€"
    assert client.get("/api/products/missing").status_code == 404


def test_unreadable_products_is_500(client, data_dir):
    (data_dir / "products.json").write_text("{oops", encoding="utf-8")
    resp = client.get("/api/products")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to read products"}


def test_non_object_products_document_is_500(client, data_dir):
    (data_dir / "products.json").write_text("[]", encoding="utf-8")
    resp = client.get("/api/products")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to read products"}


def test_unreadable_settings_falls_back_to_euro(client, data_dir):
    (data_dir / "settings.json").unlink()
    body = client.get("/api/products").json()
    assert body["currency"] == {"code": "EUR", "symbol": "€", "name": None}
    assert client.get("/api/settings").status_code == 500


def test_public_settings(client):
    body = client.get("/api/settings").json()
    assert set(body) == {"currency", "contact", "business"}
    assert body["business"]["freeShippingThreshold"] == 50


def test_cart_quote(client):
    resp = client.post("/api/cart/quote", json={"items": [{"productId": "p1", "quantity": 2}]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["subtotal"] == 20
    assert body["shipping"] == 5.99
    assert body["freeShippingRemaining"] == 30
    assert body["currency"]["code"] == "EUR"

    resp = client.post("/api/cart/quote", json={"items": [{"productId": "p2", "quantity": 1}]})
    assert resp.status_code == 400


# ---------- Orders ----------

def test_submit_order(client, data_dir):
    resp = client.post("/api/orders", json=ORDER)
    assert resp.status_code == 201
    order = resp.json()["order"]
    assert order["status"] == "new"
    assert order["orderNumber"].startswith("SOL-")
    assert order["items"][0]["subtotal"] == 20
    assert order["shipping"] == "À confirmer"

    stored = read(data_dir / "orders.json")["orders"]
    assert [o["id"] for o in stored] == [order["id"]]


def test_submit_order_does_not_touch_stock(client, data_dir):
    before = read(data_dir / "products.json")
    client.post("/api/orders", json=ORDER)
    assert read(data_dir / "products.json") == before


def test_submit_order_validation(client, data_dir):
    resp = client.post("/api/orders", json={**ORDER, "items": []})
    assert resp.status_code == 400
    assert "at least one item" in resp.json()["detail"]

    customer = {k: v for k, v in ORDER["customer"].items() if k != "phone"}
    resp = client.post("/api/orders", json={**ORDER, "customer": customer})
    assert resp.status_code == 400
    assert "phone" in resp.json()["detail"]

    resp = client.post("/api/orders", json={**ORDER, "items": [{"name": "x", "price": "abc", "quantity": 1}]})
    assert resp.status_code == 400
    assert "items.0.price" in resp.json()["detail"]

    assert read(data_dir / "orders.json") == {"orders": []}


# ---------- Admin auth ----------

def test_admin_routes_require_credentials(client):
    assert client.get("/api/admin/products").status_code == 401
    resp = client.get("/api/admin/orders", auth=("admin", "wrong"))
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Basic"
    assert client.get("/api/admin/settings", headers={"x-admin-auth": "authenticated"}).status_code == 401


def test_login(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": "s3cret"})
    assert resp.json() == {"success": True, "message": "Login successful", "username": "admin"}
    assert client.post("/api/admin/login", json={"username": "admin", "password": "x"}).status_code == 401
    assert client.post("/api/admin/login", json={"username": "admin"}).status_code == 400


# ---------- Admin products ----------

def test_create_then_read_back(client):
    body = {
        "name": "Spray Coiffant",
        "description": "Fixation légère",
        "price": 12.5,
        "category": "styling",
        "hairType": ["normal"],
        "special": ["new"],
        "variants": [{"name": "100ml", "price": 12.5}],
        "stock": 8,
    }
    resp = client.post("/api/admin/products", json=body, auth=ADMIN)
    assert resp.status_code == 201
    created = resp.json()["product"]
    assert created["id"] and created["createdAt"] and created["updatedAt"]
    assert created["visible"] is True
    assert created["rating"] == 0

    fetched = client.get(f"/api/products/{created['id']}").json()["product"]
    assert fetched == created
    for key, value in body.items():
        assert fetched[key] == value


def test_create_uses_defaults(client):
    created = client.post("/api/admin/products", json={}, auth=ADMIN).json()["product"]
    assert created["name"] == "New Product"
    assert created["category"] == "shampoo"
    assert created["images"] == ["images/placeholder.jpg"]
    assert created["sku"].startswith("SKU-")


def test_create_rejects_negative_price(client):
    assert client.post("/api/admin/products", json={"price": -5}, auth=ADMIN).status_code == 400


def test_update_is_partial(client, data_dir):
    resp = client.put("/api/admin/products/p1", json={"price": 11, "visible": False}, auth=ADMIN)
    assert resp.status_code == 200
    product = resp.json()["product"]
    assert product["price"] == 11
    assert product["visible"] is False
    assert product["name"] == "Shampoing Doux"
    assert product["createdAt"] == "2024-01-01T00:00:00.000Z"

    stored = read(data_dir / "products.json")["products"][0]
    assert stored["price"] == 11
    assert stored["hairType"] == ["dry", "curly"]
    assert "p1" not in [p["id"] for p in client.get("/api/products").json()["products"]]


def test_update_unknown_product(client, data_dir):
    before = read(data_dir / "products.json")
    assert client.put("/api/admin/products/nope", json={"price": 1}, auth=ADMIN).status_code == 404
    assert read(data_dir / "products.json") == before


def test_delete_product(client, data_dir):
    resp = client.delete("/api/admin/products/p4", auth=ADMIN)
    assert resp.status_code == 200
    assert resp.json()["product"]["id"] == "p4"
    assert "p4" not in [p["id"] for p in read(data_dir / "products.json")["products"]]
    assert client.delete("/api/admin/products/p4", auth=ADMIN).status_code == 404


def test_image_views(client, data_dir):
    client.put("/api/admin/products/p1", json={"images": ["a.jpg", "b.jpg"]}, auth=ADMIN)
    resp = client.put("/api/admin/products/p1/image-views", json={"imageViews": {"1": "vue2"}}, auth=ADMIN)
    assert resp.status_code == 200
    images = read(data_dir / "products.json")["products"][0]["images"]
    assert images == [{"path": "a.jpg", "view": "vue1"}, {"path": "b.jpg", "view": "vue2"}]
    assert client.put("/api/admin/products/p1/image-views", json={}, auth=ADMIN).status_code == 400


# ---------- Admin orders ----------

def test_admin_orders_list_and_update(client):
    first = client.post("/api/orders", json=ORDER).json()["order"]
    second = client.post("/api/orders", json=ORDER).json()["order"]

    orders = client.get("/api/admin/orders", auth=ADMIN).json()["orders"]
    assert {o["id"] for o in orders} == {first["id"], second["id"]}

    resp = client.put(f"/api/admin/orders/{first['id']}", json={"status": "completed", "internalNotes": "ok"}, auth=ADMIN)
    assert resp.status_code == 200
    assert resp.json()["order"]["status"] == "completed"
    assert resp.json()["order"]["internalNotes"] == "ok"

    assert client.put(f"/api/admin/orders/{first['id']}", json={"status": "lost"}, auth=ADMIN).status_code == 400
    assert client.put("/api/admin/orders/nope", json={"status": "completed"}, auth=ADMIN).status_code == 404


def test_admin_orders_lists_legacy_records(client, data_dir):
    (data_dir / "orders.json").write_text(json.dumps({"orders": [
        {
            "id": 7,
            "orderNumber": "SOL-00000007",
            "customer": {"firstName": "Ana", "email": "ana@example.com"},
            "items": [{"productId": 1, "name": "Shampoing", "price": 10, "quantity": 1}],
            "status": "shipped",
            "createdAt": "2023-05-01T10:00:00.000Z",
        },
    ]}), encoding="utf-8")
    resp = client.get("/api/admin/orders", auth=ADMIN)
    assert resp.status_code == 200
    order = resp.json()["orders"][0]
    assert order["status"] == "shipped"
    assert order["customer"]["phone"] is None

    resp = client.put("/api/admin/orders/7", json={"internalNotes": "called"}, auth=ADMIN)
    assert resp.status_code == 200
    assert resp.json()["order"]["status"] == "shipped"


# ---------- Admin settings ----------

def test_admin_settings_hide_password(client):
    body = client.get("/api/admin/settings", auth=ADMIN).json()
    assert body["admin"] == {"username": "admin"}


def test_settings_update_is_idempotent(client, data_dir):
    patch = {"contact": {"phone": "0707070707", "address": "Lyon"}}
    assert client.put("/api/admin/settings", json=patch, auth=ADMIN).status_code == 200
    once = read(data_dir / "settings.json")
    client.put("/api/admin/settings", json=patch, auth=ADMIN)
    assert read(data_dir / "settings.json") == once
    assert once["contact"]["phone"] == "0707070707"
    assert once["contact"]["email"] == "hello@solea.fr"


def test_password_change_takes_effect(client):
    client.put("/api/admin/settings", json={"admin": {"password": "n3w"}}, auth=ADMIN)
    assert client.get("/api/admin/settings", auth=ADMIN).status_code == 401
    assert client.get("/api/admin/settings", auth=("admin", "n3w")).status_code == 200
