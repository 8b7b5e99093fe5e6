import copy
import json

import pytest
from fastapi.testclient import TestClient

from database import Database, get_db
from main import app

ADMIN = ("admin", "s3cret")

CATALOG = [
    {
        "id": "p1",
        "name": "Shampoing Doux",
        "description": "Un shampoo quotidien",
        "price": 10,
        "category": "shampoo",
        "hairType": ["dry", "curly"],
        "special": ["bio"],
        "rating": 4,
        "reviewCount": 10,
        "variants": [{"name": "500ml", "price": 18}],
        "createdAt": "2024-01-01T00:00:00.000Z",
        "visible": True,
    },
    {
        "id": "p2",
        "name": "Masque Nuit",
        "description": "Masque réparateur",
        "price": 30,
        "category": "mask",
        "hairType": ["damaged"],
        "special": ["new"],
        "rating": 5,
        "reviewCount": 3,
        "createdAt": "2024-03-01T00:00:00.000Z",
        "visible": False,
    },
    {
        "id": "p3",
        "name": "SHAMPOO Volume",
        "description": "Pour cheveux fins",
        "price": 15,
        "category": "shampoo",
        "hairType": ["fine"],
        "special": ["bestseller", "bio"],
        "rating": 5,
        "reviewCount": 42,
        "createdAt": "2024-02-01T00:00:00.000Z",
    },
    {
        "id": "p4",
        "name": "Huile Sèche",
        "description": "A appliquer après shampoo",
        "price": 22.5,
        "category": "oil",
        "hairType": ["dry"],
        "special": [],
        "rating": 3,
        "reviewCount": 7,
        "createdAt": "2023-12-01T00:00:00.000Z",
        "visible": True,
    },
]

SITE_SETTINGS = {
    "currency": {"code": "EUR", "symbol": "€", "name": "Euro"},
    "business": {"name": "SOLEA", "freeShippingThreshold": 50, "shippingCost": 5.99},
    "contact": {"phone": "0102030405", "email": "hello@solea.fr", "whatsapp": "", "address": "Paris"},
    "admin": {"username": ADMIN[0], "password": ADMIN[1]},
}


@pytest.fixture
def catalog():
    return copy.deepcopy(CATALOG)


@pytest.fixture
def site_settings():
    return copy.deepcopy(SITE_SETTINGS)


@pytest.fixture
def data_dir(tmp_path, catalog, site_settings):
    (tmp_path / "products.json").write_text(json.dumps({"products": catalog}), encoding="utf-8")
    (tmp_path / "orders.json").write_text(json.dumps({"orders": []}), encoding="utf-8")
    (tmp_path / "settings.json").write_text(json.dumps(site_settings), encoding="utf-8")
    return tmp_path


@pytest.fixture
def db(data_dir):
    return Database(data_dir)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
