import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from main import app


@pytest.fixture
def mongo_db(monkeypatch):
    db = mongomock.MongoClient()["cans_test"]
    monkeypatch.setattr(database, "db", db)
    return db


@pytest.fixture
def client(mongo_db):
    return TestClient(app)


def put_order(order_id, user_id, quantity, timestamp, total_price=None):
    """Store an order record directly, bypassing the ledger's clock."""
    database.put_document(database.ORDERS, order_id, {
        "orderId": order_id,
        "userId": user_id,
        "vendorId": None,
        "quantity": quantity,
        "unitPrice": 20,
        "totalPrice": total_price if total_price is not None else int(quantity) * 20,
        "timestamp": timestamp,
        "status": "Pending",
    })
