"""Category, customer and discount CRUD."""
from datetime import datetime, timedelta

import pytest

from app.models.category import Category


def test_create_and_get_category(client):
    response = client.post("/api/categories", json={"title": "Shoes", "description": "All shoes"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    category_id = body["data"]["id"]

    fetched = client.get(f"/api/categories/{category_id}").json()["data"]
    assert fetched["title"] == "Shoes"
    assert fetched["deleted_at"] is None


def test_list_categories_newest_first_without_deleted(client, db_session):
    now = datetime(2026, 3, 1, 12, 0)
    db_session.add_all([
        Category(id="old", title="Old", created_at=now - timedelta(days=2)),
        Category(id="new", title="New", created_at=now),
        Category(id="gone", title="Gone", created_at=now - timedelta(days=1), deleted_at=now),
    ])
    db_session.commit()

    body = client.get("/api/categories").json()["data"]

    assert body["count"] == 2
    assert [row["id"] for row in body["data"]] == ["new", "old"]


def test_update_category(client):
    category_id = client.post("/api/categories", json={"title": "Bags"}).json()["data"]["id"]

    response = client.put(f"/api/categories/{category_id}", json={"description": "Leather"})

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Bags"
    assert response.json()["data"]["description"] == "Leather"


def test_soft_deleted_category_is_hidden(client):
    category_id = client.post("/api/categories", json={"title": "Hats"}).json()["data"]["id"]

    response = client.delete(f"/api/categories/{category_id}")

    assert response.status_code == 200
    body = response.json()["data"]
    assert body["message"] == "Category deleted successfully"
    assert body["data"]["deleted_at"] is not None

    missing = client.get(f"/api/categories/{category_id}")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Category not found"}
    assert client.get("/api/categories").json()["data"]["count"] == 0


def test_category_title_is_required(client):
    response = client.post("/api/categories", json={"description": "untitled"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request payload"
    assert body["errors"][0]["loc"][-1] == "title"


@pytest.mark.parametrize(
    "resource, payload, label",
    [
        ("customers", {"full_name": "Ada Lovelace", "phone_number": "+44 20 7946 0000"}, "Customer"),
        ("discounts", {"code": "SPRING10", "title": "Spring", "discount_percent": 10}, "Discount"),
    ],
)
def test_crud_lifecycle(client, resource, payload, label):
    created = client.post(f"/api/{resource}", json=payload)
    assert created.status_code == 201
    row_id = created.json()["data"]["id"]

    listed = client.get(f"/api/{resource}").json()["data"]
    assert listed["count"] == 1

    updated = client.put(f"/api/{resource}/{row_id}", json={"title": "Renamed"} if resource == "discounts" else {"full_name": "Renamed"})
    assert updated.status_code == 200

    deleted = client.delete(f"/api/{resource}/{row_id}")
    assert deleted.json()["data"]["message"] == f"{label} deleted successfully"

    assert client.get(f"/api/{resource}/{row_id}").status_code == 404
    assert client.get(f"/api/{resource}").json()["data"]["count"] == 0


def test_discount_percent_is_bounded(client):
    response = client.post("/api/discounts", json={"code": "TOO_MUCH", "discount_percent": 150})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_unknown_customer_is_not_found(client):
    response = client.put("/api/customers/does-not-exist", json={"full_name": "x"})

    assert response.status_code == 404
    assert response.json()["message"] == "Customer not found"
