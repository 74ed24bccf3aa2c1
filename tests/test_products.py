"""Product routes."""
from datetime import datetime, timedelta

from app.models.category import Category
from app.models.product import Product


def seed_products(db_session):
    now = datetime(2026, 3, 1, 12, 0)
    db_session.add_all([
        Category(id="cat-1", title="Shoes", created_at=now),
        Category(id="cat-2", title="Bags", created_at=now),
    ])
    db_session.flush()
    db_session.add_all([
        Product(id="1", title="Runner", category_id="cat-1", created_at=now - timedelta(hours=2)),
        Product(id="2", title="Loafer", category_id="cat-1", created_at=now - timedelta(hours=1)),
        Product(id="3", title="Tote", category_id="cat-2", created_at=now),
        Product(id="4", title="Old boot", category_id="cat-1", created_at=now, deleted_at=now),
    ])
    db_session.commit()


def test_create_product_embeds_category(client):
    category_id = client.post("/api/categories", json={"title": "Shoes"}).json()["data"]["id"]

    response = client.post(
        "/api/products",
        json={"title": "Runner", "purchase_price": 20.5, "category_id": category_id},
    )

    assert response.status_code == 201
    product = response.json()["data"]
    assert product["status"] == "in_stock"
    assert product["category"]["title"] == "Shoes"
    assert product["discount"] is None


def test_list_products_filtered_by_category(client, db_session):
    seed_products(db_session)

    body = client.get("/api/products", params={"category_id": "cat-1"}).json()["data"]

    assert body["count"] == 2
    assert [row["id"] for row in body["data"]] == ["2", "1"]


def test_by_ids_keeps_requested_order(client, db_session):
    seed_products(db_session)

    response = client.post("/api/products/by-ids", json={"ids": ["2", "missing", "1"]})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [row["id"] for row in data] == ["2", "1"]
    assert data[0]["category"] == {"title": "Shoes"}


def test_by_ids_skips_deleted_products(client, db_session):
    seed_products(db_session)

    data = client.post("/api/products/by-ids", json={"ids": ["4", "3"]}).json()["data"]

    assert [row["id"] for row in data] == ["3"]


def test_by_ids_requires_ids(client):
    for body in ({"ids": []}, {}):
        response = client.post("/api/products/by-ids", json=body)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid product IDs"}


def test_unknown_category_is_rejected_by_database(client):
    response = client.post("/api/products", json={"title": "Orphan", "category_id": "nope"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "FOREIGN KEY" in body["message"]


def test_update_and_delete_product(client, db_session):
    seed_products(db_session)

    updated = client.put("/api/products/1", json={"status": "sold", "color": "red"})
    assert updated.json()["data"]["status"] == "sold"
    assert updated.json()["data"]["color"] == "red"

    deleted = client.delete("/api/products/1")
    assert deleted.json()["data"]["message"] == "Product deleted successfully"
    assert client.get("/api/products/1").status_code == 404


def test_invalid_status_is_rejected(client):
    response = client.post("/api/products", json={"title": "Runner", "status": "lost"})

    assert response.status_code == 400
