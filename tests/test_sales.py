"""Tests for Sale API endpoints."""
from datetime import datetime
from unittest.mock import patch

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from pos_terminal.models.sale import Sale


def get_stock(client, product_id):
    return client.get(f"/api/products/{product_id}").json()["stock"]


def test_create_sale_success(client):
    """Test checking out 3 paper rolls."""
    response = client.post(
        "/api/sales",
        json={"total": 7.50, "items": [{"id": 6, "quantity": 3, "price": 2.50}]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert isinstance(data["saleId"], int)

    sale = client.get(f"/api/sales/{data['saleId']}").json()
    assert sale["total"] == 7.50
    assert get_stock(client, 6) == 497


def test_create_sale_accepts_full_product_objects(client):
    """Test the till's cart lines (product fields plus quantity) are accepted."""
    product = client.get("/api/products/1").json()

    response = client.post(
        "/api/sales",
        json={"total": 241.00, "items": [{**product, "quantity": 2}]}
    )

    assert response.status_code == 200
    assert get_stock(client, 1) == 48


def test_sale_decrements_only_sold_products(client):
    """Test stock changes for sold products only."""
    before = {p["id"]: p["stock"] for p in client.get("/api/products").json()}

    client.post(
        "/api/sales",
        json={
            "total": 165.00,
            "items": [
                {"id": 2, "quantity": 1, "price": 45.00},
                {"id": 3, "quantity": 2, "price": 60.00},
            ]
        }
    )

    after = {p["id"]: p["stock"] for p in client.get("/api/products").json()}
    assert after[2] == before[2] - 1
    assert after[3] == before[3] - 2
    for product_id in (1, 4, 5, 6):
        assert after[product_id] == before[product_id]


def test_sale_detail_matches_cart(client):
    """Test detail returns the cart's quantities and prices in order."""
    cart = [
        {"id": 5, "quantity": 1, "price": 550.00},
        {"id": 6, "quantity": 4, "price": 2.50},
    ]
    sale_id = client.post("/api/sales", json={"total": 560.00, "items": cart}).json()["saleId"]

    response = client.get(f"/api/sales/{sale_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == sale_id
    assert "date" in data
    assert [(i["quantity"], i["price"]) for i in data["items"]] == [(1, 550.00), (4, 2.50)]
    assert [i["name"] for i in data["items"]] == ["Terminal POS All-in-One", "Rollo Papel Térmico 80mm"]
    assert sum(i["quantity"] * i["price"] for i in data["items"]) == data["total"]


def test_sale_total_is_stored_as_sent(client):
    """Test the total is not recomputed from the lines."""
    sale_id = client.post(
        "/api/sales",
        json={"total": 1.00, "items": [{"id": 6, "quantity": 2, "price": 2.50}]}
    ).json()["saleId"]

    assert client.get(f"/api/sales/{sale_id}").json()["total"] == 1.00


def test_sale_can_drive_stock_negative(client):
    """Test stock is not checked before decrementing."""
    response = client.post(
        "/api/sales",
        json={"total": 9350.00, "items": [{"id": 4, "quantity": 37, "price": 250.00}]}
    )

    assert response.status_code == 200
    assert get_stock(client, 4) == 20 - 37


def test_create_sale_empty_cart_rejected(client):
    """Test an empty cart is a validation error and records nothing."""
    response = client.post("/api/sales", json={"total": 0, "items": []})

    assert response.status_code == 422
    assert client.get("/api/sales").json() == []


def test_create_sale_invalid_quantity(client):
    """Test quantities below 1 are rejected."""
    response = client.post(
        "/api/sales",
        json={"total": 0, "items": [{"id": 6, "quantity": 0, "price": 2.50}]}
    )

    assert response.status_code == 422


def test_create_sale_unknown_product_rolls_back(client):
    """Test a failing line leaves no sale and no stock change behind."""
    response = client.post(
        "/api/sales",
        json={
            "total": 130.00,
            "items": [
                {"id": 3, "quantity": 2, "price": 60.00},
                {"id": 9999, "quantity": 1, "price": 10.00},
            ]
        }
    )

    assert response.status_code == 404
    assert get_stock(client, 3) == 30
    assert client.get("/api/sales").json() == []


def test_list_sales_newest_first(client):
    """Test sales are listed newest first with their line counts."""
    ids = []
    for quantity in (1, 2, 3):
        items = [{"id": 6, "quantity": 1, "price": 2.50}] * quantity
        ids.append(
            client.post("/api/sales", json={"total": 2.50 * quantity, "items": items}).json()["saleId"]
        )

    response = client.get("/api/sales")

    assert response.status_code == 200
    data = response.json()
    assert [s["id"] for s in data] == list(reversed(ids))
    assert [s["itemCount"] for s in data] == [3, 2, 1]
    assert set(data[0]) == {"id", "total", "date", "itemCount"}


def test_list_sales_ordered_by_date(client, app):
    """Test a later date lists first even when its ID is lower."""
    db = app.state.session_factory()
    db.add_all([
        Sale(total=1.00, date=datetime(2026, 1, 3, 12, 0, 0)),
        Sale(total=2.00, date=datetime(2026, 1, 1, 12, 0, 0)),
        Sale(total=3.00, date=datetime(2026, 1, 2, 12, 0, 0)),
    ])
    db.commit()
    db.close()

    data = client.get("/api/sales").json()

    assert [s["total"] for s in data] == [1.00, 3.00, 2.00]


def test_create_sale_database_failure_rolls_back(client):
    """Test a failed commit answers 500 and leaves no sale or stock change."""
    with patch.object(Session, "commit", side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))):
        response = client.post(
            "/api/sales",
            json={"total": 7.50, "items": [{"id": 6, "quantity": 3, "price": 2.50}]}
        )

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to process sale"}
    assert client.get("/api/sales").json() == []
    assert get_stock(client, 6) == 500


def test_create_sale_out_of_range_integers(client):
    """Test IDs and quantities beyond 64 bits are validation errors."""
    too_big = 10**20

    response = client.post(
        "/api/sales",
        json={"total": 1, "items": [{"id": 6, "quantity": too_big, "price": 1}]}
    )
    assert response.status_code == 422

    response = client.post(
        "/api/sales",
        json={"total": 1, "items": [{"id": too_big, "quantity": 1, "price": 1}]}
    )
    assert response.status_code == 422

    response = client.post(
        "/api/sales",
        json={"total": 1, "items": [{"id": -too_big, "quantity": 1, "price": 1}]}
    )
    assert response.status_code == 422

    assert client.get("/api/sales").json() == []
    assert get_stock(client, 6) == 500


def test_get_sale_out_of_range_id(client):
    """Test out-of-range sale IDs are validation errors, not server errors."""
    assert client.get("/api/sales/100000000000000000000").status_code == 422
    assert client.post("/api/sales/100000000000000000000/print").status_code == 422
    assert client.get("/api/sales/0").status_code == 422


def test_list_sales_empty(client):
    """Test the history is empty before any sale."""
    response = client.get("/api/sales")

    assert response.status_code == 200
    assert response.json() == []


def test_get_sale_not_found(client):
    """Test unknown sale returns 404."""
    response = client.get("/api/sales/9999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Sale not found"
