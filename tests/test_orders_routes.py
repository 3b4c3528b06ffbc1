"""
Tests for order routes
"""
from datetime import datetime, timezone

from tests.conftest import run

AUTH = "/api/v1/auth"


class TestUserOrders:
    """Test GET /auth/orders"""

    def test_lists_only_own_orders_newest_first(self, client, make_user, user, user_headers, category, make_product, make_order):
        product = make_product(category)
        other_user = make_user(email="other@mail.com")
        older = make_order(user, [product], created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        newer = make_order(user, [product], status="Shipped", created_at=datetime(2025, 3, 1, tzinfo=timezone.utc))
        make_order(other_user, [product])

        response = client.get(f"{AUTH}/orders", headers=user_headers)

        assert response.status_code == 200
        orders = response.json()
        assert [o["_id"] for o in orders] == [str(newer["_id"]), str(older["_id"])]
        assert orders[0]["status"] == "Shipped"
        assert orders[0]["buyer"] == {"_id": str(user["_id"]), "name": user["name"]}
        assert orders[0]["products"][0]["name"] == product["name"]
        assert "photo" not in orders[0]["products"][0]

    def test_no_orders(self, client, user_headers):
        response = client.get(f"{AUTH}/orders", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_requires_sign_in(self, client):
        response = client.get(f"{AUTH}/orders")

        assert response.status_code == 401


class TestAllOrders:
    """Test GET /auth/all-orders"""

    def test_admin_sees_every_order(self, client, make_user, user, admin_headers, category, make_product, make_order):
        product = make_product(category)
        other_user = make_user(email="other@mail.com", name="other user")
        make_order(user, [product], created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        make_order(other_user, [product], created_at=datetime(2025, 2, 1, tzinfo=timezone.utc))

        response = client.get(f"{AUTH}/all-orders", headers=admin_headers)

        assert response.status_code == 200
        buyers = [o["buyer"]["name"] for o in response.json()]
        assert buyers == ["other user", "test user"]

    def test_customer_is_rejected(self, client, user_headers):
        response = client.get(f"{AUTH}/all-orders", headers=user_headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized Access"

    def test_deleted_product_is_left_out(self, client, db, user, admin_headers, category, make_product, make_order):
        kept = make_product(category, name="Kept Product")
        removed = make_product(category, name="Removed Product")
        make_order(user, [kept, removed])
        run(db.products.delete_one({"_id": removed["_id"]}))

        response = client.get(f"{AUTH}/all-orders", headers=admin_headers)

        products = response.json()[0]["products"]
        assert [p["name"] for p in products] == ["Kept Product"]


class TestOrderStatus:
    """Test PUT /auth/order-status/{order_id}"""

    def test_update_status(self, client, db, user, admin_headers, category, make_product, make_order):
        order = make_order(user, [make_product(category)])

        response = client.put(
            f"{AUTH}/order-status/{order['_id']}",
            json={"status": "Delivered"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Delivered"
        assert response.json()["_id"] == str(order["_id"])
        assert run(db.orders.find_one({"_id": order["_id"]}))["status"] == "Delivered"

    def test_invalid_status(self, client, user, admin_headers, category, make_product, make_order):
        order = make_order(user, [make_product(category)])

        response = client.put(
            f"{AUTH}/order-status/{order['_id']}",
            json={"status": "Lost"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order status is provided"

    def test_unknown_order(self, client, admin_headers, missing_id):
        response = client.put(
            f"{AUTH}/order-status/{missing_id}",
            json={"status": "Shipped"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order id was provided and order cannot be found"

    def test_malformed_order_id(self, client, admin_headers):
        response = client.put(
            f"{AUTH}/order-status/not-an-id",
            json={"status": "Shipped"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_customer_is_rejected(self, client, user, user_headers, category, make_product, make_order):
        order = make_order(user, [make_product(category)])

        response = client.put(
            f"{AUTH}/order-status/{order['_id']}",
            json={"status": "Shipped"},
            headers=user_headers,
        )

        assert response.status_code == 401
