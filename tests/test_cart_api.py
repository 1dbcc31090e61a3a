"""
Cart endpoint tests: request validation, auth and the JSON contract.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from conftest import API, auth_headers_for
from shopwave.models.cart import MAX_QUANTITY

CART = f"{API}/cart"


class TestCartAuth:
    def test_get_requires_token(self, client):
        response = client.get(CART)

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_add_requires_token(self, client, products):
        response = client.post(CART, json={"productId": products[0].id})

        assert response.status_code == 401

    def test_garbage_token_rejected(self, client):
        response = client.get(CART, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_expired_token_rejected(self, client, user):
        token = jwt.encode(
            {"sub": user.id, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            "test-secret",
            algorithm="HS256",
        )

        response = client.get(CART, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_for_unknown_user_rejected(self, client):
        token = jwt.encode({"sub": "ghost"}, "test-secret", algorithm="HS256")

        response = client.get(CART, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestCartContract:
    def test_empty_cart_shape(self, client, user, auth_headers):
        response = client.get(CART, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"id", "userId", "items", "totalQuantity", "totalPrice"}
        assert data["userId"] == user.id
        assert data["items"] == []

    def test_get_twice_returns_same_cart(self, client, auth_headers):
        first = client.get(CART, headers=auth_headers).json()
        second = client.get(CART, headers=auth_headers).json()

        assert first["id"] == second["id"]

    def test_add_item_returns_updated_cart(self, client, auth_headers, products):
        headphones = products[0]

        response = client.post(
            CART,
            json={"productId": headphones.id, "quantity": 2},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalQuantity"] == 2
        assert len(data["items"]) == 1
        item = data["items"][0]
        assert item["quantity"] == 2
        assert item["product"] == {
            "id": headphones.id,
            "name": "Wireless Headphones",
            "price": 199.99,
            "imageUrl": "https://img.example.com/headphones.png",
        }

    def test_quantity_defaults_to_one(self, client, auth_headers, products):
        response = client.post(CART, json={"productId": products[0].id}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 1

    def test_repeated_add_aggregates(self, client, auth_headers, products):
        p1 = products[0].id
        client.post(CART, json={"productId": p1, "quantity": 2}, headers=auth_headers)

        response = client.post(CART, json={"productId": p1, "quantity": 5}, headers=auth_headers)

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 7

    def test_carts_are_per_user(self, client, auth_headers, other_user, products):
        client.post(CART, json={"productId": products[0].id}, headers=auth_headers)

        response = client.get(CART, headers=auth_headers_for(other_user))

        assert response.json()["items"] == []


class TestCartValidation:
    def test_zero_quantity(self, client, auth_headers, products):
        response = client.post(
            CART, json={"productId": products[0].id, "quantity": 0}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_negative_quantity(self, client, auth_headers, products):
        response = client.post(
            CART, json={"productId": products[0].id, "quantity": -3}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_fractional_quantity(self, client, auth_headers, products):
        response = client.post(
            CART, json={"productId": products[0].id, "quantity": 1.5}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("quantity", [True, "3", "abc", 10**20, MAX_QUANTITY + 1])
    def test_quantity_must_be_bounded_json_integer(
        self, client, auth_headers, products, quantity
    ):
        p1 = products[0].id
        client.post(CART, json={"productId": p1, "quantity": 1}, headers=auth_headers)

        response = client.post(
            CART, json={"productId": p1, "quantity": quantity}, headers=auth_headers
        )

        assert response.status_code == 400
        cart = client.get(CART, headers=auth_headers).json()
        assert cart["items"][0]["quantity"] == 1

    def test_add_past_quantity_cap(self, client, auth_headers, products):
        p1 = products[0].id
        client.put(
            CART, json={"productId": p1, "quantity": MAX_QUANTITY}, headers=auth_headers
        )

        response = client.post(CART, json={"productId": p1, "quantity": 1}, headers=auth_headers)

        assert response.status_code == 400
        cart = client.get(CART, headers=auth_headers).json()
        assert cart["items"][0]["quantity"] == MAX_QUANTITY

    def test_missing_product_id(self, client, auth_headers):
        response = client.post(CART, json={"quantity": 1}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"][-1] == "productId"

    def test_blank_product_id(self, client, auth_headers):
        response = client.post(CART, json={"productId": "  "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Product ID is required"

    def test_unknown_product(self, client, auth_headers, products):
        response = client.post(CART, json={"productId": "missing"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"


class TestRemoveAndSet:
    def test_remove_item(self, client, auth_headers, products):
        client.post(CART, json={"productId": products[0].id}, headers=auth_headers)

        response = client.request(
            "DELETE", CART, json={"productId": products[0].id}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_remove_item_not_in_cart(self, client, auth_headers, products):
        client.post(CART, json={"productId": products[0].id}, headers=auth_headers)

        response = client.request(
            "DELETE", CART, json={"productId": products[1].id}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Item not in cart"
        cart = client.get(CART, headers=auth_headers).json()
        assert [i["product"]["id"] for i in cart["items"]] == [products[0].id]

    def test_remove_requires_product_id(self, client, auth_headers):
        response = client.request("DELETE", CART, json={}, headers=auth_headers)

        assert response.status_code == 400

    def test_set_quantity(self, client, auth_headers, products):
        p1 = products[0].id
        client.post(CART, json={"productId": p1, "quantity": 7}, headers=auth_headers)

        response = client.put(CART, json={"productId": p1, "quantity": 3}, headers=auth_headers)

        assert response.status_code == 200
        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3

    def test_set_quantity_requires_quantity(self, client, auth_headers, products):
        response = client.put(CART, json={"productId": products[0].id}, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.parametrize("quantity", [True, "3", 10**20])
    def test_set_quantity_must_be_bounded_json_integer(
        self, client, auth_headers, products, quantity
    ):
        response = client.put(
            CART, json={"productId": products[0].id, "quantity": quantity}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_remove_then_add_sets_quantity(self, client, auth_headers, products):
        p1 = products[0].id
        client.post(CART, json={"productId": p1, "quantity": 7}, headers=auth_headers)

        client.request("DELETE", CART, json={"productId": p1}, headers=auth_headers)
        response = client.post(CART, json={"productId": p1, "quantity": 3}, headers=auth_headers)

        assert response.json()["items"][0]["quantity"] == 3
