"""Integration tests for the cart endpoints."""

from __future__ import annotations

import pytest

from modules.carts.models import CartEntry

pytestmark = pytest.mark.integration


class TestCartApi:
    def test_add_then_get(self, auth_client, book):
        response = auth_client.post(
            "/api/Cart/AddToCart", {"bookId": book.id, "quantity": 2}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["quantity"] == 2

        response = auth_client.get("/api/Cart/GetCart")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["bookId"] == book.id
        assert data[0]["title"] == book.title

    def test_add_unknown_book(self, auth_client):
        response = auth_client.post(
            "/api/Cart/AddToCart", {"bookId": 9999}, format="json"
        )
        assert response.status_code == 404

    def test_remove(self, auth_client, user, book):
        CartEntry.objects.create(user=user, book=book)

        response = auth_client.delete(f"/api/Cart/RemoveFromCart/{book.id}")

        assert response.status_code == 200
        assert not CartEntry.objects.exists()

    def test_remove_missing(self, auth_client, book):
        response = auth_client.delete(f"/api/Cart/RemoveFromCart/{book.id}")
        assert response.status_code == 404

    def test_requires_token(self, api_client):
        assert api_client.get("/api/Cart/GetCart").status_code == 401
