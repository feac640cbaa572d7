"""Integration tests for the JSON error format."""

from unittest.mock import patch

import pytest
from django.db import OperationalError

from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get("/api/produtos/424242")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Product not found"
        assert "424242" in data["message"]

    def test_malformed_json_has_standard_format(self, api_client):
        response = api_client.post(
            "/api/produtos", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Bad Request"
        assert data["message"]

    def test_validation_error_lists_details(self, api_client):
        response = api_client.post("/api/produtos", {}, format="json")
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid data"
        assert isinstance(data["details"], list)
        assert len(data["details"]) == 3

    def test_method_not_allowed(self, api_client):
        response = api_client.delete("/api/produtos")
        assert response.status_code == 405
        assert "error" in response.json()

    def test_unknown_route_returns_json_404(self, api_client):
        response = api_client.get("/api/nao-existe")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Route not found"
        assert "/api/nao-existe" in data["message"]

    def test_unreachable_database_returns_503(self, api_client):
        with patch.object(
            ProductDjangoRepository, "_queryset", side_effect=OperationalError("down")
        ):
            response = api_client.get("/api/produtos")
        assert response.status_code == 503
        assert response.json()["kind"] == "repository_error"

    def test_unexpected_error_hides_internals(self, api_client):
        with patch.object(
            ProductDjangoRepository, "list_all", side_effect=RuntimeError("internals")
        ):
            response = api_client.get("/api/produtos")
        assert response.status_code == 500
        data = response.json()
        assert "internals" not in data["message"]
        assert "stack" not in data
