from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def product_repo():
    return ProductDjangoRepository()


@pytest.fixture()
def create_product(product_repo):
    """Factory persisting a valid product through the repository."""

    def _create(**overrides) -> Product:
        fields = {
            "name": "Notebook Dell Inspiron",
            "price": Decimal("2999.99"),
            "description": "Notebook com processador Intel i5",
            "quantity": 10,
        }
        fields.update(overrides)
        return product_repo.create(Product.build(**fields))

    return _create
