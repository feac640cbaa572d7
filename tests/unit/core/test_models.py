"""Unit tests for TimestampedModel, exercised through Product."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from modules.products.models import Product

pytestmark = pytest.mark.unit


def _saved_product() -> Product:
    product = Product(name="Webcam HD", price=Decimal("129.90"), quantity=3)
    product.save()
    return product


class TestTimestampedModel:
    def test_timestamps_set_on_create(self):
        product = _saved_product()
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_touch_restamps_updated_at(self):
        product = _saved_product()
        product.updated_at = timezone.now() - timedelta(hours=1)
        stale = product.updated_at
        product.touch()
        assert product.updated_at > stale

    def test_save_refreshes_updated_at(self):
        product = _saved_product()
        stale = timezone.now() - timedelta(hours=1)
        Product.objects.filter(pk=product.pk).update(updated_at=stale)
        product.refresh_from_db()

        product.quantity = 4
        product.save()
        product.refresh_from_db()

        assert product.updated_at > stale

    def test_save_with_update_fields_includes_updated_at(self):
        product = _saved_product()
        stale = timezone.now() - timedelta(hours=1)
        Product.objects.filter(pk=product.pk).update(updated_at=stale)
        product.refresh_from_db()

        product.name = "Webcam Full HD"
        product.save(update_fields=["name"])
        product.refresh_from_db()

        assert product.name == "Webcam Full HD"
        assert product.updated_at > stale

    def test_created_at_is_not_editable(self):
        field = Product._meta.get_field("created_at")
        assert field.editable is False
