"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and renders the
catalog's JSON shape.  Input is parsed into Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource (Portuguese JSON keys)."""

    nome = serializers.CharField(source="name", read_only=True)
    preco = serializers.DecimalField(
        source="price",
        max_digits=10,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )
    descricao = serializers.CharField(source="description", read_only=True)
    quantidade = serializers.IntegerField(source="quantity", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "nome",
            "preco",
            "descricao",
            "quantidade",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductStatisticsSerializer(serializers.Serializer):
    """Schema of the statistics payload (OpenAPI docs)."""

    total = serializers.IntegerField()
    valorTotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    quantidadeTotal = serializers.IntegerField()
    precoMedio = serializers.DecimalField(max_digits=12, decimal_places=2)
    produtosComEstoqueBaixo = serializers.IntegerField()


class ProductInputSerializer(serializers.Serializer):
    """Schema of create / update bodies (OpenAPI docs).

    Parsing and validation are done by ``CreateProductDTO`` /
    ``UpdateProductDTO`` and the ``Product`` entity.
    """

    nome = serializers.CharField(max_length=255)
    preco = serializers.DecimalField(max_digits=10, decimal_places=2)
    descricao = serializers.CharField(required=False, allow_blank=True)
    quantidade = serializers.IntegerField(min_value=0)
