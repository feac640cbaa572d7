"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

Fields use English names with the catalog's Portuguese JSON keys as
aliases (``nome``, ``preco``, ...); both spellings are accepted.

DTOs only check *shape*: presence, types, and prices limited to the
column's 10 digits with 2 decimal places.  Business rules live on the
``Product`` entity so that every violation is reported together.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: explicit patch for partial updates.
- ``StockAdjustmentDTO`` / ``DiscountDTO``: inputs of the stock operations.
- ``PriceRangeDTO``: query of the price range search.
- ``ProductStatisticsDTO``: output of the statistics use case.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from modules.products.models import Product

_INPUT_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``name``, ``price`` and ``quantity`` are required; ``description``
    defaults to an empty string.
    """

    model_config = _INPUT_CONFIG

    name: str = Field(alias="nome")
    price: Decimal = Field(alias="preco", max_digits=10, decimal_places=2)
    description: str = Field(default="", alias="descricao")
    quantity: int = Field(alias="quantidade")


class UpdateProductDTO(BaseModel):
    """Immutable patch for partial product updates.

    Merge precedence, per field: a value that is present and not ``None``
    replaces the stored one; an absent (or ``None``) field keeps the stored
    value.  Falsy values such as ``quantity=0`` or ``description=""`` are
    real values and are applied.
    """

    model_config = _INPUT_CONFIG

    name: Optional[str] = Field(default=None, alias="nome")
    price: Optional[Decimal] = Field(
        default=None, alias="preco", max_digits=10, decimal_places=2
    )
    description: Optional[str] = Field(default=None, alias="descricao")
    quantity: Optional[int] = Field(default=None, alias="quantidade")

    def apply_to(self, product: Product) -> Product:
        """Merge this patch into ``product`` in place and return it."""
        for field in ("name", "price", "description", "quantity"):
            value = getattr(self, field)
            if value is not None:
                setattr(product, field, value)
        product.touch()
        return product


class StockAdjustmentDTO(BaseModel):
    """Units to add to (positive) or remove from (negative) the stock."""

    model_config = _INPUT_CONFIG

    quantity: int = Field(alias="quantidade")


class DiscountDTO(BaseModel):
    """Discount percentage, expected within ``[0, 100]``."""

    model_config = _INPUT_CONFIG

    percent: Decimal = Field(alias="percentual")


class PriceRangeDTO(BaseModel):
    """Price range query; missing bounds are left to the service to reject."""

    model_config = _INPUT_CONFIG

    min_price: Optional[Decimal] = Field(default=None, alias="min")
    max_price: Optional[Decimal] = Field(default=None, alias="max")


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductStatisticsDTO(BaseModel):
    """Aggregated catalog figures.

    ``model_dump(by_alias=True)`` yields the API's JSON keys.
    """

    model_config = ConfigDict(frozen=True)

    total: int
    total_value: Decimal = Field(serialization_alias="valorTotal")
    total_quantity: int = Field(serialization_alias="quantidadeTotal")
    average_price: Decimal = Field(serialization_alias="precoMedio")
    low_stock_count: int = Field(serialization_alias="produtosComEstoqueBaixo")
