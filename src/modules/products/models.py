"""Product entity with self-validation and stock / pricing rules.

Business rules implemented:
- Name is required (after trimming) and has at most 255 characters.
- Price must be greater than zero and fit the price column.
- Quantity cannot be negative, before or after a stock adjustment, and
  must fit the quantity column.
- Discount percentage must lie within ``[0, 100]``.

The entity reports rule violations through ``validate()`` (a list of
messages, empty when valid) instead of raising, so callers can collect every
problem at once.  Stock and discount operations raise domain exceptions and
leave the entity untouched on failure.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.db import models
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from modules.core.models import TimestampedModel
from modules.products.exceptions import InsufficientStock, InvalidDiscount

logger = structlog.get_logger(__name__)

NAME_MAX_LENGTH = 255
PRICE_QUANTUM = Decimal("0.01")
# Bounds of the decimal(10,2) and INTEGER columns
PRICE_MAX = Decimal("99999999.99")
QUANTITY_MAX = 2147483647


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce numbers and numeric strings to ``Decimal`` (``None`` passes)."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Product(TimestampedModel):
    """Product aggregate root, stored in the ``produtos`` table.

    Columns keep the catalog's Portuguese names (``nome``, ``preco``,
    ``descricao``, ``quantidade``); attributes are English.
    """

    name = models.CharField(max_length=NAME_MAX_LENGTH, db_column="nome")
    price = models.DecimalField(max_digits=10, decimal_places=2, db_column="preco")
    description = models.TextField(blank=True, default="", db_column="descricao")
    quantity = models.IntegerField(default=0, db_column="quantidade")

    class Meta:
        db_table = "produtos"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["name"], name="idx_produtos_nome"),
            models.Index(fields=["price"], name="idx_produtos_preco"),
            models.Index(fields=["created_at"], name="idx_produtos_created_at"),
        ]

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        name: str,
        price: Any,
        description: Optional[str] = "",
        quantity: Optional[int] = 0,
    ) -> Product:
        """Create a not-yet-persisted product (``id`` is ``None``)."""
        return cls(
            id=None,
            name=name,
            price=to_decimal(price),
            description=description or "",
            quantity=quantity,
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> Product:
        """Rebuild a product from its plain record representation.

        Timestamps are optional and default to "now"; they may be given as
        ``datetime`` objects or ISO-8601 strings.
        """
        now = timezone.now()
        return cls(
            id=record.get("id"),
            name=record.get("nome"),
            price=to_decimal(record.get("preco")),
            description=record.get("descricao") or "",
            quantity=record.get("quantidade"),
            created_at=_parse_timestamp(record.get("created_at")) or now,
            updated_at=_parse_timestamp(record.get("updated_at")) or now,
        )

    def to_record(self) -> Dict[str, Any]:
        """Plain record with the catalog's field names."""
        return {
            "id": self.id,
            "nome": self.name,
            "preco": self.price,
            "descricao": self.description,
            "quantidade": self.quantity,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> List[str]:
        """Return every broken rule; an empty list means the product is valid."""
        errors: List[str] = []

        if not self.name or not str(self.name).strip():
            errors.append("Name is required")

        if self.price is None or self.price <= 0:
            errors.append("Price must be greater than zero")

        if self.price is not None and self.price > PRICE_MAX:
            errors.append(f"Price must be at most {PRICE_MAX}")

        if self.quantity is None or self.quantity < 0:
            errors.append("Quantity cannot be negative")
        elif self.quantity > QUANTITY_MAX:
            errors.append(f"Quantity must be at most {QUANTITY_MAX}")

        if self.name and len(self.name) > NAME_MAX_LENGTH:
            errors.append(f"Name must have at most {NAME_MAX_LENGTH} characters")

        return errors

    @property
    def is_new(self) -> bool:
        """``True`` until the repository assigns an identifier."""
        return self.id is None

    # ------------------------------------------------------------------
    # Domain operations
    # ------------------------------------------------------------------

    def adjust_stock(self, delta: int) -> None:
        """Add ``delta`` (possibly negative) units to the stock.

        Raises:
            InsufficientStock: if the result would be negative.
        """
        if self.quantity + delta < 0:
            raise InsufficientStock(
                f"Insufficient stock: {self.quantity} available, "
                f"adjustment of {delta} requested."
            )
        self.quantity += delta
        self.touch()
        logger.info(
            "product.stock_adjusted",
            product_id=self.id,
            delta=delta,
            quantity=self.quantity,
        )

    def apply_discount(self, percent: Any) -> None:
        """Reduce the price by ``percent`` percent (rounded to cents).

        Raises:
            InvalidDiscount: if ``percent`` is outside ``[0, 100]``.
        """
        rate = to_decimal(percent)
        if rate < 0 or rate > 100:
            raise InvalidDiscount(
                f"Invalid discount percentage: {percent} (expected 0 to 100)."
            )
        discounted = to_decimal(self.price) * (1 - rate / 100)
        self.price = discounted.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        self.touch()
        logger.info(
            "product.discount_applied",
            product_id=self.id,
            percent=str(rate),
            price=str(self.price),
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return parse_datetime(str(value))
