"""Product domain exceptions.

Raised by the entity, the repository and the Service Layer when business
rules are violated.  The DRF exception handler translates them into HTTP
responses through the ``kind`` / ``status_code`` attributes inherited from
``modules.core.exceptions``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from modules.core.exceptions import (
    DomainRuleViolation,
    EntityNotFound,
    InvalidIdentifier,
    ValidationFailed,
)


class ProductValidationError(ValidationFailed):
    """The product state breaks one or more invariants.

    ``errors`` keeps the individual messages returned by
    ``Product.validate()``; the exception message joins them.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(f"Invalid product data: {', '.join(self.errors)}")

    def extra(self) -> Dict[str, Any]:
        return {"details": self.errors}


class InvalidProductId(InvalidIdentifier):
    """The product identifier is missing or not a non-negative integer."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid product id: {value!r}")


class ProductNotFound(EntityNotFound):
    """The requested product does not exist."""

    title = "Product not found"

    def __init__(self, product_id: Any) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found.")


# ---------------------------------------------------------------------------
# Search guards
# ---------------------------------------------------------------------------


class EmptySearchTerm(ValidationFailed):
    """Name search with a blank term."""

    kind = "empty_search_term"
    title = "Invalid parameter"


class MissingPriceBound(ValidationFailed):
    """Price range search without ``min`` or ``max``."""

    kind = "missing_bound"
    title = "Invalid parameters"


class NegativePriceBound(ValidationFailed):
    """Price range search with a negative bound."""

    kind = "negative_price"
    title = "Invalid parameters"


class InvertedPriceRange(ValidationFailed):
    """Price range search where ``min > max``."""

    kind = "inverted_range"
    title = "Invalid parameters"


# ---------------------------------------------------------------------------
# Entity rules
# ---------------------------------------------------------------------------


class InsufficientStock(DomainRuleViolation):
    """A stock adjustment would leave the quantity negative."""

    kind = "insufficient_stock"


class InvalidDiscount(DomainRuleViolation):
    """Discount percentage outside ``[0, 100]``."""

    kind = "invalid_discount"
