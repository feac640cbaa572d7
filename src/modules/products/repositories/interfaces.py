"""Product repository interface.

Extends ``IRepository[Product, int]`` with the catalog searches.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product", int]):
    """Repository contract for the Product aggregate."""

    @property
    @abstractmethod
    def using(self) -> str:
        """Database alias used for queries and for the service transactions."""

    @abstractmethod
    def find_by_name(self, term: str) -> List[Product]:
        """Case-insensitive partial match on the name, ordered by name."""

    @abstractmethod
    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        """Products priced within the inclusive range, cheapest first."""
