"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API against the
``produtos`` table.  The database alias is injected at construction time
(``using``); Django owns the underlying connections.

Error handling:
- missing rows raise ``ProductNotFound``;
- invalid entities raise ``ProductValidationError`` before any query runs;
- ``DatabaseError`` (and subclasses) are wrapped into ``RepositoryError``,
  flagged ``unavailable`` for connectivity failures; driver-level overflow
  errors are wrapped too.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from typing import Iterator, List

import structlog
from django.db import DatabaseError, InterfaceError, OperationalError
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import RepositoryError
from modules.products.exceptions import ProductNotFound, ProductValidationError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate low-level database failures into ``RepositoryError``."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("product.repository_unavailable", operation=operation, error=str(exc))
        raise RepositoryError(
            "Database unavailable while trying to " + operation + ".",
            unavailable=True,
        ) from exc
    except DatabaseError as exc:
        logger.error("product.repository_failure", operation=operation, error=str(exc))
        raise RepositoryError("Database error while trying to " + operation + ".") from exc
    except (OverflowError, InvalidOperation) as exc:
        # raised by drivers (e.g. sqlite3) for values the column cannot hold
        logger.error("product.repository_failure", operation=operation, error=str(exc))
        raise RepositoryError("Value out of range while trying to " + operation + ".") from exc


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    @property
    def using(self) -> str:
        """Database alias every query of this repository runs on."""
        return self._using

    def _queryset(self):
        return Product.objects.using(self._using)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> List[Product]:
        """All products, newest first."""
        with storage_errors("list products"):
            return list(self._queryset().order_by("-created_at", "-id"))

    def get_by_id(self, id: int) -> Product:
        """Retrieve a product by primary key.

        Raises:
            ProductNotFound: if no row has this id.
        """
        with storage_errors("fetch product"):
            product = self._queryset().filter(pk=id).first()
        if product is None:
            raise ProductNotFound(id)
        return product

    def find_by_name(self, term: str) -> List[Product]:
        with storage_errors("search products by name"):
            return list(self._queryset().filter(name__icontains=term).order_by("name", "id"))

    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        with storage_errors("search products by price"):
            return list(
                self._queryset()
                .filter(price__gte=min_price, price__lte=max_price)
                .order_by("price", "id")
            )

    def count(self) -> int:
        with storage_errors("count products"):
            return self._queryset().count()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, entity: Product) -> Product:
        """Insert ``entity`` and return the reloaded row.

        Raises:
            ProductValidationError: if the entity is invalid (nothing stored).
        """
        _ensure_valid(entity)
        with storage_errors("create product"):
            with transaction.atomic(using=self._using):
                now = timezone.now()
                row = self._queryset().create(
                    name=entity.name,
                    price=entity.price,
                    description=entity.description or "",
                    quantity=entity.quantity,
                    created_at=now,
                    updated_at=now,
                )
        logger.info("product.saved", product_id=row.id, name=row.name)
        return self.get_by_id(row.id)

    def update(self, id: int, entity: Product) -> Product:
        """Overwrite the row ``id`` with the state of ``entity``.

        Raises:
            ProductValidationError: if the entity is invalid (nothing stored).
            ProductNotFound: if no row has this id.
        """
        _ensure_valid(entity)
        with storage_errors("update product"):
            affected = self._queryset().filter(pk=id).update(
                name=entity.name,
                price=entity.price,
                description=entity.description or "",
                quantity=entity.quantity,
                updated_at=timezone.now(),
            )
        if affected == 0:
            raise ProductNotFound(id)
        logger.info("product.saved", product_id=id, name=entity.name)
        return self.get_by_id(id)

    def delete(self, id: int) -> bool:
        """Delete the row ``id``.

        Raises:
            ProductNotFound: if no row has this id.
        """
        with storage_errors("delete product"):
            deleted, _ = self._queryset().filter(pk=id).delete()
        if deleted == 0:
            raise ProductNotFound(id)
        logger.info("product.deleted", product_id=id)
        return True


def _ensure_valid(entity: Product) -> None:
    errors = entity.validate()
    if errors:
        raise ProductValidationError(errors)
