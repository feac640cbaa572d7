"""Product service layer (domain service).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Responsibilities:
- guard identifiers and search parameters before touching storage;
- build / merge entities and run their validation;
- drive the entity's stock and discount operations;
- compute catalog statistics.

Domain and repository errors are logged and re-raised unchanged; the API
layer maps them to status codes.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, List, Optional

import structlog
from django.db import transaction

from modules.products.dtos import ProductStatisticsDTO
from modules.products.exceptions import (
    EmptySearchTerm,
    InsufficientStock,
    InvalidDiscount,
    InvalidProductId,
    InvertedPriceRange,
    MissingPriceBound,
    NegativePriceBound,
    ProductValidationError,
)
from modules.products.models import PRICE_QUANTUM, Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

LOW_STOCK_THRESHOLD = 10

_DIGITS = re.compile(r"^[0-9]+$")


def parse_product_id(value: Any) -> int:
    """Accept non-negative integers (or their decimal string form).

    Zero is a valid identifier: it simply never matches a stored row.

    Raises:
        InvalidProductId: for ``None``, booleans, negatives and non-integers.
    """
    if isinstance(value, bool):
        raise InvalidProductId(value)
    if isinstance(value, int):
        if value < 0:
            raise InvalidProductId(value)
        return value
    if isinstance(value, str) and _DIGITS.match(value.strip()):
        return int(value.strip())
    raise InvalidProductId(value)


class ProductService:
    """Domain service for the Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, newest first."""
        return self._repo.list_all()

    def get_product(self, id: Any) -> Product:
        """Retrieve a single product by ID.

        Raises:
            InvalidProductId: if ``id`` is malformed.
            ProductNotFound: if the product does not exist.
        """
        product_id = parse_product_id(id)
        product = self._repo.get_by_id(product_id)
        logger.info("product.retrieved", product_id=product_id)
        return product

    def search_by_name(self, term: Optional[str]) -> List[Product]:
        """Case-insensitive partial match on the product name.

        Raises:
            EmptySearchTerm: if ``term`` is missing or blank.
        """
        cleaned = (term or "").strip()
        if not cleaned:
            logger.warning("product.search_rejected", reason="empty_term")
            raise EmptySearchTerm("A name is required to search products.")
        return self._repo.find_by_name(cleaned)

    def search_by_price_range(
        self, min_price: Optional[Decimal], max_price: Optional[Decimal]
    ) -> List[Product]:
        """Products priced within ``[min_price, max_price]``.

        Raises:
            MissingPriceBound: if either bound is missing.
            NegativePriceBound: if either bound is negative.
            InvertedPriceRange: if ``min_price > max_price``.
        """
        log = logger.bind(min_price=str(min_price), max_price=str(max_price))
        if min_price is None or max_price is None:
            log.warning("product.search_rejected", reason="missing_bound")
            raise MissingPriceBound("Minimum and maximum prices are required.")
        if min_price < 0 or max_price < 0:
            log.warning("product.search_rejected", reason="negative_price")
            raise NegativePriceBound("Prices cannot be negative.")
        if min_price > max_price:
            log.warning("product.search_rejected", reason="inverted_range")
            raise InvertedPriceRange(
                "Minimum price cannot be greater than the maximum price."
            )
        return self._repo.find_by_price_range(min_price, max_price)

    def get_statistics(self) -> ProductStatisticsDTO:
        """Aggregate figures over the whole catalog."""
        products = self._repo.list_all()
        total = self._repo.count()

        total_value = sum(
            (Decimal(p.price) * p.quantity for p in products), Decimal("0")
        )
        total_quantity = sum(p.quantity for p in products)
        price_sum = sum((Decimal(p.price) for p in products), Decimal("0"))
        average_price = Decimal("0")
        if total:
            average_price = (price_sum / total).quantize(
                PRICE_QUANTUM, rounding=ROUND_HALF_UP
            )
        low_stock = sum(1 for p in products if p.quantity < LOW_STOCK_THRESHOLD)

        stats = ProductStatisticsDTO(
            total=total,
            total_value=total_value,
            total_quantity=total_quantity,
            average_price=average_price,
            low_stock_count=low_stock,
        )
        logger.info("product.statistics_computed", total=total, low_stock=low_stock)
        return stats

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product after validating it.

        Raises:
            ProductValidationError: if any product rule is broken.
        """
        product = Product.build(
            name=dto.name,
            price=dto.price,
            description=dto.description,
            quantity=dto.quantity,
        )
        self._ensure_valid(product, action="create")

        with self._atomic():
            product = self._repo.create(product)
        logger.info("product.created", product_id=product.id, name=product.name)
        return product

    def update_product(self, id: Any, dto: UpdateProductDTO) -> Product:
        """Apply a partial update to an existing product.

        Raises:
            InvalidProductId: if ``id`` is malformed.
            ProductNotFound: if the product does not exist.
            ProductValidationError: if the merged product is invalid.
        """
        product_id = parse_product_id(id)
        with self._atomic():
            product = self._repo.get_by_id(product_id)

            dto.apply_to(product)
            self._ensure_valid(product, action="update")

            product = self._repo.update(product_id, product)
        logger.info("product.updated", product_id=product_id)
        return product

    def delete_product(self, id: Any) -> bool:
        """Delete an existing product.

        Raises:
            InvalidProductId: if ``id`` is malformed.
            ProductNotFound: if the product does not exist.
        """
        product_id = parse_product_id(id)
        with self._atomic():
            self._repo.get_by_id(product_id)
            deleted = self._repo.delete(product_id)
        logger.info("product.deleted", product_id=product_id)
        return deleted

    def adjust_stock(self, id: Any, delta: int) -> Product:
        """Add ``delta`` units (negative to remove) to a product's stock.

        Raises:
            InvalidProductId, ProductNotFound, InsufficientStock,
            ProductValidationError (the new quantity does not fit the column).
        """
        product_id = parse_product_id(id)
        with self._atomic():
            product = self._repo.get_by_id(product_id)
            try:
                product.adjust_stock(delta)
            except InsufficientStock:
                logger.warning(
                    "product.stock_rejected", product_id=product_id, delta=delta
                )
                raise
            self._ensure_valid(product, action="adjust_stock")
            return self._repo.update(product_id, product)

    def apply_discount(self, id: Any, percent: Decimal) -> Product:
        """Reduce a product's price by ``percent`` percent.

        Raises:
            InvalidProductId, ProductNotFound, InvalidDiscount,
            ProductValidationError (a 100% discount leaves a zero price).
        """
        product_id = parse_product_id(id)
        with self._atomic():
            product = self._repo.get_by_id(product_id)
            try:
                product.apply_discount(percent)
            except InvalidDiscount:
                logger.warning(
                    "product.discount_rejected",
                    product_id=product_id,
                    percent=str(percent),
                )
                raise
            self._ensure_valid(product, action="apply_discount")
            return self._repo.update(product_id, product)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _atomic(self) -> transaction.Atomic:
        # same alias as the repository, so reads and writes share one transaction
        return transaction.atomic(using=self._repo.using)

    @staticmethod
    def _ensure_valid(product: Product, action: str) -> None:
        errors = product.validate()
        if errors:
            logger.warning("product.invalid", action=action, errors=errors)
            raise ProductValidationError(errors)
