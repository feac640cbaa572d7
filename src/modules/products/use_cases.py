"""Application use cases for the Product catalog.

One class per operation, each exposing a single ``execute`` method that
delegates to ``ProductService``.  Views depend on these classes only.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        ProductStatisticsDTO,
        UpdateProductDTO,
    )
    from modules.products.models import Product
    from modules.products.services import ProductService


class _ProductUseCase:
    def __init__(self, service: ProductService) -> None:
        self._service = service


class CreateProductUseCase(_ProductUseCase):
    def execute(self, dto: CreateProductDTO) -> Product:
        return self._service.create_product(dto)


class ListProductsUseCase(_ProductUseCase):
    def execute(self) -> List[Product]:
        return self._service.list_products()


class GetProductUseCase(_ProductUseCase):
    def execute(self, id: Any) -> Product:
        return self._service.get_product(id)


class SearchProductsByNameUseCase(_ProductUseCase):
    def execute(self, term: Optional[str]) -> List[Product]:
        return self._service.search_by_name(term)


class SearchProductsByPriceUseCase(_ProductUseCase):
    def execute(
        self, min_price: Optional[Decimal], max_price: Optional[Decimal]
    ) -> List[Product]:
        return self._service.search_by_price_range(min_price, max_price)


class UpdateProductUseCase(_ProductUseCase):
    def execute(self, id: Any, dto: UpdateProductDTO) -> Product:
        return self._service.update_product(id, dto)


class DeleteProductUseCase(_ProductUseCase):
    def execute(self, id: Any) -> bool:
        return self._service.delete_product(id)


class AdjustStockUseCase(_ProductUseCase):
    def execute(self, id: Any, delta: int) -> Product:
        return self._service.adjust_stock(id, delta)


class ApplyDiscountUseCase(_ProductUseCase):
    def execute(self, id: Any, percent: Decimal) -> Product:
        return self._service.apply_discount(id, percent)


class GetStatisticsUseCase(_ProductUseCase):
    def execute(self) -> ProductStatisticsDTO:
        return self._service.get_statistics()


@dataclass(frozen=True)
class ProductUseCases:
    """Every catalog use case, wired to a single service instance."""

    create: CreateProductUseCase
    list_all: ListProductsUseCase
    get: GetProductUseCase
    search_by_name: SearchProductsByNameUseCase
    search_by_price: SearchProductsByPriceUseCase
    update: UpdateProductUseCase
    delete: DeleteProductUseCase
    adjust_stock: AdjustStockUseCase
    apply_discount: ApplyDiscountUseCase
    statistics: GetStatisticsUseCase

    @classmethod
    def from_service(cls, service: ProductService) -> ProductUseCases:
        return cls(
            create=CreateProductUseCase(service),
            list_all=ListProductsUseCase(service),
            get=GetProductUseCase(service),
            search_by_name=SearchProductsByNameUseCase(service),
            search_by_price=SearchProductsByPriceUseCase(service),
            update=UpdateProductUseCase(service),
            delete=DeleteProductUseCase(service),
            adjust_stock=AdjustStockUseCase(service),
            apply_discount=ApplyDiscountUseCase(service),
            statistics=GetStatisticsUseCase(service),
        )
