"""Product API views.

Exposes the catalog use cases via HTTP using a DRF ViewSet.  Request
bodies and query strings are parsed into Pydantic DTOs; shape errors,
domain exceptions and repository failures propagate to
``modules.core.exception_handler``, which maps them to status codes.
"""

from __future__ import annotations

from typing import Any

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import (
    CreateProductDTO,
    DiscountDTO,
    PriceRangeDTO,
    StockAdjustmentDTO,
    UpdateProductDTO,
)
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ProductInputSerializer,
    ProductSerializer,
    ProductStatisticsSerializer,
)
from modules.products.services import ProductService
from modules.products.use_cases import ProductUseCases


def _payload(request: Request) -> Any:
    """Request body as a plain dict (form submissions arrive as QueryDict)."""
    data = request.data
    if hasattr(data, "dict"):
        return data.dict()
    return data


class ProductViewSet(GenericViewSet):
    """ViewSet for the ``/produtos`` resource.

    Wires ``ProductUseCases`` over ``ProductService`` and
    ``ProductDjangoRepository`` (DIP).  All ORM access goes through the
    use case / service / repository layers.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        service = ProductService(repository=ProductDjangoRepository())
        self._use_cases = ProductUseCases.from_service(service)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/produtos"""
        products = self._use_cases.list_all.execute()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/produtos/{pk}"""
        product = self._use_cases.get.execute(pk)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=ProductInputSerializer, responses=ProductSerializer)
    def create(self, request: Request) -> Response:
        """POST /api/produtos"""
        dto = CreateProductDTO.model_validate(_payload(request))
        product = self._use_cases.create.execute(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductInputSerializer, responses=ProductSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/produtos/{pk} (fields are optional)"""
        dto = UpdateProductDTO.model_validate(_payload(request))
        product = self._use_cases.update.execute(pk, dto)
        return Response(ProductSerializer(product).data)

    @extend_schema(request=ProductInputSerializer, responses=ProductSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/produtos/{pk}"""
        return self.update(request, pk)

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/produtos/{pk}"""
        self._use_cases.delete.execute(pk)
        return Response({"message": "Product deleted successfully."})

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"], url_path="buscar/nome", url_name="search-name")
    def search_by_name(self, request: Request) -> Response:
        """GET /api/produtos/buscar/nome?nome=..."""
        products = self._use_cases.search_by_name.execute(
            request.query_params.get("nome")
        )
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="buscar/preco", url_name="search-price")
    def search_by_price(self, request: Request) -> Response:
        """GET /api/produtos/buscar/preco?min=...&max=..."""
        query = PriceRangeDTO.model_validate(
            {
                "min": request.query_params.get("min") or None,
                "max": request.query_params.get("max") or None,
            }
        )
        products = self._use_cases.search_by_price.execute(
            query.min_price, query.max_price
        )
        return Response(ProductSerializer(products, many=True).data)

    # ------------------------------------------------------------------
    # Stock operations
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="estoque")
    def adjust_stock(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/produtos/{pk}/estoque

        Accepts ``{"quantidade": N}``; ``N`` is added to the current stock
        (negative values remove units).
        """
        dto = StockAdjustmentDTO.model_validate(_payload(request))
        product = self._use_cases.adjust_stock.execute(pk, dto.quantity)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["patch"], url_path="desconto")
    def apply_discount(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/produtos/{pk}/desconto

        Accepts ``{"percentual": P}`` with ``0 <= P <= 100``.
        """
        dto = DiscountDTO.model_validate(_payload(request))
        product = self._use_cases.apply_discount.execute(pk, dto.percent)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    @extend_schema(responses=ProductStatisticsSerializer)
    @action(detail=False, methods=["get"], url_path="estatisticas")
    def statistics(self, request: Request) -> Response:
        """GET /api/produtos/estatisticas"""
        stats = self._use_cases.statistics.execute()
        return Response(stats.model_dump(by_alias=True))
