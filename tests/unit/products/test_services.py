"""Unit tests for ProductService.

Covers:
- parse_product_id: accepted / rejected identifiers (0 is valid).
- create / update / delete with a mocked repository.
- search guards (empty term, missing / negative / inverted bounds).
- stock and discount operations.
- statistics.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from modules.core.exceptions import RepositoryError
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import (
    EmptySearchTerm,
    InsufficientStock,
    InvalidDiscount,
    InvalidProductId,
    InvertedPriceRange,
    MissingPriceBound,
    NegativePriceBound,
    ProductNotFound,
    ProductValidationError,
)
from modules.products.models import Product
from modules.products.services import ProductService, parse_product_id

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.using = "default"
    repo.create.side_effect = lambda p: _with_id(p, 1)
    repo.update.side_effect = lambda id, p: p
    return repo


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


def _with_id(product: Product, id: int) -> Product:
    product.id = id
    return product


def _make_product(**overrides) -> Product:
    defaults = {
        "id": 1,
        "nome": "Notebook Dell Inspiron",
        "preco": Decimal("2999.99"),
        "descricao": "",
        "quantidade": 10,
    }
    defaults.update(overrides)
    return Product.from_record(defaults)


# ===========================================================================
# parse_product_id
# ===========================================================================


class TestParseProductId:
    @pytest.mark.parametrize(
        "value, expected", [(0, 0), (1, 1), ("42", 42), (" 7 ", 7), ("0", 0)]
    )
    def test_valid(self, value, expected):
        assert parse_product_id(value) == expected

    @pytest.mark.parametrize(
        "value", [None, -1, "-1", "abc", "1.5", 1.5, "", True, "٣", "１２"]
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidProductId):
            parse_product_id(value)


# ===========================================================================
# Queries
# ===========================================================================


class TestGetProduct:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(id=5)
        assert service.get_product("5").id == 5
        mock_repo.get_by_id.assert_called_once_with(5)

    def test_invalid_id_never_reaches_repository(self, service, mock_repo):
        with pytest.raises(InvalidProductId):
            service.get_product("abc")
        mock_repo.get_by_id.assert_not_called()

    def test_not_found_propagates(self, service, mock_repo):
        mock_repo.get_by_id.side_effect = ProductNotFound(0)
        with pytest.raises(ProductNotFound):
            service.get_product(0)

    def test_repository_error_propagates_unchanged(self, service, mock_repo):
        error = RepositoryError("boom", unavailable=True)
        mock_repo.get_by_id.side_effect = error
        with pytest.raises(RepositoryError) as exc_info:
            service.get_product(1)
        assert exc_info.value is error


class TestSearchByName:
    def test_term_is_trimmed(self, service, mock_repo):
        mock_repo.find_by_name.return_value = []
        service.search_by_name("  mouse ")
        mock_repo.find_by_name.assert_called_once_with("mouse")

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_empty_term(self, service, mock_repo, term):
        with pytest.raises(EmptySearchTerm):
            service.search_by_name(term)
        mock_repo.find_by_name.assert_not_called()


class TestSearchByPriceRange:
    def test_valid_range(self, service, mock_repo):
        mock_repo.find_by_price_range.return_value = []
        service.search_by_price_range(Decimal("10"), Decimal("100"))
        mock_repo.find_by_price_range.assert_called_once_with(
            Decimal("10"), Decimal("100")
        )

    def test_equal_bounds_are_valid(self, service, mock_repo):
        mock_repo.find_by_price_range.return_value = []
        assert service.search_by_price_range(Decimal("100"), Decimal("100")) == []

    @pytest.mark.parametrize("bounds", [(None, Decimal("10")), (Decimal("1"), None)])
    def test_missing_bound(self, service, bounds):
        with pytest.raises(MissingPriceBound):
            service.search_by_price_range(*bounds)

    def test_negative_bound(self, service):
        with pytest.raises(NegativePriceBound):
            service.search_by_price_range(Decimal("-1"), Decimal("10"))

    def test_inverted_range(self, service, mock_repo):
        with pytest.raises(InvertedPriceRange):
            service.search_by_price_range(Decimal("10"), Decimal("5"))
        mock_repo.find_by_price_range.assert_not_called()


# ===========================================================================
# Commands
# ===========================================================================


class TestCreateProduct:
    def test_success(self, service, mock_repo):
        dto = CreateProductDTO(name="X", price=Decimal("10"), quantity=2)
        product = service.create_product(dto)
        assert product.id == 1
        assert product.name == "X"
        mock_repo.create.assert_called_once()

    def test_invalid_product_is_not_stored(self, service, mock_repo):
        dto = CreateProductDTO(name=" ", price=Decimal("0"), quantity=-1)
        with pytest.raises(ProductValidationError) as exc_info:
            service.create_product(dto)
        assert len(exc_info.value.errors) == 3
        mock_repo.create.assert_not_called()


class TestUpdateProduct:
    def test_explicit_zero_quantity_is_applied(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(quantidade=10)
        product = service.update_product(1, UpdateProductDTO(quantity=0))
        assert product.quantity == 0
        stored = mock_repo.update.call_args.args[1]
        assert stored.quantity == 0

    def test_absent_fields_keep_stored_values(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()
        product = service.update_product(1, UpdateProductDTO(name="Novo nome"))
        assert product.name == "Novo nome"
        assert product.price == Decimal("2999.99")
        assert product.quantity == 10

    def test_invalid_merge_is_rejected(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()
        with pytest.raises(ProductValidationError):
            service.update_product(1, UpdateProductDTO(price=Decimal("-5")))
        mock_repo.update.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.side_effect = ProductNotFound(99)
        with pytest.raises(ProductNotFound):
            service.update_product(99, UpdateProductDTO(name="X"))


class TestDeleteProduct:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()
        mock_repo.delete.return_value = True
        assert service.delete_product("1") is True
        mock_repo.delete.assert_called_once_with(1)

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.side_effect = ProductNotFound(3)
        with pytest.raises(ProductNotFound):
            service.delete_product(3)
        mock_repo.delete.assert_not_called()


class TestAdjustStock:
    def test_delta_is_added_and_persisted(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(quantidade=10)
        product = service.adjust_stock(1, -4)
        assert product.quantity == 6
        mock_repo.update.assert_called_once()

    def test_insufficient_stock(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(quantidade=2)
        with pytest.raises(InsufficientStock):
            service.adjust_stock(1, -3)
        mock_repo.update.assert_not_called()

    def test_quantity_beyond_column_range_is_rejected(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(quantidade=10)
        with pytest.raises(ProductValidationError) as exc_info:
            service.adjust_stock(1, 10**19)
        assert exc_info.value.errors == ["Quantity must be at most 2147483647"]
        mock_repo.update.assert_not_called()


class TestApplyDiscount:
    def test_discount_is_persisted(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product(preco=Decimal("100.00"))
        product = service.apply_discount(1, Decimal("25"))
        assert product.price == Decimal("75.00")

    def test_invalid_discount(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _make_product()
        with pytest.raises(InvalidDiscount):
            service.apply_discount(1, Decimal("101"))
        mock_repo.update.assert_not_called()


# ===========================================================================
# Statistics
# ===========================================================================


class TestStatistics:
    def test_aggregates(self, service, mock_repo):
        mock_repo.list_all.return_value = [
            _make_product(id=1, preco=Decimal("2500"), quantidade=10),
            _make_product(id=2, preco=Decimal("50"), quantidade=20),
            _make_product(id=3, preco=Decimal("150"), quantidade=5),
        ]
        mock_repo.count.return_value = 3

        stats = service.get_statistics()

        assert stats.total == 3
        assert stats.total_value == Decimal("26750")
        assert stats.total_quantity == 35
        assert stats.average_price == Decimal("900")
        assert stats.low_stock_count == 1

    def test_empty_catalog(self, service, mock_repo):
        mock_repo.list_all.return_value = []
        mock_repo.count.return_value = 0

        stats = service.get_statistics()

        assert stats.total == 0
        assert stats.total_value == 0
        assert stats.total_quantity == 0
        assert stats.average_price == 0
        assert stats.low_stock_count == 0


# ===========================================================================
# Transactions
# ===========================================================================


class TestTransactionAlias:
    def test_commands_run_on_the_repository_alias(self, mock_repo):
        mock_repo.using = "catalog"
        mock_repo.get_by_id.return_value = _make_product(quantidade=10)
        service = ProductService(repository=mock_repo)

        with patch("modules.products.services.transaction.atomic") as atomic:
            service.adjust_stock(1, 2)
            service.update_product(1, UpdateProductDTO(name="Outro"))
            service.create_product(
                CreateProductDTO(name="X", price=Decimal("10"), quantity=2)
            )

        assert atomic.call_count == 3
        for call in atomic.call_args_list:
            assert call.kwargs == {"using": "catalog"}
