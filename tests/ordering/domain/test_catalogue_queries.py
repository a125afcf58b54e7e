"""Tests for the catalogue filter, search and sort helpers."""

from ordering.catalogue.catalog import filter_by_category, search_products, sort_products
from ordering.catalogue.product import Product


def _products():
    return [
        Product.from_record({"id": "ghee", "name_english": "Buffalo Ghee", "name_hindi": "घी", "price": 800, "unit": "1 kg", "category": "ghee"}),
        Product.from_record({"id": "milk", "name_english": "Cow Milk", "name_hindi": "दूध", "price": 60, "unit": "1 litre", "category": "milk"}),
        Product.from_record({"id": "dahi", "name_english": "Dahi", "price": 40, "unit": "500 g"}),
    ]


def _ids(products):
    return [p.product_id for p in products]


class TestFilterByCategory:
    def test_filters(self):
        assert _ids(filter_by_category(_products(), "milk")) == ["milk"]

    def test_all_and_empty_return_everything(self):
        assert len(filter_by_category(_products(), "all")) == 3
        assert len(filter_by_category(_products(), None)) == 3

    def test_unknown_category_is_empty(self):
        assert filter_by_category(_products(), "cheese") == []


class TestSearchProducts:
    def test_case_insensitive_english(self):
        assert _ids(search_products(_products(), "GHEE")) == ["ghee"]

    def test_matches_hindi_name(self):
        assert _ids(search_products(_products(), "दूध")) == ["milk"]

    def test_matches_category(self):
        assert _ids(search_products(_products(), "regular")) == ["dahi"]

    def test_blank_query_returns_everything(self):
        assert len(search_products(_products(), "   ")) == 3


class TestSortProducts:
    def test_price_ascending(self):
        assert _ids(sort_products(_products(), "price-asc")) == ["dahi", "milk", "ghee"]

    def test_price_descending(self):
        assert _ids(sort_products(_products(), "price-desc")) == ["ghee", "milk", "dahi"]

    def test_name(self):
        assert _ids(sort_products(_products(), "name")) == ["ghee", "milk", "dahi"]

    def test_unknown_keeps_order(self):
        assert _ids(sort_products(_products(), "popularity")) == ["ghee", "milk", "dahi"]
