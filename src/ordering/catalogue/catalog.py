"""Product catalogue queries with a per-session cache.

A ``ProductCatalog`` loads the whole catalogue once and answers every lookup
from that snapshot until ``refresh()`` is called. The API creates one per
request, so a page session never sees the catalogue change under it.
"""

from collections import Counter

import structlog
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product

logger = structlog.get_logger(__name__)

SORT_OPTIONS = ("price-asc", "price-desc", "name")


class ProductCatalog:
    def __init__(self, repository=None):
        self._repository = repository
        self._products: dict[str, Product] | None = None

    def _load(self) -> dict[str, Product]:
        if self._products is None:
            repository = self._repository or current_domain.repository_for(Product)
            self._products = {str(p.product_id): p for p in repository.all_products()}
            logger.debug("Catalogue loaded", product_count=len(self._products))
        return self._products

    def refresh(self) -> None:
        self._products = None

    def get(self, product_id: str) -> Product | None:
        """Look up a product regardless of stock; ``None`` when it does not exist."""
        return self._load().get(str(product_id))

    def all(self) -> list[Product]:
        return list(self._load().values())

    def in_stock(self) -> list[Product]:
        """In-stock products ordered by category, then English name."""
        products = [p for p in self._load().values() if p.in_stock]
        return sorted(products, key=lambda p: (p.category or "", p.name_english.lower()))

    def featured(self) -> list[Product]:
        return [p for p in self.in_stock() if p.featured]

    def categories(self) -> list[dict]:
        """Distinct categories of in-stock products with their product counts."""
        counts = Counter(p.category for p in self.in_stock())
        return [{"id": category, "count": count} for category, count in sorted(counts.items())]


def filter_by_category(products: list[Product], category: str | None) -> list[Product]:
    if not category or category == "all":
        return list(products)
    return [p for p in products if p.category == category]


def search_products(products: list[Product], query: str | None) -> list[Product]:
    """Case-insensitive match against every product name and the category."""
    if not query or not query.strip():
        return list(products)

    needle = query.strip().lower()

    def matches(product: Product) -> bool:
        haystack = (
            product.name_english,
            product.name_hindi,
            product.name_marathi,
            product.category,
        )
        return any(needle in value.lower() for value in haystack if value)

    return [p for p in products if matches(p)]


def sort_products(products: list[Product], sort_by: str | None) -> list[Product]:
    if sort_by == "price-asc":
        return sorted(products, key=lambda p: p.price)
    if sort_by == "price-desc":
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort_by == "name":
        return sorted(products, key=lambda p: p.name_english.lower())
    return list(products)
