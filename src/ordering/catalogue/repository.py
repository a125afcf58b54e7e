"""Repository for the Product aggregate."""

from ordering.catalogue.product import Product
from ordering.domain import ordering

# Upper bound for a single catalogue read; the shop lists a few dozen products.
CATALOGUE_QUERY_LIMIT = 1000


@ordering.repository(part_of=Product)
class ProductRepository:
    def all_products(self) -> list[Product]:
        return self._dao.query.limit(CATALOGUE_QUERY_LIMIT).all().items
