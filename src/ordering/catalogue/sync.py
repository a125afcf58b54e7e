"""Catalogue sync: command and handler.

Upserts products from the shop's product file into the store. Records are
processed independently: a malformed record is counted as an error and the
rest of the file still syncs.
"""

import json
from pathlib import Path

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Text
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.domain import ordering

logger = structlog.get_logger(__name__)

# The product file is shared with the browser frontend, which uses camelCase.
_FIELD_ALIASES = {
    "nameEnglish": "name_english",
    "nameHindi": "name_hindi",
    "nameMarathi": "name_marathi",
    "inStock": "in_stock",
}


def normalize_record(record: dict) -> dict:
    return {_FIELD_ALIASES.get(key, key): value for key, value in record.items()}


def load_catalogue_file(path: str | Path) -> list[dict]:
    """Read a product file (a JSON list of product records)."""
    with open(path, encoding="utf-8") as handle_:
        records = json.load(handle_)
    if not isinstance(records, list):
        raise ValueError(f"Product file must contain a JSON list, got {type(records).__name__}")
    return [normalize_record(record) for record in records]


@ordering.command(part_of="Product")
class SyncCatalogue:
    """Upsert every product record in ``products`` (JSON list)."""

    products = Text(required=True)


@ordering.command_handler(part_of=Product)
class SyncCatalogueHandler:
    @handle(SyncCatalogue)
    def sync_catalogue(self, command):
        records = json.loads(command.products) if isinstance(command.products, str) else command.products
        repo = current_domain.repository_for(Product)
        stats = {"added": 0, "updated": 0, "errors": 0, "total": len(records)}

        for raw in records:
            record = normalize_record(raw)
            product_id = record.get("id")
            try:
                if not product_id:
                    raise ValidationError({"id": ["Product id is required"]})
                try:
                    product = repo.get(product_id)
                except ObjectNotFoundError:
                    repo.add(Product.from_record(record))
                    stats["added"] += 1
                    logger.info("Product added", product_id=product_id)
                else:
                    product.refresh_from(record)
                    repo.add(product)
                    stats["updated"] += 1
                    logger.info("Product updated", product_id=product_id)
            except ValidationError as exc:
                stats["errors"] += 1
                logger.error("Product sync failed", product_id=product_id, errors=exc.messages)

        logger.info("Catalogue sync complete", **stats)
        return stats
