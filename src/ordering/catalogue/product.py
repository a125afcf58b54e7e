"""Product aggregate: the sellable catalogue entry.

Products are read-only to the storefront. They are created and updated by
the catalogue sync (``SyncCatalogue``) from the shop's product file; the cart
and checkout only read them.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, String

from ordering.domain import ordering

DEFAULT_CATEGORY = "regular"


@ordering.aggregate
class Product:
    product_id = String(identifier=True, max_length=100)
    name_english = String(required=True, max_length=200)
    name_hindi = String(max_length=200)
    name_marathi = String(max_length=200)
    price = Float(required=True, min_value=0.0)
    unit = String(required=True, max_length=50)
    category = String(max_length=50, default=DEFAULT_CATEGORY)
    in_stock = Boolean(default=True)
    featured = Boolean(default=False)
    image = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def from_record(cls, record: dict) -> "Product":
        """Build a product from a catalogue file record, applying the sync defaults."""
        now = datetime.now(UTC)
        return cls(
            product_id=record["id"],
            created_at=now,
            updated_at=now,
            **cls._attributes_from(record),
        )

    def refresh_from(self, record: dict) -> None:
        """Overwrite catalogue attributes with a newer record of the same product."""
        for name, value in self._attributes_from(record).items():
            setattr(self, name, value)
        self.updated_at = datetime.now(UTC)

    @staticmethod
    def _attributes_from(record: dict) -> dict:
        product_id = record["id"]
        return {
            "name_english": record.get("name_english"),
            "name_hindi": record.get("name_hindi"),
            "name_marathi": record.get("name_marathi"),
            "price": record.get("price"),
            "unit": record.get("unit"),
            "category": record.get("category") or DEFAULT_CATEGORY,
            "in_stock": record.get("in_stock") is not False,
            "featured": bool(record.get("featured", False)),
            "image": record.get("image") or f"/images/products/{product_id}.jpg",
        }

    def to_payload(self) -> dict:
        """Public API representation."""
        return {
            "id": self.product_id,
            "name_english": self.name_english,
            "name_hindi": self.name_hindi,
            "name_marathi": self.name_marathi,
            "price": self.price,
            "unit": self.unit,
            "category": self.category,
            "in_stock": self.in_stock,
            "featured": self.featured,
            "image": self.image,
        }
