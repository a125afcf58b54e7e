import pytest


@pytest.fixture()
def settings():
    from ordering.config import StoreSettings

    return StoreSettings(owner_email="owner@dairy.test")


@pytest.fixture()
def order():
    """Stored order payload as produced by ``Order.to_payload``."""
    return {
        "order_id": "ORD-20261018-123",
        "user_id": "user-001",
        "customer": {
            "name": "Asha &amp; Ravi",
            "phone": "9876543210",
            "address": "12 Station Road, Kalyan West",
            "email": "asha@example.com",
            "landmark": "Near Shiv Mandir",
        },
        "items": [
            {
                "product_id": "buffalo-ghee",
                "name_english": "Buffalo Ghee",
                "price": 800.0,
                "quantity": 2,
                "unit": "1 kg",
                "subtotal": 1600.0,
            }
        ],
        "delivery_slot": "Morning (7 AM - 10 AM)",
        "special_instructions": None,
        "payment_method": "Cash on Delivery",
        "subtotal": 1600.0,
        "delivery_charge": 0.0,
        "total": 1600.0,
        "status": "pending",
        "created_at": "2026-10-18T09:30:00+00:00",
    }
