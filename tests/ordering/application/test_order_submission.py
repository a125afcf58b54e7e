"""Application tests for submitting a complete order payload."""

import asyncio

import pytest
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.exceptions import UnauthenticatedError
from ordering.order.store import RepositoryOrderStore
from protean.exceptions import ValidationError


def _payload(**overrides):
    payload = {
        "order_id": "ORD-20261018-042",
        "user_id": "user-001",
        "customer": {
            "name": "Asha Patil",
            "phone": "9876543210",
            "address": "12 Station Road, Kalyan West",
            "email": "asha@example.com",
        },
        "items": [
            {
                "product_id": "cow-milk",
                "name_english": "Cow Milk",
                "price": 60,
                "quantity": 2,
                "unit": "1 litre",
                "subtotal": 120,
            }
        ],
        "delivery_slot": "Morning (7 AM - 10 AM)",
        "total": 120,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def store():
    return RepositoryOrderStore()


@pytest.fixture()
def orchestrator(settings, store):
    return CheckoutOrchestrator(orders=store, settings=settings)


def _submit(orchestrator, requester, payload):
    return asyncio.run(orchestrator.submit(requester, payload))


class TestSubmitOrder:
    def test_stores_order_and_notifies(self, orchestrator, store, requester, settings, email):
        order_id = _submit(orchestrator, requester, _payload())

        assert order_id == "ORD-20261018-042"
        order = store.get(order_id)
        assert order.total == 120
        assert order.subtotal == 120
        assert order.status == "pending"
        assert sorted(email.attempts) == sorted([settings.owner_email, "asha@example.com"])

    def test_text_fields_are_escaped(self, orchestrator, store, requester, email):
        payload = _payload(special_instructions="Ring <twice>")
        _submit(orchestrator, requester, payload)
        assert store.get("ORD-20261018-042").special_instructions == "Ring &lt;twice&gt;"

    def test_subtotals_are_recomputed_from_price_and_quantity(self, orchestrator, store, requester, email):
        payload = _payload(subtotal=1)
        payload["items"][0]["subtotal"] = 1

        _submit(orchestrator, requester, payload)

        order = store.get("ORD-20261018-042")
        assert [line.subtotal for line in order.items] == [120]
        assert order.subtotal == 120
        assert order.total == order.subtotal + order.delivery_charge

    def test_notification_failure_is_not_raised(self, orchestrator, store, requester, email):
        email.configure(should_succeed=False, raise_on_send=True)
        assert _submit(orchestrator, requester, _payload()) == "ORD-20261018-042"
        assert store.exists("ORD-20261018-042")


class TestRejectedSubmission:
    def test_requires_requester(self, orchestrator, store, email):
        with pytest.raises(UnauthenticatedError):
            _submit(orchestrator, None, _payload())
        assert not store.exists("ORD-20261018-042")

    def test_empty_items(self, orchestrator, store, requester, email):
        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, _payload(items=[]))

        assert exc.value.messages["order"] == ["Order must contain at least one item"]
        assert not store.exists("ORD-20261018-042")
        assert email.attempts == []

    def test_collects_every_error(self, orchestrator, requester, email):
        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, {"customer": {"name": "Asha"}, "total": 0})

        assert exc.value.messages["order"] == [
            "Order ID is required",
            "User ID is required",
            "Order must contain at least one item",
            "Customer phone is required",
            "Customer address is required",
            "Invalid order total",
        ]

    def test_total_that_does_not_add_up(self, orchestrator, store, requester, email):
        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, _payload(subtotal=120, delivery_charge=0, total=5))

        assert exc.value.messages["total"] == ["Order total must equal subtotal plus delivery charge"]
        assert not store.exists("ORD-20261018-042")
        assert email.attempts == []

    def test_non_numeric_price(self, orchestrator, store, requester, email):
        payload = _payload()
        payload["items"][0]["price"] = "60"

        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, payload)

        assert "items" in exc.value.messages
        assert not store.exists("ORD-20261018-042")

    def test_other_users_order(self, orchestrator, store, requester, email):
        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, _payload(user_id="user-999"))
        assert "user_id" in exc.value.messages
        assert not store.exists("ORD-20261018-042")

    def test_duplicate_order_id(self, orchestrator, store, requester, email):
        _submit(orchestrator, requester, _payload())
        email.reset()

        with pytest.raises(ValidationError) as exc:
            _submit(orchestrator, requester, _payload(total=999))

        assert exc.value.messages["order_id"] == ["Order ID already exists"]
        assert store.get("ORD-20261018-042").total == 120
        assert email.attempts == []
