"""Tests for sending the owner alert and customer confirmation for an order."""

import asyncio

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.fanout import NotificationFanout
from notifications.types import DeliveryOutcome


@pytest.fixture()
def adapter():
    return FakeEmailAdapter()


@pytest.fixture()
def fanout(settings, adapter):
    return NotificationFanout(settings, channel=adapter)


def _dispatch(fanout, order):
    return asyncio.run(fanout.dispatch(order))


class TestDispatch:
    def test_owner_and_customer(self, fanout, adapter, order):
        result = _dispatch(fanout, order)

        assert result.owner == DeliveryOutcome.SENT
        assert result.customer == DeliveryOutcome.SENT
        assert result.sends_attempted == 2
        by_recipient = {m["to"]: m["subject"] for m in adapter.sent_emails}
        assert by_recipient == {
            "owner@dairy.test": "🛒 NEW ORDER - ORD-20261018-123",
            "asha@example.com": "Order Confirmed - ORD-20261018-123",
        }

    def test_confirmation_carries_shop_details(self, fanout, adapter, order, settings):
        _dispatch(fanout, order)
        confirmation = next(m for m in adapter.sent_emails if m["to"] == "asha@example.com")
        assert settings.shop_name in confirmation["body"]
        assert settings.shop_phone in confirmation["body"]

    def test_no_customer_email(self, fanout, adapter, order):
        order["customer"]["email"] = None

        result = _dispatch(fanout, order)

        assert result.customer == DeliveryOutcome.SKIPPED
        assert result.sends_attempted == 1
        assert adapter.attempts == ["owner@dairy.test"]

    def test_escaped_email_is_restored(self, fanout, adapter, order):
        order["customer"]["email"] = "o&#x27;neil@example.com"
        _dispatch(fanout, order)
        assert "o'neil@example.com" in adapter.attempts


class TestPartialFailure:
    def test_owner_failure_does_not_block_customer(self, fanout, adapter, order):
        adapter.configure(failing_recipients={"owner@dairy.test"})

        result = _dispatch(fanout, order)

        assert result.owner == DeliveryOutcome.FAILED
        assert result.customer == DeliveryOutcome.SENT
        assert [m["to"] for m in adapter.sent_emails] == ["asha@example.com"]

    def test_raising_channel_is_reported_not_raised(self, fanout, adapter, order):
        adapter.configure(should_succeed=False, raise_on_send=True)

        result = _dispatch(fanout, order)

        assert result.owner == DeliveryOutcome.FAILED
        assert result.customer == DeliveryOutcome.FAILED
        assert sorted(adapter.attempts) == ["asha@example.com", "owner@dairy.test"]
