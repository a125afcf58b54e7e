"""Checkout orchestrator: turns a validated cart into a stored order.

Flow for one attempt (``CheckoutAttempt`` tracks the state):
    1. IDLE → FORM_VALIDATED: requester present, form fields valid and escaped
    2. → CART_VALIDATED: cart re-checked against the current catalogue
    3. → ORDER_PERSISTED: order id drawn, lines snapshotted, one store write
    4. → NOTIFICATIONS_DISPATCHED: owner alert and customer confirmation
    5. → COMPLETE: cart cleared, order id returned
    FAILED is reachable from any step before COMPLETE.

Nothing outside the attempt changes before step 3. Once the order is stored
the attempt can no longer fail: notification problems are logged and the
cart is cleared regardless.

``submit`` is the second entry point, for clients that send a complete order
payload instead of a server-side cart.
"""

import random
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from numbers import Number

import structlog
from protean.exceptions import ValidationError

from notifications.fanout import NotificationFanout
from ordering.auth.port import Requester
from ordering.cart.engine import CartEngine, CartTotals
from ordering.checkout.form import CheckoutForm, clean_checkout_form, sanitize_input
from ordering.config import StoreSettings, get_settings
from ordering.exceptions import PersistenceError, StorefrontError, UnauthenticatedError
from ordering.order.ids import generate_order_id
from ordering.order.order import Order
from ordering.order.store import OrderStore, RepositoryOrderStore
from ordering.order.validation import validate_order_payload

logger = structlog.get_logger(__name__)


class CheckoutState(Enum):
    IDLE = "idle"
    FORM_VALIDATED = "form_validated"
    CART_VALIDATED = "cart_validated"
    ORDER_PERSISTED = "order_persisted"
    NOTIFICATIONS_DISPATCHED = "notifications_dispatched"
    COMPLETE = "complete"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    CheckoutState.IDLE: {CheckoutState.FORM_VALIDATED, CheckoutState.FAILED},
    CheckoutState.FORM_VALIDATED: {CheckoutState.CART_VALIDATED, CheckoutState.FAILED},
    CheckoutState.CART_VALIDATED: {CheckoutState.ORDER_PERSISTED, CheckoutState.FAILED},
    CheckoutState.ORDER_PERSISTED: {CheckoutState.NOTIFICATIONS_DISPATCHED, CheckoutState.COMPLETE},
    CheckoutState.NOTIFICATIONS_DISPATCHED: {CheckoutState.COMPLETE},
    CheckoutState.COMPLETE: set(),  # Terminal
    CheckoutState.FAILED: set(),  # Terminal
}


class CheckoutAttempt:
    """State of a single checkout attempt."""

    def __init__(self):
        self.state = CheckoutState.IDLE
        self.history = [CheckoutState.IDLE]
        self.order_id: str | None = None
        self.error: Exception | None = None

    def advance(self, target: CheckoutState) -> None:
        if target not in _VALID_TRANSITIONS[self.state]:
            raise RuntimeError(f"Checkout cannot move from {self.state.value} to {target.value}")
        self.state = target
        self.history.append(target)

    def fail(self, error: Exception) -> None:
        self.error = error
        self.advance(CheckoutState.FAILED)


class CheckoutOrchestrator:
    def __init__(
        self,
        orders: OrderStore | None = None,
        fanout: NotificationFanout | None = None,
        settings: StoreSettings | None = None,
        clock: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or get_settings()
        self.orders = orders or RepositoryOrderStore()
        self.fanout = fanout or NotificationFanout(self.settings)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._rng = rng
        self.last_attempt: CheckoutAttempt | None = None

    # -------------------------------------------------------------------
    # Cart checkout
    # -------------------------------------------------------------------
    async def checkout(self, requester: Requester | None, form: CheckoutForm, cart: CartEngine) -> str:
        """Place an order for the requester's cart. Returns the new order id."""
        attempt = self.last_attempt = CheckoutAttempt()
        log = logger.bind(session_id=cart.session_id)

        try:
            if requester is None:
                raise UnauthenticatedError()

            cleaned = clean_checkout_form(form, self.settings)
            attempt.advance(CheckoutState.FORM_VALIDATED)

            totals = cart.validate_for_checkout()
            attempt.advance(CheckoutState.CART_VALIDATED)

            order = self._build_order(requester, cleaned, totals)
            self.orders.create(order)
            attempt.order_id = order.order_id
            attempt.advance(CheckoutState.ORDER_PERSISTED)
        except (StorefrontError, ValidationError) as exc:
            attempt.fail(exc)
            log.warning("Checkout rejected", state=attempt.history[-2].value, error=str(exc))
            raise
        except Exception as exc:
            attempt.fail(exc)
            log.exception("Checkout failed", state=attempt.history[-2].value)
            raise

        log = log.bind(order_id=attempt.order_id, user_id=requester.uid)
        log.info("Order placed", total=order.total, items=len(order.items))

        try:
            await self.fanout.dispatch(order)
            attempt.advance(CheckoutState.NOTIFICATIONS_DISPATCHED)
        except Exception as exc:
            log.error("Notification dispatch failed", error=str(exc))
        finally:
            try:
                cart.clear()
            except Exception as exc:
                log.error("Cart could not be cleared after checkout", error=str(exc))

        attempt.advance(CheckoutState.COMPLETE)
        return attempt.order_id

    def _build_order(self, requester: Requester, form: CheckoutForm, totals: CartTotals) -> Order:
        now = self._clock()
        return Order.place(
            order_id=self._new_order_id(now),
            user_id=requester.uid,
            customer=form.customer(),
            items=[
                {
                    "product_id": line.product_id,
                    "name_english": line.name_english,
                    "name_hindi": line.name_hindi,
                    "price": line.price,
                    "quantity": line.quantity,
                    "unit": line.unit,
                    "subtotal": line.subtotal,
                }
                for line in totals.lines
            ],
            delivery_slot=form.delivery_slot,
            special_instructions=form.special_instructions,
            payment_method=self.settings.payment_method,
            subtotal=totals.subtotal,
            delivery_charge=totals.delivery_charge,
            total=totals.total,
            created_at=now,
        )

    def _new_order_id(self, now: datetime) -> str:
        """Draw order ids until one is free in the store."""
        for attempt in range(1, self.settings.order_id_max_attempts + 1):
            candidate = generate_order_id(now, self._rng)
            if not self.orders.exists(candidate):
                return candidate
            logger.warning("Order id already taken", order_id=candidate, attempt=attempt)

        logger.error("No free order id", attempts=self.settings.order_id_max_attempts)
        raise PersistenceError()

    # -------------------------------------------------------------------
    # Complete-payload submission
    # -------------------------------------------------------------------
    async def submit(self, requester: Requester | None, payload: dict) -> str:
        """Store a complete order payload sent by the client. Returns its order id."""
        if requester is None:
            raise UnauthenticatedError()

        result = validate_order_payload(payload)
        if not result.is_valid:
            logger.warning("Order payload rejected", errors=result.errors)
            raise ValidationError({"order": result.errors})

        if str(payload["user_id"]) != requester.uid:
            raise ValidationError({"user_id": ["Orders can only be placed for the signed-in user"]})

        order_id = str(payload["order_id"]).strip()
        if self.orders.exists(order_id):
            raise ValidationError({"order_id": ["Order ID already exists"]})

        order = self._order_from_payload(order_id, requester, payload)
        self.orders.create(order)
        log = logger.bind(order_id=order_id, user_id=requester.uid)
        log.info("Order submitted", total=order.total, items=len(order.items))

        try:
            await self.fanout.dispatch(order)
        except Exception as exc:
            log.error("Notification dispatch failed", error=str(exc))

        return order_id

    def _order_from_payload(self, order_id: str, requester: Requester, payload: dict) -> Order:
        customer = payload["customer"]
        items = []
        for item in payload["items"]:
            price = item.get("price", 0)
            quantity = item.get("quantity", 0)
            if not all(isinstance(v, Number) and not isinstance(v, bool) for v in (price, quantity)):
                raise ValidationError({"items": ["Item price and quantity must be numbers"]})
            items.append(
                {
                    "product_id": str(item.get("product_id", "")),
                    "name_english": sanitize_input(item.get("name_english") or item.get("product_id")),
                    "name_hindi": sanitize_input(item.get("name_hindi")) or None,
                    "price": price,
                    "quantity": quantity,
                    "unit": sanitize_input(item.get("unit")) or None,
                    "subtotal": round(price * quantity, 2),
                }
            )

        # Line and order subtotals are derived from price and quantity; the
        # client's figures are ignored and its total must agree with them.
        subtotal = round(sum(item["subtotal"] for item in items), 2)

        return Order.place(
            order_id=order_id,
            user_id=requester.uid,
            customer={
                "name": sanitize_input(str(customer.get("name", "")).strip()),
                "phone": sanitize_input(str(customer.get("phone", "")).strip()),
                "address": sanitize_input(str(customer.get("address", "")).strip()),
                "email": sanitize_input(customer.get("email")) or None,
                "landmark": sanitize_input(customer.get("landmark")) or None,
            },
            items=items,
            delivery_slot=payload.get("delivery_slot"),
            special_instructions=sanitize_input(payload.get("special_instructions")) or None,
            payment_method=self.settings.payment_method,
            subtotal=subtotal,
            delivery_charge=payload.get("delivery_charge", self.settings.delivery_charge),
            total=payload["total"],
            created_at=self._clock(),
        )
