"""Storefront exceptions.

Raised by the cart engine, the checkout orchestrator and the API
dependencies when a request cannot proceed. Input-shape problems use
Protean's ``ValidationError`` instead; the API layer translates both
families into HTTP responses.
"""


class StorefrontError(Exception):
    """Base class; ``message`` is safe to show to the customer."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.default_message
        self.errors = list(errors) if errors else [self.message]
        super().__init__(self.message)


class NotFoundError(StorefrontError):
    """A product or cart item the request refers to does not exist."""

    default_message = "Product not found"


class OutOfStockError(StorefrontError):
    """One or more products are no longer in stock."""

    default_message = "Product is out of stock"

    def __init__(self, product_names: list[str] | None = None, message: str | None = None):
        self.product_names = list(product_names or [])
        errors = [f"{name} is out of stock" for name in self.product_names]
        if message is None and len(errors) == 1:
            message = errors[0]
        elif message is None and errors:
            message = "Some items in your cart are out of stock"
        super().__init__(message, errors or None)


class EmptyCartError(StorefrontError):
    default_message = "Your cart is empty"


class BelowMinimumError(StorefrontError):
    """Cart subtotal is under the minimum order amount."""

    def __init__(self, minimum: float, subtotal: float):
        self.minimum = minimum
        self.subtotal = subtotal
        super().__init__(f"Minimum order amount is ₹{minimum:,.0f}")


class RateLimitedError(StorefrontError):
    default_message = "Too many requests. Please try again later."


class UnauthenticatedError(StorefrontError):
    """The caller has no valid session; the frontend should send them to login."""

    default_message = "Please sign in to continue"


class PersistenceError(StorefrontError):
    """The order store rejected or failed a write. The cause is chained and logged."""

    default_message = "Failed to process order. Please try again."
