"""FastAPI dependencies shared by the storefront routers."""

from fastapi import Depends, Request

from ordering.auth import Requester, get_identity_provider
from ordering.catalogue.catalog import ProductCatalog
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.checkout.rate_limit import RateLimiter
from ordering.config import StoreSettings, get_settings
from ordering.exceptions import UnauthenticatedError


def client_ip(request: Request) -> str:
    """Caller's network identifier: first ``X-Forwarded-For`` hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client is not None:
        return request.client.host
    return "unknown"


def get_optional_requester(request: Request) -> Requester | None:
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return get_identity_provider().verify_token(token.strip())


def get_requester(requester: Requester | None = Depends(get_optional_requester)) -> Requester:
    if requester is None:
        raise UnauthenticatedError()
    return requester


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def enforce_rate_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
    limiter.hit(client_ip(request))


def get_store_settings(request: Request) -> StoreSettings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_catalog() -> ProductCatalog:
    """One catalogue snapshot per request."""
    return ProductCatalog()


def get_orchestrator(settings: StoreSettings = Depends(get_store_settings)) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(settings=settings)
