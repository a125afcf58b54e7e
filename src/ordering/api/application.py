"""Storefront FastAPI application factory.

``create_app()`` builds the HTTP app around an already initialized
``ordering`` domain: every request runs inside the domain context with the
request id, path and client address bound into the log context. The
process-wide rate limiter lives on ``app.state.rate_limiter``.
"""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.api.dependencies import client_ip
from ordering.api.errors import register_exception_handlers
from ordering.api.routes import cart_router, order_router, product_router
from ordering.checkout.rate_limit import RateLimiter
from ordering.config import StoreSettings, get_settings
from ordering.domain import ordering
from ordering.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


def create_app(settings: StoreSettings | None = None, rate_limiter: RateLimiter | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=f"{settings.shop_name} Storefront API",
        description="Products, carts, checkout and order submission",
    )
    app.state.settings = settings
    app.state.rate_limiter = rate_limiter or RateLimiter.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the ordering domain context and per-request log context."""
        clear_context()
        add_context(
            request_id=request.headers.get("x-request-id") or uuid4().hex,
            path=request.url.path,
            client_ip=client_ip(request),
        )
        try:
            with ordering.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response

    register_exception_handlers(app)

    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": ordering.name})

    logger.info("Storefront app created", shop=settings.shop_name)
    return app
