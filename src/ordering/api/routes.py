"""FastAPI routes for the storefront: products, carts, checkout and orders."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from ordering.api.dependencies import (
    enforce_rate_limit,
    get_catalog,
    get_orchestrator,
    get_requester,
    get_store_settings,
)
from ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CategoryListResponse,
    CheckoutRequest,
    OrderListResponse,
    OrderPlacedResponse,
    OrderResponse,
    ProductListResponse,
    StatusResponse,
    SubmitOrderRequest,
    UpdateCartQuantityRequest,
)
from ordering.auth import Requester
from ordering.cart.engine import CartEngine
from ordering.catalogue.catalog import ProductCatalog, filter_by_category, search_products, sort_products
from ordering.checkout.form import CheckoutForm
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.config import StoreSettings
from ordering.exceptions import NotFoundError

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    q: str | None = None,
    sort: str | None = None,
    featured: bool = False,
    catalog: ProductCatalog = Depends(get_catalog),
) -> ProductListResponse:
    products = catalog.featured() if featured else catalog.in_stock()
    products = filter_by_category(products, category)
    products = search_products(products, q)
    products = sort_products(products, sort)
    return ProductListResponse(
        products=[p.to_payload() for p in products],
        count=len(products),
        timestamp=datetime.now(UTC).isoformat(),
    )


@product_router.get("/categories", response_model=CategoryListResponse)
async def list_categories(catalog: ProductCatalog = Depends(get_catalog)) -> CategoryListResponse:
    return CategoryListResponse(categories=catalog.categories())


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


def _cart_engine(session_id: str, catalog: ProductCatalog, settings: StoreSettings) -> CartEngine:
    return CartEngine(session_id, catalog=catalog, settings=settings)


def _cart_response(engine: CartEngine) -> CartResponse:
    cart = engine.load()
    totals = engine.compute_totals(cart)
    return CartResponse(
        session_id=engine.session_id,
        items=[line.to_dict() for line in totals.lines],
        item_count=sum(line.quantity for line in totals.lines),
        unique_item_count=len(totals.lines),
        **totals.to_dict(),
    )


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(
    session_id: str,
    catalog: ProductCatalog = Depends(get_catalog),
    settings: StoreSettings = Depends(get_store_settings),
) -> CartResponse:
    return _cart_response(_cart_engine(session_id, catalog, settings))


@cart_router.post("/{session_id}/items", response_model=CartResponse)
async def add_cart_item(
    session_id: str,
    body: AddToCartRequest,
    catalog: ProductCatalog = Depends(get_catalog),
    settings: StoreSettings = Depends(get_store_settings),
) -> CartResponse:
    engine = _cart_engine(session_id, catalog, settings)
    engine.add_item(body.product_id, body.quantity)
    return _cart_response(engine)


@cart_router.put("/{session_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    session_id: str,
    product_id: str,
    body: UpdateCartQuantityRequest,
    catalog: ProductCatalog = Depends(get_catalog),
    settings: StoreSettings = Depends(get_store_settings),
) -> CartResponse:
    engine = _cart_engine(session_id, catalog, settings)
    engine.update_quantity(product_id, body.quantity)
    return _cart_response(engine)


@cart_router.delete("/{session_id}/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    session_id: str,
    product_id: str,
    catalog: ProductCatalog = Depends(get_catalog),
    settings: StoreSettings = Depends(get_store_settings),
) -> CartResponse:
    engine = _cart_engine(session_id, catalog, settings)
    engine.remove_item(product_id)
    return _cart_response(engine)


@cart_router.delete("/{session_id}", response_model=StatusResponse)
async def clear_cart(
    session_id: str,
    catalog: ProductCatalog = Depends(get_catalog),
    settings: StoreSettings = Depends(get_store_settings),
) -> StatusResponse:
    _cart_engine(session_id, catalog, settings).clear()
    return StatusResponse()


@cart_router.post(
    "/{session_id}/checkout",
    status_code=201,
    response_model=OrderPlacedResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def checkout_cart(
    session_id: str,
    body: CheckoutRequest,
    requester: Requester = Depends(get_requester),
    catalog: ProductCatalog = Depends(get_catalog),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderPlacedResponse:
    engine = _cart_engine(session_id, catalog, orchestrator.settings)
    order_id = await orchestrator.checkout(requester, CheckoutForm(**body.model_dump()), engine)
    return OrderPlacedResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post(
    "/submit",
    status_code=201,
    response_model=OrderPlacedResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def submit_order(
    body: SubmitOrderRequest,
    requester: Requester = Depends(get_requester),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderPlacedResponse:
    order_id = await orchestrator.submit(requester, body.model_dump(exclude_none=True))
    return OrderPlacedResponse(order_id=order_id)


@order_router.get("", response_model=OrderListResponse)
async def list_my_orders(
    requester: Requester = Depends(get_requester),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderListResponse:
    orders = orchestrator.orders.for_user(requester.uid)
    return OrderListResponse(orders=[o.to_payload() for o in orders], count=len(orders))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    requester: Requester = Depends(get_requester),
    orchestrator: CheckoutOrchestrator = Depends(get_orchestrator),
) -> OrderResponse:
    order = orchestrator.orders.get(order_id)
    # Other users' orders are reported as missing.
    if order is None or order.user_id != requester.uid:
        raise NotFoundError("Order not found")
    return OrderResponse(order=order.to_payload())
