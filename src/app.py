"""Storefront FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
import structlog
from catalogue.domain import catalogue  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from notifications.domain import notifications  # noqa: E402
from ordering.domain import ordering  # noqa: E402
from protean.integrations.fastapi import register_exception_handlers
from reviews.domain import reviews  # noqa: E402

logger = structlog.get_logger(__name__)

DOMAINS = (identity, catalogue, ordering, reviews, notifications)

for _domain in DOMAINS:
    _domain.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/users": identity,
    "/products": catalogue,
    "/categories": catalogue,
    "/offers": catalogue,
    "/settings": catalogue,
    "/wishlist": catalogue,
    "/cart": ordering,
    "/shifts": ordering,
    "/orders": ordering,
    "/reviews": reviews,
    "/ratings": reviews,
    "/notifications": notifications,
    "/push-subscriptions": notifications,
    "/contact": notifications,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Grocery storefront: identity, catalogue, ordering, reviews and notifications",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check, docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import category_router, offer_router, product_router, settings_router, wishlist_router  # noqa: E402
from identity.api import auth_router, user_router  # noqa: E402
from notifications.api.routes import contact_router, push_router  # noqa: E402
from notifications.api.routes import router as notification_router  # noqa: E402
from ordering.api.routes import cart_router, order_router, shift_router  # noqa: E402
from reviews.api.routes import rating_router, review_router  # noqa: E402

for _router in (
    auth_router,
    user_router,
    product_router,
    category_router,
    offer_router,
    settings_router,
    wishlist_router,
    cart_router,
    shift_router,
    order_router,
    review_router,
    rating_router,
    notification_router,
    push_router,
    contact_router,
):
    app.include_router(_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {domain.name: {"name": domain.name} for domain in DOMAINS},
        }
    )
