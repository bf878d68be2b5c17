"""EcoPure marketplace HTTP API.

One FastAPI app serves all three bounded contexts. Every request runs inside
the domain context that owns its URL prefix, with the request id and caller
bound onto every log line it produces.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from identity.domain import identity
from marketplace.checkout.orchestrator import CheckoutFailed
from marketplace.domain import marketplace
from marketplace.utils.logging import add_context, clear_context, configure_logging, get_logger
from messaging.domain import messaging
from shared.errors import register_error_handlers

configure_logging()
logger = get_logger(__name__)

# PROTEAN_ENV picks the domain.toml overlay: in-memory and synchronous by
# default, PostgreSQL and Redis with projectors run by server.py in production.
DOMAINS = (identity, marketplace, messaging)
for _domain in DOMAINS:
    _domain.init()

from identity.api import router as profile_router  # noqa: E402
from marketplace.api import (  # noqa: E402
    cart_router,
    checkout_router,
    dashboard_router,
    order_router,
    product_router,
)
from messaging.api import router as chat_router  # noqa: E402

ROUTERS_BY_DOMAIN = (
    (identity, [profile_router]),
    (marketplace, [product_router, cart_router, checkout_router, order_router, dashboard_router]),
    (messaging, [chat_router]),
)

# Longest prefix first
_PREFIXES = sorted(
    ((router.prefix, domain) for domain, routers in ROUTERS_BY_DOMAIN for router in routers),
    key=lambda item: len(item[0]),
    reverse=True,
)


def domain_for_path(path: str):
    for prefix, domain in _PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


app = FastAPI(
    title="EcoPure Marketplace API",
    description="Bottled water marketplace: profiles, catalog, carts, checkout, orders and chat",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Run the request inside its owning domain and tag its log lines."""
    clear_context()
    add_context(
        request_id=request.headers.get("X-Request-Id", uuid.uuid4().hex),
        user_id=request.headers.get("X-User-Id"),
        path=request.url.path,
    )

    domain = domain_for_path(request.url.path)
    if domain is None:
        return await call_next(request)

    with domain.domain_context():
        response = await call_next(request)
    if response.status_code >= 500:
        logger.error("request_failed", status_code=response.status_code, domain=domain.name)
    return response


register_error_handlers(app, {CheckoutFailed: 500})

for _, _routers in ROUTERS_BY_DOMAIN:
    for _router in _routers:
        app.include_router(_router)


@app.get("/health")
async def health():
    return {"status": "ok", "domains": [domain.name for domain in DOMAINS]}
