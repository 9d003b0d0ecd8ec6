"""OrderFlow FastAPI application.

Serves the catalogue, cart and order endpoints. Every request runs inside the
OrderFlow domain context and carries a request id in its log context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"/unset → event_processing = "sync"  (notifications fire after commit)
#   - "production" → event_processing = "async" (notifications fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from orderflow.domain import orderflow

orderflow.init()

from orderflow.api import (  # noqa: E402
    cart_router,
    order_router,
    product_router,
    register_exception_handlers,
)
from orderflow.cache import get_cache  # noqa: E402
from orderflow.errors import CacheUnavailable  # noqa: E402
from orderflow.utils.logging import add_context, clear_context  # noqa: E402

app = FastAPI(
    title="OrderFlow API",
    description="Catalogue browsing, shopping carts and cash-on-delivery orders",
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
    """Push the OrderFlow domain context and bind a request id for logging."""
    clear_context()
    request_id = request.headers.get("x-request-id") or uuid4().hex
    add_context(request_id=request_id, path=request.url.path)
    with orderflow.domain_context():
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


register_exception_handlers(app)

app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    cache_status = "ok"
    try:
        get_cache().get("health::probe")
    except CacheUnavailable:
        cache_status = "unavailable"

    return JSONResponse(
        content={
            "status": "ok",
            "domain": orderflow.name,
            "cache": cache_status,
        }
    )
