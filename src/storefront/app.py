"""Storefront FastAPI application.

Usage:
    uvicorn storefront.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api import product_router
from identity.api import router as identity_router
from ordering.api.routes import cart_router, checkout_router, order_router
from payments.api.routes import payment_router
from storefront.config import Settings
from storefront.container import Container, build_container
from storefront.http import register_error_handlers
from storefront.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    if container is None:
        settings = settings or Settings.from_env()
        configure_logging()
        container = build_container(settings)

    app = FastAPI(
        title="Storefront API",
        description="Cart, checkout and payment reconciliation",
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Tag every log line of a request with its id and path."""
        clear_context()
        add_context(request_id=request.headers.get("X-Request-ID") or uuid4().hex, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    register_error_handlers(app)

    app.include_router(identity_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(payment_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "gateway": type(container.gateway).__name__,
                "domains": {
                    "identity": {"name": container.identity.name},
                    "catalogue": {"name": container.catalogue.name},
                    "ordering": {"name": container.ordering.name},
                },
            }
        )

    logger.info("Storefront app created", environment=container.settings.environment)
    return app
