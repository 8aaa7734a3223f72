"""Customer API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - MongoDB client created once in the lifespan, stored on app.state, closed on shutdown
    - A failed startup connection is logged; the app still serves (store calls fail)
    - Error policy chosen from settings at app construction

Design Decisions:
    - create_app() factory so tests build isolated apps; module-level `app` for uvicorn
    - Swagger UI under /customers/api-docs, where the service has always exposed it
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from customer_api.api.error_handlers import build_error_policy, register_error_handlers
from customer_api.api.routes import customers, health
from customer_api.config import Settings, get_settings
from customer_api.infrastructure.database import MongoConnectionManager
from customer_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    connection = MongoConnectionManager(
        settings.mongodb_uri,
        settings.mongodb_database,
        collection_name=settings.customers_collection,
        server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
    )
    app.state.mongo = connection
    await connection.connect()
    logger.info("Customer API started")
    try:
        yield
    finally:
        logger.info("Customer API shutting down")
        await connection.close()
        app.state.mongo = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Customers API",
        description="Crud customers",
        version="1.0.0",
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.error_policy = build_error_policy(settings.error_policy)
    app.state.mongo = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def index():
        return "Customer API!"

    app.include_router(health.router)
    app.include_router(customers.router)
    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on settings.port."""
    settings = get_settings()
    logger.info(f"Starting Customer API on port {settings.port}")
    uvicorn.run(
        "customer_api.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    run()
