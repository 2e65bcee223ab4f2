"""FastAPI application entry point."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from uuid6 import uuid7

from src.api import (
    audit_logs_router,
    auth_router,
    data_sources_router,
    documents_router,
    drug_interactions_router,
    drug_products_router,
    etl_jobs_router,
    knowledge_units_router,
)
from src.core.config import settings
from src.core.errors import register_exception_handlers
from src.core.logging import bind_context, clear_context, get_logger, setup_logging
from src.db.base import Database
from src.schemas import ErrorResponse

logger = get_logger(__name__)

API_PREFIX = "/api/v1"
VERSION = "0.1.0"

# Documented on every API route; the bodies come from src.core.errors
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status_code: {"model": ErrorResponse, "description": description}
    for status_code, description in [
        (401, "No session"),
        (403, "Role below editor"),
        (404, "Entity not found"),
        (422, "Invalid input"),
        (503, "Database not available"),
    ]
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    setup_logging()
    if getattr(app.state, "database", None) is None:
        app.state.database = Database.from_settings(settings)
    if app.state.database.is_unavailable:
        logger.warning("No database configured, write and read procedures will be unavailable")
    logger.info("Application started", environment=settings.environment)
    yield
    # Shutdown
    await app.state.database.dispose()


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind request id, method and path to every log line of the request."""
    request_id = request.headers.get("x-request-id") or uuid7().hex
    bind_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response
    finally:
        clear_context()


def create_app(database: Database | None = None) -> FastAPI:
    """
    Application factory for creating the FastAPI instance.

    Args:
        database: Store client to use instead of one built from settings
            (tests pass an in-memory one).
    """
    app = FastAPI(
        title="Clinical Knowledge Base API",
        description=(
            "Backend service for a clinical and pharmacological knowledge base.\n\n"
            "## Features\n"
            "- **Data sources**: Registries and publishers content is ingested from\n"
            "- **Documents**: Guidelines, SPCs and other source documents\n"
            "- **Knowledge units**: Atomic clinical facts extracted from documents\n"
            "- **Drug products**: Registered medicinal products\n"
            "- **Drug interactions**: Pairwise interactions graded by severity\n"
            "- **ETL jobs**: Status of external ingestion runs\n\n"
            "Reads are public; writes require an editor session."
        ),
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    if database is not None:
        app.state.database = database

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context_middleware)

    register_exception_handlers(app)

    # Register routers
    routers = [
        (data_sources_router, "/data-sources", "Data Sources"),
        (documents_router, "/documents", "Documents"),
        (knowledge_units_router, "/knowledge-units", "Knowledge Units"),
        (drug_products_router, "/drug-products", "Drug Products"),
        (drug_interactions_router, "/drug-interactions", "Drug Interactions"),
        (etl_jobs_router, "/etl-jobs", "ETL Jobs"),
        (audit_logs_router, "/audit-logs", "Audit Logs"),
        (auth_router, "/auth", "Auth"),
    ]
    for router, prefix, tag in routers:
        app.include_router(
            router,
            prefix=f"{API_PREFIX}{prefix}",
            tags=[tag],
            responses=ERROR_RESPONSES,
        )

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint for container orchestration."""
        database: Database = request.app.state.database
        if database.is_unavailable:
            db_status = "unavailable"
        elif database.is_connected:
            db_status = "connected"
        else:
            db_status = "not_connected"
        return {"status": "healthy", "version": VERSION, "database": db_status}

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """Root endpoint with API information."""
        return {
            "service": "Clinical Knowledge Base API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# Create the app instance
app = create_app()
