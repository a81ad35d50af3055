"""FastAPI application entry point.

Blog Posts API - CRUD over blog posts backed by PostgreSQL.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.errors import BlogApiError
from blog_api.routes import api_router
from blog_api.schemas import ErrorDetail, ErrorResponse
from blog_api.settings import get_settings
from blog_api.stores.postgres import close_db, create_tables, init_db, ping_db

logger = logging.getLogger("uvicorn.error")


def configure_logging(level: str) -> None:
    """Apply the configured level to the application logger."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def _error_response(status_code: int, code: str, message: str, detail: object = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the database pool on startup and closes it on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)

    # A database outage at boot is logged, not fatal; /health still answers
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
        if settings.create_tables_on_startup:
            await create_tables()
            logger.info("Tables created")
    except Exception:
        logger.exception("Postgres init failed")

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Blog posts CRUD API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BlogApiError)
    async def blog_api_error_handler(request: Request, exc: BlogApiError) -> JSONResponse:
        """Map domain errors (validation, not found, storage) to their status."""
        return _error_response(exc.status_code, exc.code, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Missing fields, wrong types and malformed bodies are all 400s."""
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        return _error_response(400, "VALIDATION_ERROR", "Request validation failed", errors)

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        return _error_response(
            500,
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "blog_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
