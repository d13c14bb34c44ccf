"""SnippetBox - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from snippetbox.api import auth_router, health_router, snippets_router
from snippetbox.core import engine, settings, setup_logging
from snippetbox.core.config import Settings
from snippetbox.core.logging import get_logger
from snippetbox.middleware import (
    AdmissionController,
    AuthenticationMiddleware,
    RateLimitMiddleware,
)
from snippetbox.middleware.auth import unauthorized_response
from snippetbox.services.exceptions import (
    OwnershipError,
    OwnershipLookupTimeoutError,
    UnauthorizedError,
)
from snippetbox.services.tokens import TokenCodec

logger = get_logger("main")

# Operational probes do not draw from the admission budget
ADMISSION_EXCLUDED_PATHS = ["/health"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config: Settings = app.state.settings
    setup_logging(
        level=config.log_level,
        format_type="structured" if not config.debug else "dev",
    )
    logger.info(f"Starting {config.app_name} v{config.app_version}")
    stats = app.state.admission_controller.get_stats()
    logger.info(
        f"Admission control: {stats['rate']}/s, burst {stats['capacity']}"
        f" ({'enabled' if config.rate_limit_enabled else 'disabled'})"
    )

    yield

    logger.info("Shutting down...")
    await engine.dispose()


async def _unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    logger.warning(f"{type(exc).__name__} for: {request.method} {request.url.path} - {exc}")
    return unauthorized_response()


async def _ownership_handler(request: Request, exc: OwnershipError) -> JSONResponse:
    # Not-found and not-yours are indistinguishable to the caller;
    # the guard already logged which one it was.
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Snippet not found"},
    )


async def _lookup_timeout_handler(
    request: Request, exc: OwnershipLookupTimeoutError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable"},
    )


def create_app(
    config: Settings | None = None,
    admission_controller: AdmissionController | None = None,
    token_codec: TokenCodec | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The admission controller and token codec are built from settings unless
    given; each app instance owns its own admission budget.
    """
    config = config or settings
    admission_controller = admission_controller or AdmissionController.from_settings(config)
    token_codec = token_codec or TokenCodec.from_settings(config)

    app = FastAPI(
        title=config.app_name,
        description="Multi-tenant code snippet storage",
        version=config.app_version,
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
        openapi_url="/openapi.json" if config.debug else None,
    )
    app.state.settings = config
    app.state.admission_controller = admission_controller
    app.state.token_codec = token_codec

    # Starlette runs middleware in reverse order of registration:
    # admission control is outermost, authentication runs after it.
    app.add_middleware(AuthenticationMiddleware, token_codec=token_codec)
    app.add_middleware(
        RateLimitMiddleware,
        controller=admission_controller,
        exclude_paths=ADMISSION_EXCLUDED_PATHS,
        enabled=config.rate_limit_enabled,
    )

    app.add_exception_handler(UnauthorizedError, _unauthorized_handler)
    app.add_exception_handler(OwnershipError, _ownership_handler)
    app.add_exception_handler(OwnershipLookupTimeoutError, _lookup_timeout_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(snippets_router)

    return app


# Application instance
app = create_app()
