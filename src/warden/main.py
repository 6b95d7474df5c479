"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (signing config, database).
Middleware, CORS, error handlers and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from warden import __version__
from warden.api import api_router
from warden.auth.jwt import get_token_issuer
from warden.config import settings
from warden.errors import AuthenticationError, IntegrityFault, ValidationError, WardenError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: The token issuer is built here once so a broken secret or
    lifetime fails the boot, not the first login.
    """
    logger.info(
        "warden.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    issuer = get_token_issuer()
    logger.info(
        "warden.token_issuer_ready",
        algorithm=settings.jwt_algorithm,
        lifetime_seconds=int(issuer.lifetime.total_seconds()),
    )

    yield

    logger.info("warden.shutdown")

    from warden.db.engine import engine
    await engine.dispose()


async def handle_domain_error(request: Request, exc: WardenError) -> JSONResponse:
    """Map every domain error to its one fixed status code."""
    headers = None
    if isinstance(exc, AuthenticationError) and exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    if isinstance(exc, IntegrityFault):
        logger.error(
            "warden.integrity_fault",
            code=exc.code,
            error=exc.message,
            path=request.url.path,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed input is a 400, not FastAPI's default 422.

    The offending input values are dropped: they may be passwords.
    """
    errors = [
        {k: v for k, v in err.items() if k not in ("input", "ctx")}
        for err in exc.errors()
    ]
    error = ValidationError(
        "Invalid request",
        code="VALIDATION_ERROR",
        details={"errors": jsonable_encoder(errors)},
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Warden",
        description="Identity and ownership-based access control for a resource API",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from warden.middleware.request_id import RequestIdMiddleware
    from warden.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error handlers ────────────────────────────────────────
    app.add_exception_handler(WardenError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: warden.main:app)
app = create_app()
