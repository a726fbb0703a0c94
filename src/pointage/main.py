"""FastAPI application factory.

create_app() wires settings, middleware, routers and the AuthError
handler. Lifespan creates the schema when auto_create_tables is set and
disposes the engine on shutdown.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pointage import __version__
from pointage.api import api_router
from pointage.auth.exceptions import AuthError, AuthenticationError, TokenEncodingError
from pointage.config import settings

logger = structlog.get_logger()

AUTHENTICATION_FAILED = "Invalid or missing authentication token"


@asynccontextmanager
async def lifespan(app: FastAPI):
    from pointage.db.engine import engine
    from pointage.db.models import Base

    logger.info(
        "pointage.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.auto_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("pointage.tables_ready")

    yield

    logger.info("pointage.shutdown")
    await engine.dispose()


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Translate auth errors into JSON responses.

    Authentication failures all look the same to the client; the real
    reason was logged by the strategy.
    """
    if isinstance(exc, AuthenticationError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": AUTHENTICATION_FAILED, "code": exc.code},
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, TokenEncodingError):
        logger.error("pointage.token_misconfigured", error=exc.message)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "code": exc.code},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Pointage API",
        description="Employee time-clock API: login, check in/out, employee records",
        version=__version__,
        lifespan=lifespan,
    )

    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler
    from pointage.middleware.request_id import RequestIdMiddleware
    from pointage.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(AuthError, auth_error_handler)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: pointage.main:app)
app = create_app()
