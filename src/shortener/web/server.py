import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from shortener.app import App
from shortener.config import Config
from shortener.core.modules.session.models import SESSION_COOKIE_NAME
from shortener.errors import ServiceError, UserError
from shortener.web.error_handlers import general_exception_handler, service_error_handler, user_error_handler
from shortener.web.openapi import set_custom_openapi
from shortener.web.routers import auth_router, links_router, redirect_router

logger = structlog.get_logger(__name__)


def session_secret(config: Config) -> str:
    """Configured session signing secret, or a random one for this process."""
    if config.session_secret_key:
        return config.session_secret_key
    logger.warning("session_secret_generated", detail="sessions will not survive a restart")
    return secrets.token_urlsafe(32)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        # Store app instance in app state
        app.state.app = app_instance
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Shortener API",
        lifespan=lifespan,
        openapi_tags=[],
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret(config),
        session_cookie=SESSION_COOKIE_NAME,
        max_age=config.session_max_age,
        same_site="lax",
        https_only=config.https_only,
    )

    # Health check endpoint (must precede the catch-all redirect route)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(links_router)
    app.include_router(redirect_router)

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
