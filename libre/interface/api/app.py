"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from libre.config import Settings
from libre.interface.api.routes import auth, health
from libre.interface.error import register_error_handlers
from libre.util.di.container import create_container, lifespan, setup_di
from libre.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Settings deciding which provider routes exist (loaded from
            the environment when omitted)
        container: DI container (production container when omitted)
    """
    settings = settings or Settings()
    instrument = settings.environment != "test"

    if instrument:
        # Outbound token and user-info requests
        instrument_httpx()

    app_instance = FastAPI(
        title="Libre User API",
        description="Sign-in service: OAuth 2.0 authorization code login with PKCE",
        version="0.1.0",
        lifespan=lifespan,
    )

    if instrument:
        instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        expose_headers=["X-CSRF-Token"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    # Only providers with credentials get routes
    for provider in settings.auth.enabled_providers:
        app_instance.include_router(auth.build_provider_router(provider))

    return app_instance
