from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from petcare.application.dtos.common_dto import HealthResponse, RootResponse
from petcare.config import Settings, load_settings
from petcare.infrastructure.api.dependencies import build_services
from petcare.infrastructure.api.middlewares import add_default_middlewares
from petcare.infrastructure.api.routes.auth_routes import router as auth_router
from petcare.infrastructure.api.routes.session_routes import router as session_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services = build_services(settings)
        app.state.services = services
        logger.info(
            "Session gateway ready (%s backend)",
            "supabase" if settings.use_supabase else "in-memory",
        )
        try:
            yield
        finally:
            await services.sessions.close_all()

    app = FastAPI(
        title="Cat Care Tracker Session API",
        version="0.1.0",
        description="""
        ## Cat Care Tracker Session API

        Session gateway for the household pet-care tracker. Authentication and storage
        are provided by Supabase; this service keeps the signed-in identity, its profile
        and the initial loading state consistent and exposes them to the web frontend.
        Each browser client has its own session, identified by the HttpOnly
        `petcare_session` cookie set on sign-in.

        ### Session states
        - **loading**: the initial session check has not finished; identity and profile
          are not determined yet
        - **signed out**: no identity and no profile
        - **signed in**: identity present; the profile follows once its lookup finishes

        ### Error Responses
        - **400 Bad Request**: Invalid input or request rejected by the auth provider
        - **401 Unauthorized**: Credentials rejected, or not signed in
        - **404 Not Found**: No profile for the signed-in identity
        - **503 Service Unavailable**: Session not determined yet
        """,
        lifespan=lifespan,
    )
    add_default_middlewares(app, settings)

    @app.get(
        "/",
        response_model=RootResponse,
        summary="API Root",
        description="Get basic information about the session API",
    )
    def root():
        """Get API root information."""
        return {"status": "ok", "service": "petcare-session", "version": app.version}

    @app.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Check if the API service is running and healthy",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(auth_router)
    app.include_router(session_router)
    return app


app = create_app()
