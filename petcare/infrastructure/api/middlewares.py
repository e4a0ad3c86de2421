from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from petcare.config import Settings


def add_default_middlewares(app: FastAPI, settings: Settings) -> None:
    # CORS: the web frontend runs on its own origin.
    # Development/staging fall back to the local frontend ports; production
    # only allows what CORS_ORIGINS lists.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
