"""
Application factory.

Sessions are issued by an external auth layer, which populates
`app.state.session_store`; this app only looks them up.
"""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers.itinerary import router as itinerary_router
from app.api.routers.recommendations import router as recommendations_router
from app.api.routers.yelp import router as yelp_router
from app.core.session_store import InMemorySessionStore
from app.core.settings import get_settings
from app.core.yelp_cache import create_yelp_cache

load_dotenv()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(title="TripScout Backend")

    # CORS: local Vite dev server by default
    allowed_origins = [
        "http://localhost:5000",
        "http://localhost:5173",
        "http://127.0.0.1:5000",
        "http://127.0.0.1:5173",
    ]

    # Add production origins from environment if set
    if settings.allowed_origins:
        allowed_origins.extend(
            [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
        )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Initialize shared dependencies
    application.state.yelp_cache = create_yelp_cache(settings)
    application.state.session_store = InMemorySessionStore(settings.session_timeout_seconds)

    application.include_router(yelp_router)
    application.include_router(itinerary_router)
    application.include_router(recommendations_router)

    @application.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
