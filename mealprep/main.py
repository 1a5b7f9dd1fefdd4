# main.py
# Main application file for the meal prep recipe browser.

import logging.config
import os
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI, Request
import uvicorn
from sqlalchemy.engine import Engine
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

# Import the CORS middleware
from fastapi.middleware.cors import CORSMiddleware

# Import local modules
from mealprep import models
from mealprep.api import favorites, meal_planner, pages, recipes
from mealprep.core.config import Settings, settings
from mealprep.core.logging_middleware import StructuredLoggingMiddleware
from mealprep.core.rate_limit import build_limiter, enforce_rate_limit
from mealprep.db.session import make_engine, make_session_factory

# Load logging configuration
if os.path.exists(settings.LOGGING_CONFIG):
    logging.config.fileConfig(settings.LOGGING_CONFIG, disable_existing_loggers=False)

# Get the logger instance
logger = logging.getLogger(__name__)


# --- Security Headers Middleware ---


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Control referrer information
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Pages use inline scripts and Chart.js from the jsdelivr CDN
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
        )
        return response

# --- End of Security Headers Middleware ---


def create_app(app_settings: Settings = settings, engine: Optional[Engine] = None) -> FastAPI:
    """
    Composition root: builds the engine (unless one is supplied), the session
    factory and the FastAPI application that owns them.
    """
    engine = engine if engine is not None else make_engine(app_settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create all database tables that don't exist yet
        models.Base.metadata.create_all(bind=engine)
        logger.info(f"{app_settings.PROJECT_NAME} started ({app_settings.ENVIRONMENT})")
        yield
        engine.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Browse, filter and plan meals from the recipe catalog.",
        version="1.0.0",
        root_path=app_settings.ROOT_PATH,
        lifespan=lifespan,
        # Applied to every route, including those from included routers
        dependencies=[Depends(enforce_rate_limit)],
    )

    app.state.settings = app_settings
    app.state.engine = engine
    app.state.SessionLocal = make_session_factory(engine)

    # Rate limiter storage; disabled during testing
    app.state.limiter = build_limiter(enabled=not app_settings.is_testing)

    app.add_middleware(StructuredLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,  # Allows specified origins
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
    )

    app.add_middleware(SecurityHeadersMiddleware)

    # Include routers
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(recipes.router, tags=["Recipes"])
    app.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
    app.include_router(meal_planner.router, prefix="/meal-planner", tags=["Meal Planner"])

    @app.get("/health", tags=["Root"])
    async def health():
        """
        Liveness probe.
        """
        logger.debug("Health endpoint accessed")
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    # This block allows running the app directly with uvicorn for development.
    # In production, you would typically use a process manager like Gunicorn.
    uvicorn.run("mealprep.main:app", host="0.0.0.0", port=8000, reload=True)
