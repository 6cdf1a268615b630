"""
Townsquare - community site with Twitter sign-in and a mounted forum

FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

# Import observability modules
from townsquare.config import settings
from townsquare.logging_config import configure_logging
from townsquare.sentry_config import configure_sentry
from townsquare.middleware.logging import LoggingMiddleware

# Import route modules
from townsquare.routes.auth import router as auth_router
from townsquare.routes.users import router as users_router
from townsquare.forum_setup import build_forum_engine
from townsquare.forum.url_helpers import include_routers

# Initialize logging first
configure_logging()

# Initialize Sentry (if SENTRY_DSN is set)
configure_sentry()

forum_engine = build_forum_engine()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Host routes are final here; rerun prepare() after adding more
    forum_engine.prepare(app)
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Community site with Twitter sign-in and a forum",
    lifespan=lifespan,
)

# Request logging (innermost, so request_id is bound for route handlers)
app.add_middleware(LoggingMiddleware)

# Add SessionMiddleware for OAuth (authlib keeps the request token here)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.APP_URL.startswith("https://"),
)

# Include authentication and user profile routes; remembered for the forum helpers
include_routers(app, auth_router, users_router)


@app.get("/")
async def root():
    """Landing endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "forum": forum_engine.helpers["forum_path"](),
    }


@app.get("/health")
async def health():
    """Health check."""
    return {"status": "healthy"}


# Mount the forum last so it sees every host route once prepared
forum_engine.install(app)
