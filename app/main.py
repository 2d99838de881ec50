# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the WTWR API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Request chain for a protected route:
#   RequestLoggingMiddleware -> CORS -> get_current_user -> body/path
#   validation -> route -> service
# Any classified error raised along the way goes straight to the handlers
# registered below, which are the only place errors become responses.
#
# Usage:
#   uvicorn app.main:app --reload --port 3001
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    WTWRException,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
    wtwr_exception_handler,
)
from app.logging_config import configure_logging
from app.middleware import RequestLoggingMiddleware
from app.routers import health, items, users
from lib.supabase_client import SupabaseClient

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Log configuration summary
    - Shutdown: Drop the cached database client
    """
    logger.info(f"Starting WTWR API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down WTWR API")
    SupabaseClient.reset_client()


# Create FastAPI application
app = FastAPI(
    title="WTWR API",
    description="""
## What To Wear

Users, sign-in and a shared wardrobe of clothing items tagged by weather.

### Authentication

`POST /signin` returns a token. Send it as `Authorization: Bearer <token>`
on every route except `/signup`, `/signin` and `GET /items`.

### Errors

Every error response has the shape `{"message": "..."}`.
""",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Sign up and sign in",
        },
        {
            "name": "Users",
            "description": "The current user's profile",
        },
        {
            "name": "Items",
            "description": "Clothing items and likes",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Added last so it wraps everything and sees the final status code
app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(WTWRException, wtwr_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Signup / signin
app.include_router(auth_routes.router)

# Current user
app.include_router(
    users.router,
    prefix="/users",
    tags=["Users"]
)

# Clothing items
app.include_router(
    items.router,
    prefix="/items",
    tags=["Items"]
)

# Health check endpoints
app.include_router(
    health.router,
    tags=["Health"]
)
