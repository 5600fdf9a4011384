"""FastAPI application entry point.

Wiring only: lifespan (audit dispatcher), exception handlers, rate limiting,
CORS, routers. See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before importing or calling it.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter

OPENAPI_TAGS = [
    {"name": "hotels", "description": "Hotels and their department links (scoped)."},
    {"name": "departments", "description": "Departments (scoped)."},
    {"name": "contacts", "description": "Contacts attributed to a hotel and department."},
    {"name": "cards", "description": "Contact cards; visible through their contact."},
    {"name": "users", "description": "Users, role assignments and scope assignments."},
    {"name": "roles", "description": "Roles and their permission sets."},
    {"name": "permissions", "description": "Permission keys."},
    {"name": "audit-logs", "description": "Append-only trail of mutation attempts."},
]


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # The device header feeds audit entries, so browsers must be allowed to send it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", settings.device_mac_header],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
