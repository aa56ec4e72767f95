"""
API module for FastAPI routes and middleware.
"""

from app.api.dependencies import (
    get_app_settings,
    get_current_user_id,
    get_provider_selector,
    get_store,
)
from app.api.middleware import (
    RequestLoggingMiddleware,
    setup_exception_handlers,
    setup_middleware,
)
from app.api.routes import create_api_router

__all__ = [
    # Dependencies
    "get_app_settings",
    "get_current_user_id",
    "get_provider_selector",
    "get_store",
    # Middleware
    "RequestLoggingMiddleware",
    "setup_middleware",
    "setup_exception_handlers",
    # Routes
    "create_api_router",
]
