"""Presentation layer."""

from memopad.presentation.api_handlers import (
    create_app,
    error_middleware,
    register_routes,
)

__all__ = ["create_app", "error_middleware", "register_routes"]
