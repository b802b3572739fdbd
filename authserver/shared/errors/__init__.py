from .base import (
    AppError,
    DomainError,
    ErrorKind,
    InfrastructureError,
    RouteNotFoundError,
    ValidationError,
)
from .http import STATUS_BY_KIND, handle_app_error, register_error_handler, status_for

__all__ = [
    "AppError",
    "DomainError",
    "ErrorKind",
    "InfrastructureError",
    "RouteNotFoundError",
    "STATUS_BY_KIND",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
    "status_for",
]
