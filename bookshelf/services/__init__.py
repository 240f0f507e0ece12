"""Services d'accès à l'API distante."""

from bookshelf.services.error_dispatcher import (
    Notification,
    UnauthorizedPolicy,
    dispatch_error,
)
from bookshelf.services.http_client import ApiClient, ApiRequestError, ApiResponse

__all__ = [
    "ApiClient",
    "ApiRequestError",
    "ApiResponse",
    "Notification",
    "UnauthorizedPolicy",
    "dispatch_error",
]
