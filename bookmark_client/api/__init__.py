"""书签服务 API"""
from .client import BookmarkApiClient
from .errors import (
    BookmarkClientError,
    ApiError,
    UnauthorizedError,
    LoginFailedError,
    ResponseFormatError,
    PermissionDeniedError,
)

__all__ = [
    "BookmarkApiClient",
    "BookmarkClientError", "ApiError", "UnauthorizedError", "LoginFailedError",
    "ResponseFormatError", "PermissionDeniedError",
]
