"""
Remote API access.

Components:
- http.py: ApiHttpClient (httpx.AsyncClient wrapper, bearer header, error mapping)
- errors.py: ApiError taxonomy (NetworkError, AuthError, ValidationError, ServerError)
"""

from .errors import ApiError, AuthError, NetworkError, ServerError, ValidationError
from .http import ApiHttpClient

__all__ = [
    "ApiError",
    "ApiHttpClient",
    "AuthError",
    "NetworkError",
    "ServerError",
    "ValidationError",
]
