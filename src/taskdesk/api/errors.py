# src/taskdesk/api/errors.py

"""
Error taxonomy for the remote API.

Mapping:
- no response (connect error, timeout, broken transport) -> NetworkError
- 401 / 403                                              -> AuthError
- any other 4xx                                          -> ValidationError
- 5xx, or a 2xx body we cannot understand                -> ServerError
- undecodable body, too many redirects                   -> ServerError
"""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """Base class for every failure reported by the API layer."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class NetworkError(ApiError):
    """The server could not be reached or did not answer."""


class AuthError(ApiError):
    """Missing, invalid or insufficient credentials."""


class ValidationError(ApiError):
    """The server rejected the request (4xx other than 401/403)."""


class ServerError(ApiError):
    """The server failed (5xx) or answered with an unusable payload."""


def _response_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        text = response.text.strip()
        return text or None


def error_from_response(response: httpx.Response) -> ApiError:
    """Build the typed error for a non-2xx response."""
    status = response.status_code
    detail = _response_detail(response)
    where = f"{response.request.method} {response.request.url.path}"

    if status in (401, 403):
        return AuthError(f"Not authorized: {where}", status_code=status, detail=detail)
    if 400 <= status < 500:
        return ValidationError(f"Request rejected: {where}", status_code=status, detail=detail)
    return ServerError(f"Server error: {where}", status_code=status, detail=detail)


def _where(exc: httpx.RequestError) -> str:
    try:
        request = exc.request
    except RuntimeError:
        # httpx raises RuntimeError when the exception has no request attached.
        return "request"
    return f"{request.method} {request.url.path}"


def error_from_transport(exc: httpx.TransportError) -> NetworkError:
    """Build the typed error for a request that never got a response."""
    return NetworkError(f"Network error on {_where(exc)}: {exc.__class__.__name__}")


def error_from_request(exc: httpx.RequestError) -> ServerError:
    """Build the typed error for a response httpx could not deliver (decoding, redirects)."""
    return ServerError(f"Unusable response for {_where(exc)}: {exc.__class__.__name__}")
