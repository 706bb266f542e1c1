# src/taskdesk/api/http.py

"""
Thin async HTTP wrapper for the task API.

Handles:
- JSON request/response bodies
- the optional `Authorization: Bearer <token>` header
- translating httpx failures into the ApiError taxonomy (see errors.py)

No retries and no caching: callers decide what a failure means.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import ServerError, error_from_request, error_from_response, error_from_transport

logger = logging.getLogger(__name__)


class ApiHttpClient:
    """Low-level JSON client shared by SessionStore and TaskRepository."""

    __slots__ = ("_client",)

    def __init__(
        self,
        *,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                timeout_seconds,
                connect=connect_timeout_seconds,
            ),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> "ApiHttpClient":
        return cls(
            timeout_seconds=float(getattr(settings, "http_timeout_seconds", 10.0)),
            connect_timeout_seconds=float(getattr(settings, "http_connect_timeout_seconds", 5.0)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        token: str | None = None,
        params: dict[str, Any] | None = None,
        json_data: Any = None,
        map_errors: bool = True,
    ) -> Any:
        """
        Send one request and return the decoded JSON body (None for an empty body).

        token=None sends no Authorization header; any string (even "") sends
        `Bearer <token>` and leaves rejection to the server.

        map_errors=False lets httpx.HTTPStatusError / httpx.TransportError
        through untouched so the caller can inspect the raw response.
        """
        headers: dict[str, str] = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("HTTP %s %s", method, url)

        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json_data,
                headers=headers,
            )
        except httpx.TransportError as e:
            if not map_errors:
                raise
            logger.warning("HTTP %s %s failed: %s", method, url, e.__class__.__name__)
            raise error_from_transport(e) from e
        except httpx.RequestError as e:
            # A response arrived but could not be used (bad encoding, redirect loop).
            if not map_errors:
                raise
            logger.warning("HTTP %s %s unusable: %s", method, url, e.__class__.__name__)
            raise error_from_request(e) from e

        if response.is_error:
            logger.warning("HTTP %s %s -> %s", method, url, response.status_code)
            if not map_errors:
                response.raise_for_status()
            raise error_from_response(response)

        logger.debug("HTTP %s %s -> %s", method, url, response.status_code)
        return _decode_body(response)


def _decode_body(response: httpx.Response) -> Any:
    if response.status_code == 204 or not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError as e:
        raise ServerError(
            f"Unreadable JSON from {response.request.method} {response.request.url.path}",
            status_code=response.status_code,
            detail=response.text[:200],
        ) from e
