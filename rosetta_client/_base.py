"""Base class for all sub-clients.

This module provides the base classes that the API sub-clients inherit from.
They give access to the shared HTTP client and a POST helper.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from rosetta_client._http import AsyncHTTPClient, HTTPClient
    from rosetta_client.context import CallContext


def _body(payload: BaseModel | None) -> dict[str, Any] | None:
    if payload is None:
        return None
    return payload.model_dump(exclude_none=True)


class BaseClient:
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _post(self, ctx: "CallContext", path: str, payload: BaseModel | None = None) -> Any:
        """Make a POST request with ``payload`` as its JSON body.

        Args:
            ctx: The caller's context.
            path: The URL path.
            payload: Request model to send.

        Returns:
            The parsed JSON response.
        """
        return self._http.post(ctx, path, json=_body(payload))


class AsyncBaseClient:
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
    """

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def _post(self, ctx: "CallContext", path: str, payload: BaseModel | None = None) -> Any:
        """Make an async POST request with ``payload`` as its JSON body.

        Args:
            ctx: The caller's context.
            path: The URL path.
            payload: Request model to send.

        Returns:
            The parsed JSON response.
        """
        return await self._http.post(ctx, path, json=_body(payload))
