"""Network sub-client for the Rosetta API.

This module provides NetworkAPI and AsyncNetworkAPI for the /network/*
endpoints.

This is an internal module. Import from `rosetta_client` instead.
"""

from rosetta_client._base import AsyncBaseClient, BaseClient
from rosetta_client.context import CallContext
from rosetta_client.models import (
    MetadataRequest,
    NetworkListResponse,
    NetworkOptionsResponse,
    NetworkRequest,
    NetworkStatusResponse,
)


class NetworkAPI(BaseClient):
    """Synchronous client for the /network/* endpoints.

    Every method takes the caller's context first; see APIClient for how its
    deadline combines with the configured round-trip timeout.

    Example:
        Listing networks with a two second budget::

            ctx = background().with_timeout(2.0)
            networks = client.network.network_list(ctx, MetadataRequest())
    """

    _BASE_PATH = "/network"

    def network_list(
        self,
        ctx: CallContext,
        request: MetadataRequest | None = None,
    ) -> NetworkListResponse:
        """List the networks the server supports.

        Args:
            ctx: The caller's context.
            request: Optional metadata for the server.

        Returns:
            NetworkListResponse with every supported network identifier.

        Raises:
            DeadlineExceededError: If the effective deadline elapses first.
            CanceledError: If ``ctx`` is cancelled first.
            APIError: If the server answers with a non-success status.
        """
        data = self._post(ctx, f"{self._BASE_PATH}/list", request or MetadataRequest())
        return NetworkListResponse(**data)

    def network_status(self, ctx: CallContext, request: NetworkRequest) -> NetworkStatusResponse:
        """Get the current status of one network."""
        data = self._post(ctx, f"{self._BASE_PATH}/status", request)
        return NetworkStatusResponse(**data)

    def network_options(self, ctx: CallContext, request: NetworkRequest) -> NetworkOptionsResponse:
        """Get the version and capabilities of one network's implementation."""
        data = self._post(ctx, f"{self._BASE_PATH}/options", request)
        return NetworkOptionsResponse(**data)


class AsyncNetworkAPI(AsyncBaseClient):
    """Asynchronous client for the /network/* endpoints.

    Same behaviour as NetworkAPI, with awaitable methods.
    """

    _BASE_PATH = "/network"

    async def network_list(
        self,
        ctx: CallContext,
        request: MetadataRequest | None = None,
    ) -> NetworkListResponse:
        """List the networks the server supports."""
        data = await self._post(ctx, f"{self._BASE_PATH}/list", request or MetadataRequest())
        return NetworkListResponse(**data)

    async def network_status(
        self,
        ctx: CallContext,
        request: NetworkRequest,
    ) -> NetworkStatusResponse:
        """Get the current status of one network."""
        data = await self._post(ctx, f"{self._BASE_PATH}/status", request)
        return NetworkStatusResponse(**data)

    async def network_options(
        self,
        ctx: CallContext,
        request: NetworkRequest,
    ) -> NetworkOptionsResponse:
        """Get the version and capabilities of one network's implementation."""
        data = await self._post(ctx, f"{self._BASE_PATH}/options", request)
        return NetworkOptionsResponse(**data)
