"""Main Rosetta client classes.

This module provides the main entry points for calling a Rosetta API server:
- APIClient: Synchronous client
- AsyncAPIClient: Asynchronous client

Every call takes a CallContext. The call fails with DeadlineExceededError
when the sooner of the context's deadline and the configuration's
network_round_trip_timeout elapses, and with CanceledError when the context
is cancelled first. A response that arrives before either is returned, or
raised as APIError if its status is not a success.

Example:
    Synchronous usage::

        from rosetta_client import APIClient, Configuration, MetadataRequest, background

        cfg = Configuration(base_url="http://localhost:8080")
        cfg.network_round_trip_timeout = 2.0
        with APIClient(cfg) as client:
            networks = client.network.network_list(background(), MetadataRequest())

    Asynchronous usage::

        async with AsyncAPIClient(cfg) as client:
            with background().with_timeout(0.5) as ctx:
                networks = await client.network.network_list(ctx)
"""

from typing import Any

from rosetta_client._http import AsyncHTTPClient, HTTPClient
from rosetta_client._network import AsyncNetworkAPI, NetworkAPI
from rosetta_client.configuration import Configuration


class APIClient:
    """Synchronous client for a Rosetta API server.

    Attributes:
        configuration: The configuration every call reads. Changing it
            between calls is fine; changing it during a call is not.
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            configuration: Client settings (default: Configuration()).
            transport: Custom async HTTP transport (e.g., MockTransport for testing).
        """
        self.configuration = configuration or Configuration()
        self._http = HTTPClient(self.configuration, transport=transport)
        self._network: NetworkAPI | None = None

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def network(self) -> NetworkAPI:
        """Access the /network/* endpoints."""
        if self._network is None:
            self._network = NetworkAPI(self._http)
        return self._network

    network_api = network


class AsyncAPIClient:
    """Asynchronous client for a Rosetta API server.

    Attributes:
        configuration: The configuration every call reads.
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        transport: Any = None,
    ) -> None:
        """Initialize the async client.

        Args:
            configuration: Client settings (default: Configuration()).
            transport: Custom async HTTP transport (e.g., MockTransport for testing).
        """
        self.configuration = configuration or Configuration()
        self._http = AsyncHTTPClient(self.configuration, transport=transport)
        self._network: AsyncNetworkAPI | None = None

    async def __aenter__(self) -> "AsyncAPIClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def network(self) -> AsyncNetworkAPI:
        """Access the /network/* endpoints."""
        if self._network is None:
            self._network = AsyncNetworkAPI(self._http)
        return self._network

    network_api = network
