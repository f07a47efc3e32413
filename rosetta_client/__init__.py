"""Rosetta API Client Library.

A Python client for Rosetta API servers whose calls obey one timeout
precedence rule: the sooner of the caller's context deadline and the
configured round-trip timeout wins, and explicit cancellation aborts a call
promptly with a distinct error.

Example:
    Synchronous usage::

        from rosetta_client import APIClient, Configuration, background

        cfg = Configuration(base_url="http://localhost:8080")
        cfg.network_round_trip_timeout = 2.0
        with APIClient(cfg) as client:
            networks = client.network.network_list(background())

Exports:
    APIClient: Synchronous client.
    AsyncAPIClient: Asynchronous client.
    Configuration: Client settings.
    CallContext, background: Caller-owned deadline/cancellation handles.

    Exceptions:
        RosettaClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        DeadlineExceededError: Effective deadline elapsed.
        CanceledError: Caller cancelled the call.
        APIError: Server returned a non-success response.
        ServerError: Server-side error (HTTP 5xx).
"""

__version__ = "0.1.0"

from rosetta_client.configuration import Configuration
from rosetta_client.context import CallContext, background
from rosetta_client.exceptions import (
    CANCELED_MESSAGE,
    DEADLINE_EXCEEDED_MESSAGE,
    APIError,
    CanceledError,
    ConnectionError,
    DeadlineExceededError,
    RosettaClientError,
    ServerError,
)
from rosetta_client.models import (
    Error,
    MetadataRequest,
    NetworkIdentifier,
    NetworkListResponse,
    NetworkOptionsResponse,
    NetworkRequest,
    NetworkStatusResponse,
)
from rosetta_client._network import AsyncNetworkAPI, NetworkAPI
from rosetta_client.client import APIClient, AsyncAPIClient

__all__ = [
    "__version__",
    # Main clients
    "APIClient",
    "AsyncAPIClient",
    "NetworkAPI",
    "AsyncNetworkAPI",
    # Configuration and contexts
    "Configuration",
    "CallContext",
    "background",
    # Exceptions
    "RosettaClientError",
    "ConnectionError",
    "DeadlineExceededError",
    "CanceledError",
    "APIError",
    "ServerError",
    "DEADLINE_EXCEEDED_MESSAGE",
    "CANCELED_MESSAGE",
    # Models
    "Error",
    "MetadataRequest",
    "NetworkIdentifier",
    "NetworkRequest",
    "NetworkListResponse",
    "NetworkStatusResponse",
    "NetworkOptionsResponse",
]
