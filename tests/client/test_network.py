"""Unit tests for NetworkAPI and AsyncNetworkAPI.

This module tests the network sub-clients defined in rosetta_client/_network.py.
The tests verify:

1. Response Models: parsing of /network/* responses
2. NetworkAPI: endpoint paths, request bodies and the caller's context being
   passed through unchanged
3. AsyncNetworkAPI: same functionality, awaitable

Note: These tests use mock HTTP clients to avoid real network calls.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rosetta_client._network import AsyncNetworkAPI, NetworkAPI
from rosetta_client.context import background
from rosetta_client.models import (
    MetadataRequest,
    NetworkIdentifier,
    NetworkListResponse,
    NetworkOptionsResponse,
    NetworkRequest,
    NetworkStatusResponse,
)


NETWORK_LIST = {
    "network_identifiers": [
        {"blockchain": "bitcoin", "network": "mainnet"},
        {
            "blockchain": "ethereum",
            "network": "mainnet",
            "sub_network_identifier": {"network": "shard 1"},
        },
    ]
}

NETWORK_STATUS = {
    "current_block_identifier": {"index": 1000, "hash": "0xabc"},
    "current_block_timestamp": 1700000000000,
    "genesis_block_identifier": {"index": 0, "hash": "0x000"},
    "peers": [{"peer_id": "peer-1"}],
}

NETWORK_OPTIONS = {
    "version": {"rosetta_version": "1.4.13", "node_version": "1.0.2"},
    "allow": {
        "operation_statuses": [{"status": "SUCCESS", "successful": True}],
        "operation_types": ["TRANSFER"],
        "errors": [{"code": 12, "message": "Invalid account", "retriable": True}],
        "historical_balance_lookup": True,
    },
}

BITCOIN = NetworkRequest(network_identifier=NetworkIdentifier(blockchain="bitcoin", network="mainnet"))


# =============================================================================
# Response Model Tests
# =============================================================================

class TestResponseModels:

    def test_network_list_response(self) -> None:
        response = NetworkListResponse(**NETWORK_LIST)

        assert len(response.network_identifiers) == 2
        assert response.network_identifiers[1].sub_network_identifier.network == "shard 1"

    def test_network_status_response(self) -> None:
        response = NetworkStatusResponse(**NETWORK_STATUS)

        assert response.current_block_identifier.index == 1000
        assert response.oldest_block_identifier is None
        assert response.peers[0].peer_id == "peer-1"

    def test_network_options_response(self) -> None:
        response = NetworkOptionsResponse(**NETWORK_OPTIONS)

        assert response.version.rosetta_version == "1.4.13"
        assert response.allow.errors[0].retriable is True


# =============================================================================
# NetworkAPI Tests (Synchronous)
# =============================================================================

class TestNetworkAPI:

    def test_network_list(self) -> None:
        http = MagicMock()
        http.post.return_value = NETWORK_LIST
        ctx = background()

        result = NetworkAPI(http).network_list(ctx, MetadataRequest())

        assert isinstance(result, NetworkListResponse)
        http.post.assert_called_once_with(ctx, "/network/list", json={})

    def test_network_list_default_request(self) -> None:
        http = MagicMock()
        http.post.return_value = NETWORK_LIST

        NetworkAPI(http).network_list(background())

        assert http.post.call_args.kwargs["json"] == {}

    def test_network_list_sends_metadata(self) -> None:
        http = MagicMock()
        http.post.return_value = NETWORK_LIST

        NetworkAPI(http).network_list(background(), MetadataRequest(metadata={"k": "v"}))

        assert http.post.call_args.kwargs["json"] == {"metadata": {"k": "v"}}

    def test_network_status(self) -> None:
        http = MagicMock()
        http.post.return_value = NETWORK_STATUS
        ctx = background()

        result = NetworkAPI(http).network_status(ctx, BITCOIN)

        assert result.genesis_block_identifier.hash == "0x000"
        http.post.assert_called_once_with(
            ctx,
            "/network/status",
            json={"network_identifier": {"blockchain": "bitcoin", "network": "mainnet"}},
        )

    def test_network_options(self) -> None:
        http = MagicMock()
        http.post.return_value = NETWORK_OPTIONS

        result = NetworkAPI(http).network_options(background(), BITCOIN)

        assert result.allow.operation_types == ["TRANSFER"]
        assert http.post.call_args.args[1] == "/network/options"


# =============================================================================
# AsyncNetworkAPI Tests
# =============================================================================

class TestAsyncNetworkAPI:

    async def test_network_list(self) -> None:
        http = MagicMock()
        http.post = AsyncMock(return_value=NETWORK_LIST)
        ctx = background()

        result = await AsyncNetworkAPI(http).network_list(ctx, MetadataRequest())

        assert result.network_identifiers[0].blockchain == "bitcoin"
        http.post.assert_awaited_once_with(ctx, "/network/list", json={})

    async def test_network_status(self) -> None:
        http = MagicMock()
        http.post = AsyncMock(return_value=NETWORK_STATUS)

        result = await AsyncNetworkAPI(http).network_status(background(), BITCOIN)

        assert result.current_block_timestamp == 1700000000000

    async def test_network_options(self) -> None:
        http = MagicMock()
        http.post = AsyncMock(return_value=NETWORK_OPTIONS)

        result = await AsyncNetworkAPI(http).network_options(background(), BITCOIN)

        assert result.version.node_version == "1.0.2"

    async def test_errors_propagate(self) -> None:
        from rosetta_client.exceptions import DeadlineExceededError

        http = MagicMock()
        http.post = AsyncMock(side_effect=DeadlineExceededError())

        with pytest.raises(DeadlineExceededError):
            await AsyncNetworkAPI(http).network_list(background())
