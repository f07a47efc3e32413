"""Request and response models for the Rosetta network endpoints.

Only the shapes the network sub-client needs are modelled here. Unknown
fields returned by a server are ignored.
"""

from typing import Any

from pydantic import BaseModel, Field


class SubNetworkIdentifier(BaseModel):
    """Identifies a shard or sub-network of a blockchain network."""

    network: str
    metadata: dict[str, Any] | None = None


class NetworkIdentifier(BaseModel):
    """Identifies a blockchain network.

    Attributes:
        blockchain: Name of the blockchain, e.g. "bitcoin".
        network: Name of the network, e.g. "mainnet".
        sub_network_identifier: Optional shard identifier.
    """

    blockchain: str
    network: str
    sub_network_identifier: SubNetworkIdentifier | None = None


class MetadataRequest(BaseModel):
    """Body of requests that carry nothing but optional metadata."""

    metadata: dict[str, Any] | None = None


class NetworkRequest(BaseModel):
    """Body of requests scoped to a single network."""

    network_identifier: NetworkIdentifier
    metadata: dict[str, Any] | None = None


class NetworkListResponse(BaseModel):
    """Response of /network/list.

    Attributes:
        network_identifiers: Every network the server supports.
    """

    network_identifiers: list[NetworkIdentifier] = Field(default_factory=list)


class BlockIdentifier(BaseModel):
    index: int
    hash: str


class Peer(BaseModel):
    peer_id: str
    metadata: dict[str, Any] | None = None


class NetworkStatusResponse(BaseModel):
    """Response of /network/status.

    Attributes:
        current_block_identifier: The tip of the chain as seen by the node.
        current_block_timestamp: Timestamp of that block, ms since epoch.
        genesis_block_identifier: The first block of the chain.
        peers: Nodes the server is connected to.
    """

    current_block_identifier: BlockIdentifier
    current_block_timestamp: int
    genesis_block_identifier: BlockIdentifier
    oldest_block_identifier: BlockIdentifier | None = None
    peers: list[Peer] = Field(default_factory=list)


class Version(BaseModel):
    rosetta_version: str
    node_version: str
    middleware_version: str | None = None
    metadata: dict[str, Any] | None = None


class Error(BaseModel):
    """The error body a Rosetta server returns with a non-success status.

    Attributes:
        code: Implementation-specific error code.
        message: Human-readable description.
        retriable: Whether the server considers the request retriable.
        details: Extra context.
    """

    code: int
    message: str
    description: str | None = None
    retriable: bool = False
    details: dict[str, Any] | None = None


class Allow(BaseModel):
    """What a server implementation supports."""

    operation_statuses: list[dict[str, Any]] = Field(default_factory=list)
    operation_types: list[str] = Field(default_factory=list)
    errors: list[Error] = Field(default_factory=list)
    historical_balance_lookup: bool = False


class NetworkOptionsResponse(BaseModel):
    """Response of /network/options."""

    version: Version
    allow: Allow
