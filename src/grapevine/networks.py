"""
Network Configuration Tables

Maps the SDK's two deployment targets (testnet / mainnet) to the Grapevine
API origin, the x402 network name used for payment selection, and the EVM
chain id reported in authentication headers. Also exposes the x402 network
to chain id table used when building EIP-712 payment domains.
"""

from typing import Dict, Literal

from pydantic import BaseModel, Field

from .exceptions import UnsupportedNetworkError

NetworkName = Literal["testnet", "mainnet"]


class NetworkConfig(BaseModel):
    """Deployment target configuration."""
    name: NetworkName
    api_url: str = Field(..., description="Grapevine API origin")
    x402_network: str = Field(..., description="x402 network identifier used to select payment requirements")
    chain_id: int = Field(..., description="EVM chain id")


NETWORKS: Dict[str, NetworkConfig] = {
    "testnet": NetworkConfig(
        name="testnet",
        api_url="https://api.grapevine.markets",
        x402_network="base-sepolia",
        chain_id=84532,
    ),
    "mainnet": NetworkConfig(
        name="mainnet",
        api_url="https://api.grapevine.fyi",
        x402_network="base",
        chain_id=8453,
    ),
}

# x402 v1 network names and their EVM chain ids
X402_CHAIN_IDS: Dict[str, int] = {
    "base": 8453,
    "base-sepolia": 84532,
    "avalanche": 43114,
    "avalanche-fuji": 43113,
    "polygon": 137,
    "polygon-amoy": 80002,
    "iotex": 4689,
    "sei": 1329,
    "sei-testnet": 1328,
}


def get_network(name: str) -> NetworkConfig:
    """
    Resolve a deployment target by name.

    Raises:
        ValueError: If the name is neither "testnet" nor "mainnet".
    """
    try:
        return NETWORKS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown network {name!r}; expected 'testnet' or 'mainnet'") from exc


def chain_id_for_x402_network(network: str) -> int:
    """
    Return the EVM chain id for an x402 network name.

    Raises:
        UnsupportedNetworkError: If the network is not in the table.
    """
    try:
        return X402_CHAIN_IDS[network]
    except KeyError as exc:
        raise UnsupportedNetworkError(network) from exc

