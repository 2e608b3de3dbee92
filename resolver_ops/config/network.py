"""
Network configuration for the Resolver tooling.

Contains chain ids, default RPC URLs and block-explorer endpoints.
A single chain is selected per invocation (CHAIN env var or --chain).
"""

from typing import Any


# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

CHAINS: dict[str, dict[str, Any]] = {
    "polygon": {
        "chain_id": 137,
        "name": "Polygon",
        "currency": "POL",
        "poa": True,
        "rpc_urls": [
            "https://polygon-rpc.com",
            "https://polygon.publicnode.com",
            "https://rpc.ankr.com/polygon",
        ],
        "explorer": {
            "name": "Polygonscan",
            "url": "https://polygonscan.com",
            "api_url": "https://api.etherscan.io/v2/api",
        },
    },
    "amoy": {
        "chain_id": 80002,
        "name": "Polygon Amoy",
        "currency": "POL",
        "poa": True,
        "rpc_urls": [
            "https://rpc-amoy.polygon.technology",
            "https://polygon-amoy.publicnode.com",
        ],
        "explorer": {
            "name": "Polygonscan Amoy",
            "url": "https://amoy.polygonscan.com",
            "api_url": "https://api.etherscan.io/v2/api",
        },
    },
    "ethereum": {
        "chain_id": 1,
        "name": "Ethereum",
        "currency": "ETH",
        "poa": False,
        "rpc_urls": [
            "https://ethereum.publicnode.com",
            "https://rpc.ankr.com/eth",
        ],
        "explorer": {
            "name": "Etherscan",
            "url": "https://etherscan.io",
            "api_url": "https://api.etherscan.io/v2/api",
        },
    },
    "localhost": {
        "chain_id": 31337,
        "name": "Hardhat Network",
        "currency": "ETH",
        "poa": False,
        "rpc_urls": [
            "http://127.0.0.1:8545",
        ],
        "explorer": None,  # Nothing to verify against
    },
}

DEFAULT_CHAIN = "polygon"

GAS_LIMIT_BUFFER: float = 1.2  # 20% buffer over web3's gas estimate
RECEIPT_TIMEOUT: int = 300  # seconds


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(chain: str) -> dict[str, Any]:
    """Get configuration for a specific chain.

    Args:
        chain: Chain name (e.g., 'polygon', 'localhost'), case-insensitive.

    Raises:
        ValueError: If chain is not supported.
    """
    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unsupported chain: {chain}. Supported: {list(CHAINS.keys())}")

    return CHAINS[chain]


def get_explorer_url(chain: str) -> str | None:
    """Get the block explorer URL for a chain (None when it has no explorer)."""
    explorer = get_chain_config(chain)["explorer"]
    return explorer["url"] if explorer else None


def tx_url(tx_hash: str, chain: str) -> str | None:
    base = get_explorer_url(chain)
    return f"{base}/tx/{tx_hash}" if base else None


def address_url(address: str, chain: str) -> str | None:
    base = get_explorer_url(chain)
    return f"{base}/address/{address}#code" if base else None
