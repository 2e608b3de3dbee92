"""
Web3 setup helper - provides the web3 instance for a run.

Public API
----------
get_web3_instance(rpc_url, poa=False)
    Return a Web3 instance for the specified RPC URL, with the
    proof-of-authority extra-data middleware injected when ``poa`` is set.
"""
from __future__ import annotations

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

__all__ = ["get_web3_instance"]

HTTP_TIMEOUT = 30  # seconds


def get_web3_instance(rpc_url: str, poa: bool = False) -> Web3:
    """
    Get a Web3 instance for the specified RPC URL.

    Every run builds its own instance; nothing is cached between runs.

    Args:
        rpc_url: JSON-RPC endpoint
        poa: Inject ExtraDataToPOAMiddleware (Polygon, Gnosis and other PoA chains)

    Returns:
        Web3 instance (not yet checked for connectivity)
    """
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": HTTP_TIMEOUT}))
    if poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3
