"""On-chain ERC-20 metadata lookups."""
from __future__ import annotations

import logging

from web3 import Web3
from web3.exceptions import Web3Exception

from ..config.abis import ERC20_ABI
from ..config.tokens import TokenInfo
from ..errors import ContractCallError

logger = logging.getLogger(__name__)


def fetch_decimals(w3: Web3, token_address: str) -> int:
    """Read ``decimals()`` from the token contract."""
    token = w3.eth.contract(address=Web3.to_checksum_address(token_address), abi=ERC20_ABI)
    try:
        decimals = int(token.functions.decimals().call())
    except Web3Exception as err:
        raise ContractCallError(f"decimals() failed for {token_address}: {err}") from err
    logger.debug(f"{token_address} has {decimals} decimals (on-chain)")
    return decimals


def token_decimals(w3: Web3, token: TokenInfo, override: int | None = None) -> int:
    """Decimals for ``token``: explicit override, then config, then on-chain."""
    if override is not None:
        return override
    if token.decimals is not None:
        return token.decimals
    return fetch_decimals(w3, token.address)
