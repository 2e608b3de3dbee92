"""
Contract binding.

Binds an address and ABI to a signer. Nothing is checked on chain here: an
address that hosts different code only fails once a method is called.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from web3 import Web3
from web3.contract import Contract

from ..errors import ContractBindError
from .signer import Signer

logger = logging.getLogger(__name__)

__all__ = ["ContractHandle", "fetch_contract"]


@dataclass(frozen=True)
class ContractHandle:
    address: str
    signer: Signer
    contract: Contract

    @property
    def functions(self):
        return self.contract.functions


def fetch_contract(address: str, abi: list[dict[str, Any]], signer: Signer) -> ContractHandle:
    """Bind ``abi`` at ``address`` to ``signer``'s provider.

    Raises:
        ContractBindError: If ``address`` is not a 20-byte hex address.
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ContractBindError(f"Malformed contract address: {address!r}")

    checksummed = Web3.to_checksum_address(address)
    contract = signer.w3.eth.contract(address=checksummed, abi=abi)
    logger.info(f"loaded contract {checksummed}")
    return ContractHandle(address=checksummed, signer=signer, contract=contract)
