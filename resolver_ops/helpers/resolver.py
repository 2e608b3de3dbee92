"""
Resolver contract operations.

Public API
----------
find_best_path_exact_in(handle, from_token, to_token, amount_in) -> PathQuote
    Read-only best-path lookup. The contract answers with an unlabeled
    (router, path, amountOut) tuple which is turned into a PathQuote
    right here, so callers never index into raw tuples.
swap_exact_in(handle, request) -> HexBytes
    Sign and submit swapExactIn; returns the pending tx hash without
    waiting for it to be mined.
wait_for_swap(handle, tx_hash, timeout) -> receipt
    Opt-in confirmation wait for a submitted swap.

Path selection and tie-breaking happen inside the contract and are not
reproduced here.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Sequence

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import Web3Exception

from ..config.network import RECEIPT_TIMEOUT
from ..errors import ContractCallError
from .contract_binder import ContractHandle

logger = logging.getLogger(__name__)

__all__ = [
    "PathQuote",
    "SwapRequest",
    "deadline_from_now",
    "find_best_path_exact_in",
    "swap_exact_in",
    "wait_for_swap",
]

DEFAULT_DEADLINE_SECONDS = 600


@dataclass(frozen=True)
class PathQuote:
    router: str
    path: tuple[str, ...]
    amount_out: int

    @classmethod
    def from_raw(cls, raw: Sequence[Any]) -> "PathQuote":
        """Map the contract's positional (router, path, amountOut) result."""
        if len(raw) != 3:
            raise ContractCallError(f"findBestPathExactIn returned {len(raw)} values, expected 3")
        router, path, amount_out = raw
        return cls(
            router=Web3.to_checksum_address(router),
            path=tuple(Web3.to_checksum_address(p) for p in path),
            amount_out=int(amount_out),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "router": self.router,
            "path": list(self.path),
            "amountOut": self.amount_out,
        }


@dataclass(frozen=True)
class SwapRequest:
    router: str
    amount_in: int
    amount_out_min: int
    path: tuple[str, ...]
    recipient: str
    deadline: int

    def __post_init__(self):
        if not self.path:
            raise ValueError("swap path must contain at least one token")
        if self.amount_in < 0 or self.amount_out_min < 0:
            raise ValueError("swap amounts must be non-negative")
        for label, addr in [("router", self.router), ("recipient", self.recipient), *(("path", p) for p in self.path)]:
            if not Web3.is_address(addr):
                raise ValueError(f"Malformed {label} address: {addr!r}")

    def as_args(self) -> tuple:
        """Positional arguments of swapExactIn(router, amountIn, amountOutMin, path, to, deadline)."""
        return (
            Web3.to_checksum_address(self.router),
            int(self.amount_in),
            int(self.amount_out_min),
            [Web3.to_checksum_address(p) for p in self.path],
            Web3.to_checksum_address(self.recipient),
            int(self.deadline),
        )


def deadline_from_now(seconds: int = DEFAULT_DEADLINE_SECONDS) -> int:
    """Return a unix timestamp ``seconds`` in the future."""
    return int(time.time()) + seconds


def find_best_path_exact_in(
    handle: ContractHandle,
    from_token: str,
    to_token: str,
    amount_in: int,
) -> PathQuote:
    """Ask the Resolver for the best route for ``amount_in`` of ``from_token``.

    Raises:
        ContractCallError: If the call reverts or returns malformed data.
    """
    logger.debug(f"findBestPathExactIn({from_token}, {to_token}, {amount_in})")
    try:
        raw = handle.functions.findBestPathExactIn(
            Web3.to_checksum_address(from_token),
            Web3.to_checksum_address(to_token),
            int(amount_in),
        ).call({"from": handle.signer.address})
    except Web3Exception as err:
        raise ContractCallError(f"findBestPathExactIn failed: {err}") from err

    return PathQuote.from_raw(raw)


def swap_exact_in(handle: ContractHandle, request: SwapRequest) -> HexBytes:
    """Submit swapExactIn and return the pending transaction hash.

    The deadline is enforced on chain; an expired one usually surfaces
    here as a revert during gas estimation.

    Raises:
        ContractCallError: If building or submitting the transaction fails.
    """
    signer = handle.signer
    try:
        tx = handle.functions.swapExactIn(*request.as_args()).build_transaction(signer.base_tx())
        return signer.send(tx)
    except Web3Exception as err:
        raise ContractCallError(f"swapExactIn submission failed: {err}") from err


def wait_for_swap(handle: ContractHandle, tx_hash: HexBytes, timeout: int = RECEIPT_TIMEOUT):
    """Block until the swap is mined.

    Raises:
        ContractCallError: If the transaction reverted.
    """
    receipt = handle.signer.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
    if receipt["status"] != 1:
        raise ContractCallError(f"swapExactIn reverted in block {receipt['blockNumber']}: {tx_hash.to_0x_hex()}")
    logger.info(f"Swap mined in block {receipt['blockNumber']} (gas used {receipt['gasUsed']:,})")
    return receipt
