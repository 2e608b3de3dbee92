"""
Signer resolution.

Turns the configured RPC endpoint and private key into a Signer: a local
account bound to exactly one web3 provider. The endpoint is checked before
the key is parsed, so a dead endpoint never reaches contract binding.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3

from ..config.network import GAS_LIMIT_BUFFER, get_chain_config
from ..config.settings import Settings
from ..errors import ChainMismatchError, InvalidPrivateKeyError, RpcConnectionError
from .web3_setup import get_web3_instance

logger = logging.getLogger(__name__)

__all__ = ["Signer", "fetch_signer", "connect", "load_account"]


@dataclass(frozen=True)
class Signer:
    account: LocalAccount
    w3: Web3

    @property
    def address(self) -> str:
        return self.account.address

    def base_tx(self) -> dict[str, Any]:
        """Transaction fields every signed call starts from."""
        return {
            "from": self.address,
            "nonce": self.w3.eth.get_transaction_count(self.address, "pending"),
        }

    def send(self, tx: dict[str, Any]) -> HexBytes:
        """Sign a built transaction, broadcast it and return its hash.

        ``tx`` is the output of web3's ``build_transaction``; its gas estimate
        gets a safety buffer before signing.
        """
        tx = dict(tx)
        if "gas" in tx:
            tx["gas"] = int(tx["gas"] * GAS_LIMIT_BUFFER)
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info(f"Transaction sent: {tx_hash.to_0x_hex()}")
        return tx_hash


def _normalize_privkey_hex(pk: str) -> str:
    if not isinstance(pk, str):
        raise ValueError("private key must be a hex string")
    pk = pk.strip()
    if pk.startswith("0x"):
        pk = pk[2:]
    if len(pk) != 64:
        raise ValueError("private key hex must be 64 characters (32 bytes)")
    try:
        int(pk, 16)
    except ValueError:
        # int() echoes its input, which here is the key
        raise ValueError("private key is not valid hex") from None
    return "0x" + pk


def load_account(private_key: str | None) -> LocalAccount:
    """Parse key material into a local account.

    Raises:
        InvalidPrivateKeyError: If the key is missing or malformed. The key
            itself never appears in the message.
    """
    if not private_key:
        raise InvalidPrivateKeyError("PRIVATE_KEY is not set")
    try:
        return Account.from_key(_normalize_privkey_hex(private_key))
    except (ValueError, TypeError) as err:
        raise InvalidPrivateKeyError(f"Invalid private key: {err}") from None


def connect(rpc_url: str, chain: str) -> Web3:
    """Open the provider for ``rpc_url`` and check it serves ``chain``.

    Raises:
        RpcConnectionError: If the endpoint is unreachable or malformed.
        ChainMismatchError: If the endpoint serves another chain.
    """
    chain_config = get_chain_config(chain)
    try:
        w3 = get_web3_instance(rpc_url, poa=chain_config["poa"])
        connected = w3.is_connected()
    except Exception as err:
        raise RpcConnectionError(f"Cannot use RPC endpoint {rpc_url}: {err}") from err
    if not connected:
        raise RpcConnectionError(f"Failed to connect to RPC endpoint {rpc_url}")

    try:
        chain_id = w3.eth.chain_id
    except Exception as err:
        raise RpcConnectionError(f"RPC endpoint {rpc_url} did not answer eth_chainId: {err}") from err
    if chain_id != chain_config["chain_id"]:
        raise ChainMismatchError(
            f"RPC endpoint serves chain id {chain_id}, expected {chain_config['chain_id']} ({chain})"
        )
    return w3


def fetch_signer(settings: Settings) -> Signer:
    """Resolve the signing identity for this run.

    Single attempt: any failure propagates immediately.
    """
    w3 = connect(settings.rpc_url, settings.chain)
    account = load_account(settings.private_key)
    signer = Signer(account=account, w3=w3)
    logger.info(f"connected to {signer.address}")
    return signer
