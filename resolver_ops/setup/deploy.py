#!/usr/bin/env python3
"""
Deploy the Resolver contract.

Sends a contract-creation transaction built from the Hardhat artifact (the
constructor takes no arguments), waits for the receipt and returns the
deployed address. The caller records it in the address book.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from web3 import Web3

from ..config.artifacts import ContractArtifact
from ..config.network import RECEIPT_TIMEOUT
from ..errors import DeploymentError
from ..helpers.signer import Signer

logger = logging.getLogger(__name__)

__all__ = ["DeploymentResult", "deploy_resolver"]


@dataclass(frozen=True)
class DeploymentResult:
    contract_name: str
    address: str
    tx_hash: str
    block_number: int
    gas_used: int
    deployer: str
    deployed_at: str

    def as_dict(self) -> dict:
        return asdict(self)


def deploy_resolver(
    signer: Signer,
    artifact: ContractArtifact,
    *,
    timeout: int = RECEIPT_TIMEOUT,
) -> DeploymentResult:
    """Deploy ``artifact`` with no constructor arguments and wait for confirmation.

    Raises:
        DeploymentError: If the creation transaction reverted or produced no address.
    """
    w3 = signer.w3
    factory = w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    logger.info(f"Deploying {artifact.contract_name} from {signer.address}")
    tx = factory.constructor().build_transaction(signer.base_tx())
    tx_hash = signer.send(tx)

    logger.info("Waiting for confirmation...")
    receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

    if receipt["status"] != 1:
        raise DeploymentError(
            f"{artifact.contract_name} deployment reverted in block {receipt['blockNumber']}: {tx_hash.to_0x_hex()}"
        )
    address = receipt.get("contractAddress")
    if not address:
        raise DeploymentError(f"Receipt for {tx_hash.to_0x_hex()} has no contract address")

    result = DeploymentResult(
        contract_name=artifact.contract_name,
        address=Web3.to_checksum_address(address),
        tx_hash=tx_hash.to_0x_hex(),
        block_number=int(receipt["blockNumber"]),
        gas_used=int(receipt["gasUsed"]),
        deployer=signer.address,
        deployed_at=datetime.now(timezone.utc).isoformat(),
    )
    logger.info(f"{artifact.contract_name} deployed at {result.address} (gas used {result.gas_used:,})")
    return result
