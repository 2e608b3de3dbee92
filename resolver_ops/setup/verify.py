#!/usr/bin/env python3
"""
Verify a deployed contract on an Etherscan-compatible explorer.

Submits the Hardhat build-info standard-json input (so imports and compiler
settings match the deployed bytecode exactly), then polls the verification
status. Uses the Etherscan v2 multichain API, selected by chain id.
"""
from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import requests
from eth_abi import encode

from ..config.artifacts import BuildInfo, ContractArtifact
from ..config.network import address_url, get_chain_config
from ..errors import VerificationError

logger = logging.getLogger(__name__)

__all__ = ["VerificationResult", "encode_constructor_args", "verify_contract"]

POLL_INTERVAL = 5  # seconds
MAX_POLLS = 12  # about one minute
REQUEST_TIMEOUT = 30  # seconds


@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    message: str
    guid: str | None = None


def encode_constructor_args(artifact: ContractArtifact, args: Sequence[Any] = ()) -> str:
    """ABI-encode constructor arguments as hex without 0x (empty for no inputs)."""
    inputs = artifact.constructor_inputs
    if len(inputs) != len(args):
        raise VerificationError(
            f"{artifact.contract_name} constructor takes {len(inputs)} arguments, got {len(args)}"
        )
    if not inputs:
        return ""
    return encode([i["type"] for i in inputs], list(args)).hex()


def _api_call(method: str, api_url: str, **kwargs) -> dict[str, Any]:
    try:
        response = requests.request(method, api_url, timeout=REQUEST_TIMEOUT, **kwargs)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as err:
        raise VerificationError(f"Explorer API request failed: {err}") from err
    except ValueError as err:
        raise VerificationError(f"Explorer API returned non-JSON response: {err}") from err


def _already_verified(result: Any) -> bool:
    return "already verified" in str(result).lower()


def verify_contract(
    address: str,
    artifact: ContractArtifact,
    build_info: BuildInfo,
    *,
    chain: str,
    api_key: str | None,
    constructor_args: Sequence[Any] = (),
    poll_interval: float = POLL_INTERVAL,
    max_polls: int = MAX_POLLS,
    sleep: Callable[[float], None] = time.sleep,
) -> VerificationResult:
    """Submit ``address`` for source verification and wait for the verdict.

    An explorer rejection is reported in the result, not raised.

    Raises:
        VerificationError: If the explorer API cannot be reached.
    """
    chain_config = get_chain_config(chain)
    explorer = chain_config["explorer"]
    if explorer is None:
        logger.warning(f"{chain} has no block explorer, skipping verification")
        return VerificationResult(False, f"no explorer for {chain}")
    if not api_key:
        logger.warning("ETHERSCAN_API_KEY not set, skipping verification")
        return VerificationResult(False, "no explorer API key")

    api_url = explorer["api_url"]
    chain_id = chain_config["chain_id"]

    verification_data = {
        "apikey": api_key,
        "module": "contract",
        "action": "verifysourcecode",
        "contractaddress": address,
        "sourceCode": json.dumps(build_info.input),
        "codeformat": "solidity-standard-json-input",
        "contractname": artifact.fully_qualified_name,
        "compilerversion": build_info.compiler_version,
        "constructorArguements": encode_constructor_args(artifact, constructor_args),
    }

    logger.info(f"Submitting {artifact.fully_qualified_name} at {address} to {explorer['name']}")
    result = _api_call("POST", api_url, params={"chainid": chain_id}, data=verification_data)

    if result.get("status") != "1":
        message = str(result.get("result", "Unknown error"))
        if _already_verified(message):
            logger.info(f"{address} is already verified")
            return VerificationResult(True, message)
        logger.warning(f"Verification submission rejected: {message}")
        return VerificationResult(False, message)

    guid = result["result"]
    logger.info(f"Verification submitted, GUID: {guid}")

    check_params = {
        "chainid": chain_id,
        "apikey": api_key,
        "module": "contract",
        "action": "checkverifystatus",
        "guid": guid,
    }
    message = "Pending"
    for _ in range(max_polls):
        sleep(poll_interval)
        check = _api_call("GET", api_url, params=check_params)
        message = str(check.get("result", "Unknown"))

        if check.get("status") == "1" or _already_verified(message):
            logger.info(f"Contract verified: {address_url(address, chain)}")
            return VerificationResult(True, message, guid)
        if "pending" in message.lower():
            logger.debug(f"Status: {message}")
            continue
        logger.warning(f"Verification failed: {message}")
        return VerificationResult(False, message, guid)

    logger.warning(f"Verification still pending after {max_polls} checks; check {address_url(address, chain)}")
    return VerificationResult(False, f"timed out: {message}", guid)
