#!/usr/bin/env python3
"""
Command line entry point.

Usage
  python -m resolver_ops.setup.cli deploy [--no-verify]
  python -m resolver_ops.setup.cli quote --from USDC --to USDT --amount 10
  python -m resolver_ops.setup.cli swap --router 0x.. --amount-in 10 --amount-out-min 9.9 \
      --path USDC USDT [--deadline-in 600] [--wait]
  python -m resolver_ops.setup.cli verify [--address 0x..]
  python -m resolver_ops.setup.cli address [resolver]

Every command is one unit of work. Results go to stdout as JSON, progress and
errors to stderr. Exit code 0 on success, 1 on any failure, 2 on usage errors.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from ..config.artifacts import load_artifact, load_build_info, resolve_abi
from ..config.contracts import AddressBook
from ..config.logging_config import get_cli_logger
from ..config.network import CHAINS, RECEIPT_TIMEOUT, address_url, tx_url
from ..config.settings import Settings
from ..config.tokens import DEFAULT_QUOTE, format_units, parse_units, resolve_token
from ..errors import ArtifactError, ContractCallError, ResolverOpsError, VerificationError
from ..helpers.contract_binder import fetch_contract
from ..helpers.erc20 import token_decimals
from ..helpers.resolver import (
    DEFAULT_DEADLINE_SECONDS,
    SwapRequest,
    deadline_from_now,
    find_best_path_exact_in,
    swap_exact_in,
    wait_for_swap,
)
from ..helpers.signer import fetch_signer
from .deploy import deploy_resolver
from .verify import verify_contract

logger = logging.getLogger(__name__)

RESOLVER = "resolver"


def _emit(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def _address_book(settings: Settings) -> AddressBook:
    return AddressBook(settings.chain, settings.deployments_dir, {RESOLVER: settings.resolver_address})


def _try_verify(settings: Settings, address: str) -> bool:
    """Post-deploy verification: the outcome is logged, never fatal."""
    try:
        artifact = load_artifact(settings.artifact_path)
        build_info = load_build_info(artifact.path)
        result = verify_contract(
            address,
            artifact,
            build_info,
            chain=settings.chain,
            api_key=settings.explorer_api_key,
        )
    except (ArtifactError, VerificationError) as err:
        logger.warning(f"Verification skipped: {err}")
        return False
    return result.verified


def cmd_deploy(args: argparse.Namespace, settings: Settings) -> int:
    settings.validate()
    artifact = load_artifact(settings.artifact_path)
    signer = fetch_signer(settings)

    result = deploy_resolver(signer, artifact, timeout=args.timeout)
    logger.info(f"Resolver deployed at {result.address}")

    book = _address_book(settings)
    path = book.record_deployment(
        RESOLVER,
        result.address,
        tx_hash=result.tx_hash,
        block_number=result.block_number,
        deployer=result.deployer,
        gas_used=result.gas_used,
    )
    logger.info(f"Address book updated: {path}")

    verified = False if args.no_verify else _try_verify(settings, result.address)

    _emit({
        RESOLVER: result.address,
        "tx": result.tx_hash,
        "block": result.block_number,
        "gasUsed": result.gas_used,
        "explorer": address_url(result.address, settings.chain),
        "verified": verified,
    })
    return 0


def cmd_quote(args: argparse.Namespace, settings: Settings) -> int:
    settings.validate()
    from_token = resolve_token(args.from_token, settings.chain)
    to_token = resolve_token(args.to_token, settings.chain)
    resolver_address = _address_book(settings).get(RESOLVER)

    signer = fetch_signer(settings)
    resolver = fetch_contract(resolver_address, resolve_abi(settings.artifact_path), signer)

    amount_in = int(args.amount) if args.raw else parse_units(
        args.amount, token_decimals(signer.w3, from_token, args.decimals)
    )
    quote = find_best_path_exact_in(resolver, from_token.address, to_token.address, amount_in)

    payload = quote.as_dict()
    payload["amountIn"] = int(amount_in)
    if not args.raw:
        try:
            payload["amountOutFormatted"] = format_units(quote.amount_out, token_decimals(signer.w3, to_token))
        except ContractCallError as err:
            logger.warning(f"Cannot format amountOut: {err}")
    _emit(payload)
    return 0


def cmd_swap(args: argparse.Namespace, settings: Settings) -> int:
    settings.validate()
    path = [resolve_token(t, settings.chain) for t in args.path]
    resolver_address = _address_book(settings).get(RESOLVER)

    signer = fetch_signer(settings)
    resolver = fetch_contract(resolver_address, resolve_abi(settings.artifact_path), signer)

    if args.raw:
        amount_in, amount_out_min = int(args.amount_in), int(args.amount_out_min)
    else:
        amount_in = parse_units(args.amount_in, token_decimals(signer.w3, path[0], args.decimals))
        amount_out_min = parse_units(args.amount_out_min, token_decimals(signer.w3, path[-1]))

    deadline = args.deadline if args.deadline is not None else deadline_from_now(args.deadline_in)
    request = SwapRequest(
        router=args.router,
        amount_in=amount_in,
        amount_out_min=amount_out_min,
        path=tuple(t.address for t in path),
        recipient=args.to or signer.address,
        deadline=deadline,
    )

    tx_hash = swap_exact_in(resolver, request)
    payload = {
        "tx": tx_hash.to_0x_hex(),
        "explorer": tx_url(tx_hash.to_0x_hex(), settings.chain),
        "deadline": request.deadline,
        "status": "pending",
    }
    if args.wait:
        receipt = wait_for_swap(resolver, tx_hash, timeout=args.timeout)
        payload["status"] = "mined"
        payload["block"] = int(receipt["blockNumber"])
    _emit(payload)
    return 0


def cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    settings.validate(require_key=False)
    address = args.address or _address_book(settings).get(RESOLVER)
    artifact = load_artifact(settings.artifact_path)
    build_info = load_build_info(artifact.path)

    result = verify_contract(
        address,
        artifact,
        build_info,
        chain=settings.chain,
        api_key=settings.explorer_api_key,
    )
    _emit({
        "address": address,
        "verified": result.verified,
        "message": result.message,
        "guid": result.guid,
    })
    return 0 if result.verified else 1


def cmd_address(args: argparse.Namespace, settings: Settings) -> int:
    book = _address_book(settings)
    names = [args.name] if args.name else (book.names() or [RESOLVER])
    _emit({name: book.get(name) for name in names})
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--env-file", help="Path to .env file to load before resolving env and RPC")
    common.add_argument("--rpc-url", help="Override RPC URL (defaults to RPC_URL or the chain's public RPC)")
    common.add_argument("--chain", choices=sorted(CHAINS), help="Target chain (defaults to CHAIN or polygon)")
    common.add_argument("--artifact", help="Hardhat artifact JSON (default artifacts/contracts/Resolver.sol/Resolver.json)")
    common.add_argument("--deployments-dir", help="Directory holding <chain>.json address books (default deployments)")
    common.add_argument("--log-dir", help="Also write rotating log files into this directory")
    common.add_argument("--debug", action="store_true", help="Verbose logging")

    parser = argparse.ArgumentParser(
        prog="resolver-ops",
        description="Deploy, verify and call the Resolver contract",
    )
    sub = parser.add_subparsers(dest="cmd")

    # deploy
    p_deploy = sub.add_parser("deploy", parents=[common], help="Deploy Resolver and record its address")
    p_deploy.add_argument("--no-verify", action="store_true", help="Skip block-explorer verification")
    p_deploy.add_argument("--timeout", type=int, default=RECEIPT_TIMEOUT, help="Wait timeout (seconds) for the deployment receipt")
    p_deploy.set_defaults(func=cmd_deploy)

    # quote
    p_quote = sub.add_parser("quote", parents=[common], help="Find the best path for an exact input amount")
    p_quote.add_argument("--from", dest="from_token", default=DEFAULT_QUOTE["from"], help="Input token symbol or address")
    p_quote.add_argument("--to", dest="to_token", default=DEFAULT_QUOTE["to"], help="Output token symbol or address")
    p_quote.add_argument("--amount", default=DEFAULT_QUOTE["amount"], help="Input amount in token units (e.g. 10)")
    p_quote.add_argument("--decimals", type=int, help="Input token decimals (default: config, then on-chain)")
    p_quote.add_argument("--raw", action="store_true", help="--amount is already an integer base-unit amount")
    p_quote.set_defaults(func=cmd_quote)

    # swap
    p_swap = sub.add_parser("swap", parents=[common], help="Submit swapExactIn through the Resolver")
    p_swap.add_argument("--router", required=True, help="Router address returned by quote")
    p_swap.add_argument("--amount-in", required=True, help="Input amount in token units")
    p_swap.add_argument("--amount-out-min", required=True, help="Minimum output amount in token units")
    p_swap.add_argument("--path", nargs="+", required=True, help="Token path (symbols or addresses), first is the input")
    p_swap.add_argument("--to", help="Recipient (default: signer address)")
    deadline = p_swap.add_mutually_exclusive_group()
    deadline.add_argument("--deadline", type=int, help="Absolute unix deadline")
    deadline.add_argument("--deadline-in", type=int, default=DEFAULT_DEADLINE_SECONDS, help="Deadline as seconds from now (default 600)")
    p_swap.add_argument("--decimals", type=int, help="Input token decimals (default: config, then on-chain)")
    p_swap.add_argument("--raw", action="store_true", help="Amounts are already integer base-unit amounts")
    p_swap.add_argument("--wait", action="store_true", help="Wait for the swap to be mined")
    p_swap.add_argument("--timeout", type=int, default=RECEIPT_TIMEOUT, help="Wait timeout (seconds) with --wait")
    p_swap.set_defaults(func=cmd_swap)

    # verify
    p_verify = sub.add_parser("verify", parents=[common], help="Verify a deployed Resolver on the block explorer")
    p_verify.add_argument("--address", help="Contract address (default: address book entry)")
    p_verify.set_defaults(func=cmd_verify)

    # address
    p_addr = sub.add_parser("address", parents=[common], help="Show recorded contract addresses")
    p_addr.add_argument("name", nargs="?", help="Logical contract name (default: all)")
    p_addr.set_defaults(func=cmd_address)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    try:
        settings = Settings.from_env(
            args.env_file,
            rpc_url=args.rpc_url,
            chain=args.chain,
            artifact_path=args.artifact,
            deployments_dir=args.deployments_dir,
            log_dir=args.log_dir,
        )
    except ResolverOpsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log = get_cli_logger(debug=args.debug, log_dir=settings.log_dir)
    log.debug(f"Settings: {settings}")

    try:
        return int(args.func(args, settings))
    except (ResolverOpsError, ValueError) as e:
        log.error(f"{type(e).__name__}: {e}", exc_info=args.debug)
        return 1
    except Exception as e:
        log.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
