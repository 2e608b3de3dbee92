#!/usr/bin/env python3
"""
Verify the deployed Resolver on the chain's block explorer.

Reads the address from deployments/<chain>.json unless --address is given.
Needs ETHERSCAN_API_KEY and the Hardhat build-info next to the artifact.

Usage:
    python -m scripts verify_contract [--address 0x..]
"""
import sys

from resolver_ops.setup.cli import main as cli_main


def main():
    return cli_main(["verify", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
