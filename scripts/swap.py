#!/usr/bin/env python3
"""
Submit swapExactIn through the deployed Resolver.

Usage:
    python -m scripts swap --router 0x.. --amount-in 10 --amount-out-min 9.9 --path USDC USDT
"""
import sys

from resolver_ops.setup.cli import main as cli_main


def main():
    return cli_main(["swap", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
