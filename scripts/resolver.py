#!/usr/bin/env python3
"""
Quote the best Resolver path (10 USDC -> USDT on Polygon unless told otherwise).

Usage:
    python -m scripts resolver [--from USDC --to USDT --amount 10]
"""
import sys

from resolver_ops.setup.cli import main as cli_main


def main():
    return cli_main(["quote", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
