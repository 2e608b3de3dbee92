#!/usr/bin/env python3
"""
Deploy the Resolver contract, record its address and verify it.

Usage:
    python -m scripts deploy [--chain polygon] [--no-verify]
"""
import sys

from resolver_ops.setup.cli import main as cli_main


def main():
    return cli_main(["deploy", *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
