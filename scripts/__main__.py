#!/usr/bin/env python3
"""
Entry point for running scripts as a module.

Usage:
    python -m scripts                    # Show available commands
    python -m scripts deploy             # Deploy Resolver
    python -m scripts resolver           # Quote the best path
"""
import sys


def main():
    """Main entry point for scripts module."""
    available_commands = {
        "deploy": "Deploy the Resolver contract and verify it",
        "resolver": "Quote the best path through the deployed Resolver",
        "swap": "Submit swapExactIn through the deployed Resolver",
        "verify_contract": "Verify contract on block explorer",
    }

    if len(sys.argv) < 2:
        print("Usage: python -m scripts <command>")
        print("\nAvailable commands:")
        for cmd, desc in available_commands.items():
            print(f"  {cmd:30} - {desc}")
        print("\nExample: python -m scripts resolver --amount 10")
        sys.exit(0)

    command = sys.argv[1]

    # Remove the command from argv so submodules see correct args
    sys.argv = [f"scripts.{command}"] + sys.argv[2:]

    if command == "deploy":
        from scripts.deploy import main as run
    elif command == "resolver":
        from scripts.resolver import main as run
    elif command == "swap":
        from scripts.swap import main as run
    elif command == "verify_contract":
        from scripts.verify_contract import main as run
    else:
        print(f"Unknown command: {command}")
        print("Run 'python -m scripts' to see available commands.")
        sys.exit(1)

    sys.exit(run())


if __name__ == "__main__":
    main()
