"""
Operational tooling for the Resolver contract.

Deploys the contract, verifies it on a block explorer and calls its
best-path lookup and swap entry points over JSON-RPC.
"""

__version__ = "0.1.0"
