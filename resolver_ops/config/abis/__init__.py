"""
Contract ABI package for the Resolver tooling.

Bundled interface descriptions used when no build artifact is available.
"""

from .erc20 import ERC20_ABI
from .resolver import RESOLVER_ABI

__all__ = [
    'ERC20_ABI',
    'RESOLVER_ABI',
]
