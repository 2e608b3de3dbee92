"""
Configuration package for the Resolver tooling.
"""

from resolver_ops.config.network import (
    CHAINS,
    DEFAULT_CHAIN,
    GAS_LIMIT_BUFFER,
    RECEIPT_TIMEOUT,
    get_chain_config,
    get_explorer_url,
    tx_url,
    address_url,
)

from resolver_ops.config.contracts import AddressBook

from resolver_ops.config.tokens import (
    TOKEN_CONFIG,
    TokenInfo,
    resolve_token,
    parse_units,
    format_units,
)

from resolver_ops.config.artifacts import (
    ContractArtifact,
    load_artifact,
    load_build_info,
    resolve_abi,
)

from resolver_ops.config.settings import Settings

from resolver_ops.config.abis import (
    ERC20_ABI,
    RESOLVER_ABI,
)

__all__ = [
    # Network
    'CHAINS',
    'DEFAULT_CHAIN',
    'GAS_LIMIT_BUFFER',
    'RECEIPT_TIMEOUT',
    'get_chain_config',
    'get_explorer_url',
    'tx_url',
    'address_url',

    # Contracts
    'AddressBook',

    # Tokens
    'TOKEN_CONFIG',
    'TokenInfo',
    'resolve_token',
    'parse_units',
    'format_units',

    # Artifacts
    'ContractArtifact',
    'load_artifact',
    'load_build_info',
    'resolve_abi',

    # Settings
    'Settings',

    # ABIs
    'ERC20_ABI',
    'RESOLVER_ABI',
]
