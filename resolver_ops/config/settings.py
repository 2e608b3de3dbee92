"""
Runtime settings.

All environment access happens here, once, at startup. Commands receive a
Settings instance instead of reading os.environ themselves.

Environment variables
---------------------
RPC_URL              JSON-RPC endpoint (defaults to the chain's public RPC)
PRIVATE_KEY          Signing key (hex, with or without 0x)
CHAIN                Chain name from config.network.CHAINS (default polygon)
ETHERSCAN_API_KEY    Explorer API key (POLYGONSCAN_API_KEY also accepted)
RESOLVER_ARTIFACT    Path to the Hardhat artifact JSON
DEPLOYMENTS_DIR      Directory holding <chain>.json address books
RESOLVER_ADDRESS     Deployed Resolver, overrides the address book
LOG_DIR              Enables file logging into this directory
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..errors import ConfigError
from .artifacts import DEFAULT_ARTIFACT_PATH
from .contracts import DEFAULT_DEPLOYMENTS_DIR
from .network import DEFAULT_CHAIN, get_chain_config


def load_env(env_file: str | None) -> None:
    base_env = Path(".env")
    if base_env.exists():
        load_dotenv(base_env)
    if env_file:
        if not Path(env_file).exists():
            raise ConfigError(f"Env file not found: {env_file}")
        load_dotenv(env_file, override=True)


@dataclass
class Settings:
    rpc_url: str
    private_key: str | None = field(default=None, repr=False)
    chain: str = DEFAULT_CHAIN
    explorer_api_key: str | None = field(default=None, repr=False)
    artifact_path: Path = DEFAULT_ARTIFACT_PATH
    deployments_dir: Path = DEFAULT_DEPLOYMENTS_DIR
    log_dir: Path | None = None
    resolver_address: str | None = None

    @classmethod
    def from_env(cls, env_file: str | None = None, **overrides) -> "Settings":
        """Build settings from the environment, letting non-None overrides win.

        Raises:
            ConfigError: If the env file or chain is unknown.
        """
        load_env(env_file)
        overrides = {k: v for k, v in overrides.items() if v is not None}

        chain = (overrides.pop("chain", None) or os.getenv("CHAIN") or DEFAULT_CHAIN).lower()
        try:
            chain_config = get_chain_config(chain)
        except ValueError as err:
            raise ConfigError(str(err)) from err

        rpc_url = overrides.pop("rpc_url", None) or os.getenv("RPC_URL") or chain_config["rpc_urls"][0]
        log_dir = overrides.pop("log_dir", None) or os.getenv("LOG_DIR")

        return cls(
            rpc_url=rpc_url,
            private_key=overrides.pop("private_key", None) or os.getenv("PRIVATE_KEY"),
            chain=chain,
            explorer_api_key=(
                overrides.pop("explorer_api_key", None)
                or os.getenv("ETHERSCAN_API_KEY")
                or os.getenv("POLYGONSCAN_API_KEY")
            ),
            artifact_path=Path(overrides.pop("artifact_path", None) or os.getenv("RESOLVER_ARTIFACT") or DEFAULT_ARTIFACT_PATH),
            deployments_dir=Path(overrides.pop("deployments_dir", None) or os.getenv("DEPLOYMENTS_DIR") or DEFAULT_DEPLOYMENTS_DIR),
            log_dir=Path(log_dir) if log_dir else None,
            resolver_address=overrides.pop("resolver_address", None) or os.getenv("RESOLVER_ADDRESS"),
        )

    def validate(self, require_key: bool = True) -> "Settings":
        """Check required values, naming every missing one at once."""
        missing = []
        if not self.rpc_url:
            missing.append("RPC_URL")
        if require_key and not self.private_key:
            missing.append("PRIVATE_KEY")
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")
        return self
