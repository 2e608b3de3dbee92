"""Exception hierarchy shared by every command."""
from __future__ import annotations


class ResolverOpsError(Exception):
    """Base class for all failures surfaced by resolver_ops."""


class ConfigError(ResolverOpsError):
    """Missing or invalid configuration."""


class RpcConnectionError(ResolverOpsError, ConnectionError):
    """The JSON-RPC endpoint is unreachable or malformed."""


class InvalidPrivateKeyError(ResolverOpsError, KeyError):
    """The signing key could not be parsed."""

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0]) if self.args else ""


class ChainMismatchError(ResolverOpsError):
    """The endpoint reports a different chain id than the one configured."""


class ContractBindError(ResolverOpsError, ValueError):
    """A contract handle could not be created (bad address format)."""


class ContractCallError(ResolverOpsError):
    """A contract call or transaction submission failed."""


class DeploymentError(ResolverOpsError):
    """Contract creation was not confirmed on chain."""


class ArtifactError(ResolverOpsError):
    """A build artifact is missing or incomplete."""


class VerificationError(ResolverOpsError):
    """The block-explorer verification request could not be made."""
