"""
Build artifact loading.

Reads Hardhat artifacts (artifacts/contracts/<Source>.sol/<Name>.json) for the
ABI and creation bytecode, and the matching build-info file for the compiler
version and standard-json input used by explorer verification.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ArtifactError
from .abis import RESOLVER_ABI

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACT_PATH = Path("artifacts/contracts/Resolver.sol/Resolver.json")


@dataclass(frozen=True)
class ContractArtifact:
    contract_name: str
    source_name: str
    abi: list[dict[str, Any]]
    bytecode: str
    path: Path

    @property
    def fully_qualified_name(self) -> str:
        """Source-path identifier, e.g. ``contracts/Resolver.sol:Resolver``."""
        return f"{self.source_name}:{self.contract_name}"

    @property
    def constructor_inputs(self) -> list[dict[str, Any]]:
        for entry in self.abi:
            if entry.get("type") == "constructor":
                return list(entry.get("inputs", []))
        return []


@dataclass(frozen=True)
class BuildInfo:
    solc_long_version: str
    input: dict[str, Any]

    @property
    def compiler_version(self) -> str:
        """Explorer-style compiler version, e.g. ``v0.8.17+commit.8df45f5f``."""
        return f"v{self.solc_long_version}"


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError as err:
        raise ArtifactError(f"Artifact not found: {path} (run `npx hardhat compile` first)") from err
    except json.JSONDecodeError as err:
        raise ArtifactError(f"Artifact is not valid JSON: {path}: {err}") from err


def load_artifact(path: str | Path = DEFAULT_ARTIFACT_PATH) -> ContractArtifact:
    """Load ABI and bytecode from a Hardhat artifact JSON."""
    path = Path(path)
    data = _load_json(path)

    missing = [k for k in ("contractName", "sourceName", "abi", "bytecode") if k not in data]
    if missing:
        raise ArtifactError(f"Artifact {path} is missing fields: {', '.join(missing)}")

    bytecode = str(data["bytecode"]).strip()
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if bytecode == "0x":
        # Interfaces and abstract contracts compile to empty bytecode
        raise ArtifactError(f"Artifact {path} has no creation bytecode")

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data["sourceName"],
        abi=data["abi"],
        bytecode=bytecode,
        path=path,
    )


def load_build_info(artifact_path: str | Path) -> BuildInfo:
    """Load the Hardhat build-info referenced by ``<Name>.dbg.json``."""
    artifact_path = Path(artifact_path)
    dbg_path = artifact_path.with_name(artifact_path.stem + ".dbg.json")
    dbg = _load_json(dbg_path)
    if "buildInfo" not in dbg:
        raise ArtifactError(f"{dbg_path} does not reference a build-info file")

    build_info_path = (dbg_path.parent / dbg["buildInfo"]).resolve()
    data = _load_json(build_info_path)
    if "solcLongVersion" not in data or "input" not in data:
        raise ArtifactError(f"Build info {build_info_path} is missing solcLongVersion/input")
    return BuildInfo(solc_long_version=data["solcLongVersion"], input=data["input"])


def resolve_abi(path: str | Path | None = None) -> list[dict[str, Any]]:
    """Return the artifact ABI, or the bundled Resolver ABI when no artifact exists."""
    path = Path(path) if path else DEFAULT_ARTIFACT_PATH
    if path.exists():
        return load_artifact(path).abi
    logger.debug(f"No artifact at {path}, using bundled Resolver ABI")
    return RESOLVER_ABI
