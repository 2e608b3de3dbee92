"""
Contract address book.

Maps logical contract names ("resolver") to deployed addresses for one chain.
Addresses live in deployments/<chain>.json, written by the deploy command.
Addresses passed in as overrides (RESOLVER_ADDRESS, via Settings) take
precedence.
"""
from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..errors import ConfigError

DEFAULT_DEPLOYMENTS_DIR = Path("deployments")


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix=path.stem + "_", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, "w") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)


class AddressBook:
    """Deployed addresses for a single chain."""

    def __init__(
        self,
        chain: str,
        deployments_dir: str | Path = DEFAULT_DEPLOYMENTS_DIR,
        overrides: dict[str, str | None] | None = None,
    ):
        self.chain = chain
        self.overrides = {k: v for k, v in (overrides or {}).items() if v}
        self.path = Path(deployments_dir) / f"{chain}.json"
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as err:
            raise ConfigError(f"Address book {self.path} is not valid JSON: {err}") from err
        if not isinstance(data, dict):
            raise ConfigError(f"Address book {self.path} must contain a JSON object")
        return data

    def names(self) -> list[str]:
        return sorted(k for k, v in self._data.items() if isinstance(v, str))

    def get(self, name: str) -> str:
        """Return the address recorded for ``name``.

        Raises:
            ConfigError: If neither the overrides nor the file know the name.
        """
        if name in self.overrides:
            return self.overrides[name]

        value = self._data.get(name)
        if not isinstance(value, str) or not value:
            raise ConfigError(
                f"No '{name}' address for {self.chain}: deploy it first or set {name.upper()}_ADDRESS "
                f"(looked in {self.path})"
            )
        return value

    def record_deployment(self, name: str, address: str, **metadata: Any) -> Path:
        """Store ``address`` under ``name`` along with deployment metadata."""
        self._data[name] = address
        history = self._data.setdefault("deployments", {})
        history[name] = {
            "address": address,
            "recorded_at": datetime.now(timezone.utc).isoformat(),
            **metadata,
        }
        write_json_atomic(self.path, self._data)
        return self.path
