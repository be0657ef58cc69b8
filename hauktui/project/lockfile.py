"""Lock file — hauk.lock.json, the record of which components a project installed.

Each entry keeps the installed version and a hash per copied file. Those
hashes are the baseline diff and update compare against to tell local edits
apart from upstream changes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from hauktui.errors import ConfigError

LOCK_FILE = "hauk.lock.json"
LOCK_VERSION = "1.0.0"


@dataclass
class LockEntry:
    """One installed component."""

    name: str
    version: str
    files: dict[str, str] = field(default_factory=dict)  # filename -> content hash
    installed_at: str = ""  # ISO 8601


@dataclass
class LockFile:
    version: str = LOCK_VERSION
    components: dict[str, LockEntry] = field(default_factory=dict)

    def get(self, name: str) -> LockEntry | None:
        return self.components.get(name)

    def record(self, entry: LockEntry) -> None:
        """Insert or replace an entry, stamping the install time if unset."""
        if not entry.installed_at:
            entry.installed_at = datetime.now(timezone.utc).isoformat()
        self.components[entry.name] = entry

    def installed_names(self) -> list[str]:
        return list(self.components.keys())


class LockStore:
    """Reads and writes the lock file for a project."""

    def __init__(self, cwd: str | Path):
        self.cwd = Path(cwd)
        self.lock_path = self.cwd / LOCK_FILE

    def read(self) -> LockFile:
        """Load the lock file. A missing file reads as an empty lock."""
        if not self.lock_path.exists():
            return LockFile()

        try:
            with open(self.lock_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Could not read {LOCK_FILE}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{LOCK_FILE} must contain a JSON object")
        components = data.get("components", {})
        if not isinstance(components, dict):
            raise ConfigError(f"{LOCK_FILE}: 'components' must be an object")

        return LockFile(
            version=data.get("version", LOCK_VERSION),
            components={name: _dict_to_entry(name, entry) for name, entry in components.items()},
        )

    def write(self, lock: LockFile) -> None:
        data = {
            "version": lock.version,
            "components": {
                name: _entry_to_dict(entry) for name, entry in lock.components.items()
            },
        }
        with open(self.lock_path, "w") as f:
            json.dump(data, f, indent=2)
            f.write("\n")


def _entry_to_dict(entry: LockEntry) -> dict:
    return {
        "name": entry.name,
        "version": entry.version,
        "files": dict(entry.files),
        "installedAt": entry.installed_at,
    }


def _dict_to_entry(key: str, data: dict) -> LockEntry:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ConfigError(f"{LOCK_FILE}: malformed entry for '{key}'")
    if not isinstance(data.get("files", {}), dict):
        raise ConfigError(f"{LOCK_FILE}: 'files' of '{key}' must be an object")
    return LockEntry(
        name=data["name"],
        version=data.get("version", ""),
        files=data.get("files", {}),
        installed_at=data.get("installedAt", ""),
    )
