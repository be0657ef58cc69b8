"""Update checking — find installed components with a newer registry version."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from hauktui.project.config import HaukConfig, get_component_path
from hauktui.project.lockfile import LockFile
from hauktui.registry.index import RegistryIndex
from hauktui.registry.templates import TEMPLATES_DIR
from hauktui.sync.drift import has_local_changes
from hauktui.sync.installer import install_component


@dataclass
class UpdateCandidate:
    """An installed component whose registry version moved on."""

    name: str
    installed_version: str
    latest_version: str
    has_local_changes: bool = False


@dataclass
class UpdateCheckResult:
    candidates: list[UpdateCandidate] = field(default_factory=list)
    not_in_registry: list[str] = field(default_factory=list)

    @property
    def has_updates(self) -> bool:
        return len(self.candidates) > 0

    @property
    def with_local_changes(self) -> list[UpdateCandidate]:
        return [c for c in self.candidates if c.has_local_changes]

    @property
    def safe_to_update(self) -> list[UpdateCandidate]:
        return [c for c in self.candidates if not c.has_local_changes]


def check_for_updates(
    names: list[str],
    lock: LockFile,
    config: HaukConfig,
    cwd: str | Path,
    index: RegistryIndex,
) -> UpdateCheckResult:
    """Compare locked versions of ``names`` against the registry.

    Names missing from the lock file are ignored here; the command layer
    rejects them before calling in.
    """
    result = UpdateCheckResult()

    for name in names:
        installed = lock.get(name)
        if installed is None:
            continue

        meta = index.get_component(name)
        if meta is None:
            result.not_in_registry.append(name)
            continue

        if meta.version == installed.version:
            continue

        component_dir = get_component_path(config, name, cwd)
        result.candidates.append(
            UpdateCandidate(
                name=name,
                installed_version=installed.version,
                latest_version=meta.version,
                has_local_changes=has_local_changes(component_dir, installed),
            )
        )

    return result


def apply_updates(
    candidates: list[UpdateCandidate],
    lock: LockFile,
    config: HaukConfig,
    cwd: str | Path,
    index: RegistryIndex,
    templates_dir: Path = TEMPLATES_DIR,
) -> list[UpdateCandidate]:
    """Rewrite each candidate from its template and refresh its lock entry.

    Returns the candidates that were actually updated. The caller saves the
    lock file.
    """
    updated = []
    for candidate in candidates:
        meta = index.get_component(candidate.name)
        if meta is None:
            continue

        target = get_component_path(config, candidate.name, cwd)
        lock.record(install_component(meta, target, templates_dir))
        updated.append(candidate)

    return updated
