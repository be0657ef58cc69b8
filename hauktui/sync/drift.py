"""Drift detection — compare an installed component against its template.

Each file is compared three ways:
1. local: what is on disk in the project now
2. installed: the hash recorded in the lock file at install time
3. upstream: the bundled template

That is enough to tell who changed a file: the user, the registry, or both.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path

from hauktui.project.lockfile import LockEntry
from hauktui.registry.templates import hash_content


class FileStatus:
    UNCHANGED = "unchanged"
    UPSTREAM_UPDATED = "upstream updated"
    LOCAL_MODIFIED = "local modifications"
    BOTH_MODIFIED = "both modified"
    MISSING = "missing locally"
    LOCAL_ONLY = "local only"


@dataclass
class FileDiff:
    """Comparison result for one file."""

    filename: str
    status: str
    local_content: str | None = None
    upstream_content: str | None = None

    @property
    def changed(self) -> bool:
        return self.status != FileStatus.UNCHANGED

    def unified_diff(self) -> str:
        """Unified diff from upstream to local, empty when there is nothing to show."""
        if self.local_content is None or self.upstream_content is None:
            return ""
        lines = difflib.unified_diff(
            self.upstream_content.splitlines(keepends=True),
            self.local_content.splitlines(keepends=True),
            fromfile=f"upstream/{self.filename}",
            tofile=f"local/{self.filename}",
        )
        return "".join(lines)


@dataclass
class ComponentDiff:
    """Report of drift for a single installed component."""

    name: str
    installed_version: str
    upstream_version: str
    files: list[FileDiff] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return any(f.changed for f in self.files)

    def summary(self) -> str:
        changed = sum(1 for f in self.files if f.changed)
        if not changed:
            return f"{self.name} v{self.installed_version}: no differences"
        return f"{self.name} v{self.installed_version}: {changed} file(s) differ"


def _decode(raw: bytes) -> str | None:
    # Binary or non-UTF-8 local files still get a status, just no patch
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def classify_file(local_hash: str, upstream_hash: str, installed_hash: str | None) -> str:
    """Three-way status for a file present both locally and upstream."""
    if local_hash == upstream_hash:
        return FileStatus.UNCHANGED
    if local_hash == installed_hash:
        return FileStatus.UPSTREAM_UPDATED
    if upstream_hash == installed_hash:
        return FileStatus.LOCAL_MODIFIED
    return FileStatus.BOTH_MODIFIED


def compare_component(
    component_dir: str | Path,
    entry: LockEntry,
    upstream_files: dict[str, str],
    upstream_version: str,
) -> ComponentDiff:
    """Compare the files in ``component_dir`` against ``upstream_files``."""
    root = Path(component_dir)
    report = ComponentDiff(
        name=entry.name,
        installed_version=entry.version,
        upstream_version=upstream_version,
    )

    for filename, upstream_content in upstream_files.items():
        local_path = root / filename
        if not local_path.is_file():
            report.files.append(
                FileDiff(filename, FileStatus.MISSING, upstream_content=upstream_content)
            )
            continue

        raw = local_path.read_bytes()
        status = classify_file(
            hash_content(raw),
            hash_content(upstream_content),
            entry.files.get(filename),
        )
        report.files.append(FileDiff(filename, status, _decode(raw), upstream_content))

    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(root).as_posix()
        if rel not in upstream_files:
            report.files.append(FileDiff(rel, FileStatus.LOCAL_ONLY))

    return report


def has_local_changes(component_dir: str | Path, entry: LockEntry) -> bool:
    """True when any locked file on disk no longer matches its recorded hash.

    Deleted files don't count; update will simply restore them.
    """
    root = Path(component_dir)
    if not root.exists():
        return False

    for filename, installed_hash in entry.files.items():
        path = root / filename
        if path.is_file() and hash_content(path.read_bytes()) != installed_hash:
            return True
    return False
