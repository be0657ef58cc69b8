"""Installer — copy a component's templates into a project."""

from __future__ import annotations

from pathlib import Path

from hauktui.project.lockfile import LockEntry
from hauktui.registry.models import ComponentMeta
from hauktui.registry.templates import TEMPLATES_DIR, fetch_component_files, hash_content


def install_component(
    meta: ComponentMeta,
    target_dir: str | Path,
    templates_dir: Path = TEMPLATES_DIR,
) -> LockEntry:
    """Write every template file of ``meta`` into ``target_dir``.

    Existing files are overwritten; callers decide beforehand whether that
    is allowed. Returns the lock entry describing what was written.
    """
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)

    hashes: dict[str, str] = {}
    for filename, content in fetch_component_files(meta, templates_dir).items():
        path = target / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="")
        hashes[filename] = hash_content(content)

    return LockEntry(name=meta.name, version=meta.version, files=hashes)
