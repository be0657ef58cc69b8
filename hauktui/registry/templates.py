"""Template access — the canonical source files for each component.

Templates ship inside the package under ``registry/components/<name>/``.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from hauktui.registry.models import ComponentMeta

TEMPLATES_DIR = Path(__file__).parent / "components"

# Length of the hex digest kept in the lock file
HASH_LENGTH = 16


def hash_content(content: str | bytes) -> str:
    """Short SHA-256 of a file's content, used for change detection.

    Text is hashed as UTF-8, so a str and its encoded bytes hash the same.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:HASH_LENGTH]


def template_dir(name: str, templates_dir: Path = TEMPLATES_DIR) -> Path:
    return templates_dir / name


def fetch_component_files(
    meta: ComponentMeta, templates_dir: Path = TEMPLATES_DIR
) -> dict[str, str]:
    """Read every template file listed for a component.

    Returns filename -> content in ``meta.files`` order. Files missing from
    the bundle are left out.
    """
    source = template_dir(meta.name, templates_dir)
    files: dict[str, str] = {}
    for filename in meta.files:
        path = source / filename
        if path.is_file():
            files[filename] = path.read_text(encoding="utf-8")
    return files
