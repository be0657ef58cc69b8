"""Validator — check the component catalog for correctness.

Structural checks run every time the index is loaded. The template check is
slower (it touches the filesystem) and only runs when a templates directory
is passed in.
"""

from __future__ import annotations

from pathlib import Path

from hauktui.registry.models import CATEGORY_VALUES

REQUIRED_FIELDS = ("name", "description", "category")
LIST_FIELDS = ("files", "dependencies", "registry_dependencies", "tags")


def validate_registry(data: dict, templates_dir: Path | None = None) -> list[str]:
    """Validate a parsed registry.yaml dict.

    Returns a list of issues found. Empty list means valid.
    """
    if not isinstance(data, dict) or "components" not in data:
        return ["Missing top-level 'components' key"]

    components = data["components"]
    if not isinstance(components, list):
        return ["'components' must be a list"]

    issues: list[str] = []
    seen: set[str] = set()

    for i, comp in enumerate(components):
        if not isinstance(comp, dict):
            issues.append(f"Component {i + 1} is not a mapping")
            continue

        label = comp.get("name") or f"#{i + 1}"

        for field_name in REQUIRED_FIELDS:
            if not comp.get(field_name):
                issues.append(f"Component {label} missing required field: {field_name}")

        category = comp.get("category", "")
        if category and category not in CATEGORY_VALUES:
            issues.append(
                f"Component {label} has unknown category '{category}'. "
                f"Must be one of: {sorted(CATEGORY_VALUES)}"
            )

        name = comp.get("name")
        if name:
            if name in seen:
                issues.append(f"Duplicate component name: {name}")
            seen.add(name)

        bad_lists = [
            key for key in LIST_FIELDS
            if key in comp and not _is_string_list(comp[key])
        ]
        for key in bad_lists:
            issues.append(f"Component {label} field '{key}' must be a list of strings")
        if "files" in bad_lists:
            continue

        files = comp.get("files") or []
        if not files:
            issues.append(f"Component {label} lists no files")
        elif templates_dir is not None and name:
            for filename in files:
                if not (templates_dir / name / filename).is_file():
                    issues.append(f"Component {label} template missing: {name}/{filename}")

    return issues


def _is_string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)
