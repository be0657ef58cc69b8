"""Registry data models — component metadata and categories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ComponentCategory(Enum):
    """Where a component sits in the catalog."""

    PRIMITIVE = "primitive"
    INPUT = "input"
    LAYOUT = "layout"
    FEEDBACK = "feedback"
    NAVIGATION = "navigation"
    PATTERN = "pattern"
    DISPLAY = "display"


CATEGORY_VALUES = {c.value for c in ComponentCategory}


@dataclass(frozen=True)
class ComponentMeta:
    """A single component in the registry."""

    # Identity
    name: str
    category: str
    description: str
    version: str = "0.1.0"

    # What gets copied and what it needs
    files: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()  # npm packages
    registry_dependencies: tuple[str, ...] = ()  # @hauktui/* packages

    # Discovery
    tags: tuple[str, ...] = ()
    notes: str = ""  # Shown after install


def meta_from_dict(data: dict) -> ComponentMeta:
    """Build a ComponentMeta from one entry of registry.yaml."""
    return ComponentMeta(
        name=data["name"],
        category=data["category"],
        description=data.get("description", ""),
        version=str(data.get("version", "0.1.0")),
        files=tuple(data.get("files", [])),
        dependencies=tuple(data.get("dependencies", [])),
        registry_dependencies=tuple(data.get("registry_dependencies", [])),
        tags=tuple(data.get("tags", [])),
        notes=data.get("notes", "") or "",
    )

