"""Registry index and query service.

The index is built once from the bundled registry.yaml and never mutated.
Module-level helpers (``get_components``, ``get_component`` ...) operate on
a lazily loaded default index so commands don't need to thread one through.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Iterable

import yaml

from hauktui.errors import NotFoundError, RegistryError
from hauktui.registry.models import ComponentMeta, meta_from_dict
from hauktui.registry.validator import validate_registry

REGISTRY_FILE = Path(__file__).parent / "registry.yaml"


class RegistryIndex:
    """Read-only catalog of components, keyed by name, in file order."""

    def __init__(self, components: Iterable[ComponentMeta]):
        index: dict[str, ComponentMeta] = {}
        for meta in components:
            if meta.name in index:
                raise RegistryError([f"Duplicate component name: {meta.name}"])
            index[meta.name] = meta
        self._index = MappingProxyType(index)

    @classmethod
    def load(cls, path: str | Path = REGISTRY_FILE) -> RegistryIndex:
        """Load and validate a registry YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)

        issues = validate_registry(data)
        if issues:
            raise RegistryError(issues)

        return cls(meta_from_dict(c) for c in data["components"])

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def get_components(self) -> list[ComponentMeta]:
        """All components, registry order."""
        return list(self._index.values())

    def get_component(self, name: str) -> ComponentMeta | None:
        """Exact-name lookup. Returns None when the name is unknown."""
        return self._index.get(name)

    def require_component(self, name: str) -> ComponentMeta:
        """Exact-name lookup that raises NotFoundError when the name is unknown."""
        meta = self._index.get(name)
        if meta is None:
            raise NotFoundError(name)
        return meta

    def search_components(self, query: str) -> list[ComponentMeta]:
        """Case-insensitive substring search over name and description."""
        if not query:
            return self.get_components()

        needle = query.lower()
        return [
            meta
            for meta in self._index.values()
            if needle in meta.name.lower() or needle in meta.description.lower()
        ]

    def available_names(self) -> list[str]:
        return list(self._index.keys())

    def validate_components(self, names: Iterable[str]) -> tuple[list[ComponentMeta], list[str]]:
        """Split names into known components and unknown names, keeping input order."""
        valid: list[ComponentMeta] = []
        invalid: list[str] = []
        for name in names:
            meta = self._index.get(name)
            if meta is not None:
                valid.append(meta)
            else:
                invalid.append(name)
        return valid, invalid


def filter_by_category(components: Iterable[ComponentMeta], category: str) -> list[ComponentMeta]:
    return [c for c in components if c.category == category]


def group_by_category(components: Iterable[ComponentMeta]) -> dict[str, list[ComponentMeta]]:
    """Group components by category. Keys keep first-seen order, not sorted."""
    groups: dict[str, list[ComponentMeta]] = {}
    for comp in components:
        groups.setdefault(comp.category, []).append(comp)
    return groups


# ---------------------------------------------------------------------------
# Default index
# ---------------------------------------------------------------------------

_default_index: RegistryIndex | None = None


def get_index() -> RegistryIndex:
    """Return the bundled registry, loading it on first use."""
    global _default_index
    if _default_index is None:
        _default_index = RegistryIndex.load()
    return _default_index


def get_components() -> list[ComponentMeta]:
    return get_index().get_components()


def get_component(name: str) -> ComponentMeta | None:
    return get_index().get_component(name)


def require_component(name: str) -> ComponentMeta:
    return get_index().require_component(name)


def search_components(query: str) -> list[ComponentMeta]:
    return get_index().search_components(query)
