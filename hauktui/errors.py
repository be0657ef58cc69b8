"""Error taxonomy shared by the registry, project and sync layers.

Library code raises these; the CLI catches them at the command boundary,
prints the message and exits with status 1.
"""

from __future__ import annotations


class HaukError(Exception):
    """Base class for every user-facing hauktui error."""


class NotFoundError(HaukError):
    """A component name has no exact match in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Component "{name}" not found.')


class RegistryError(HaukError):
    """The bundled component catalog is malformed."""

    def __init__(self, issues: list[str]):
        self.issues = issues
        super().__init__("Invalid registry: " + "; ".join(issues))


class NotInitializedError(HaukError):
    """The target project has no hauk.config.json."""

    def __init__(self):
        super().__init__("Project not initialized. Run `hauktui init` first.")


class ConfigError(HaukError):
    """A project config or lock file could not be read."""
