"""Project scaffold — what ``hauktui init`` creates in a consumer project.

Structure:
    <project>/
    ├── hauk.config.json          # Component dir, tokens path, aliases
    └── src/tui/
        ├── tokens.ts             # Theme overrides, created once
        └── components/           # Where `hauktui add` copies templates
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from hauktui.project.config import HaukConfig, get_component_dir, write_config

# Runtime packages every copied component imports
RUNTIME_PACKAGES = [
    "@hauktui/tokens",
    "@hauktui/core",
    "@hauktui/primitives-ink",
    "ink",
    "react",
]

# Checked in order; npm is the fallback
_LOCKFILE_MANAGERS = [
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lockb", "bun"),
]

_INSTALL_VERBS = {
    "npm": "install",
    "pnpm": "add",
    "yarn": "add",
    "bun": "add",
}

INSTALL_TIMEOUT = 300  # seconds

_TOKENS_TEMPLATE = """\
// haukTUI tokens configuration
// Customize your terminal UI theme here

import { createTokens, type TokenOverrides } from "@hauktui/tokens";

const customTokens: TokenOverrides = {
  // Override default colors here
  // colors: {
  //   accent: "#8b5cf6", // violet
  // },
};

export const tokens = createTokens(customTokens);
"""


@dataclass
class InstallResult:
    """Outcome of running the package manager."""

    command: list[str]
    passed: bool
    stdout: str = ""
    stderr: str = ""
    error: str = ""

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)


def detect_package_manager(cwd: str | Path) -> str:
    """Pick the package manager whose lock file is present."""
    root = Path(cwd)
    for lockfile, manager in _LOCKFILE_MANAGERS:
        if (root / lockfile).exists():
            return manager
    return "npm"


def install_command(manager: str, packages: list[str] | None = None) -> list[str]:
    packages = RUNTIME_PACKAGES if packages is None else packages
    return [manager, _INSTALL_VERBS.get(manager, "add"), *packages]


def install_dependencies(cwd: str | Path, manager: str | None = None) -> InstallResult:
    """Install the runtime packages with the project's package manager.

    Never raises for a failed install; the caller decides how to report it.
    """
    manager = manager or detect_package_manager(cwd)
    command = install_command(manager)

    try:
        proc = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=INSTALL_TIMEOUT,
        )
    except FileNotFoundError:
        return InstallResult(command=command, passed=False, error=f"{manager} not found on PATH.")
    except subprocess.TimeoutExpired:
        return InstallResult(
            command=command,
            passed=False,
            error=f"Install timed out after {INSTALL_TIMEOUT}s.",
        )

    return InstallResult(
        command=command,
        passed=proc.returncode == 0,
        stdout=proc.stdout,
        stderr=proc.stderr,
    )


class ProjectScaffold:
    """Creates the hauktui layout inside a consumer project."""

    def __init__(self, cwd: str | Path):
        self.cwd = Path(cwd)

    def initialize(self, config: HaukConfig) -> dict:
        """Create the component dir, config file and tokens file.

        The config is always (re)written. The tokens file is only written
        when missing so user theme edits survive a re-init.

        Returns:
            dict with keys ``directories`` and ``files``, each a list of
            :class:`pathlib.Path` objects that were created or already existed.
        """
        created_dirs: list[Path] = []
        created_files: list[Path] = []

        component_dir = get_component_dir(config, self.cwd)
        component_dir.mkdir(parents=True, exist_ok=True)
        created_dirs.append(component_dir)

        created_files.append(write_config(config, self.cwd))

        tokens_path = self.cwd / config.tokens_path
        tokens_path.parent.mkdir(parents=True, exist_ok=True)
        if not tokens_path.exists():
            tokens_path.write_text(_TOKENS_TEMPLATE)
        created_files.append(tokens_path)

        return {
            "directories": created_dirs,
            "files": created_files,
        }
