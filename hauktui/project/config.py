"""Project configuration — hauk.config.json in the consumer's project root.

JSON keys keep their camelCase names so config files written by earlier
releases stay readable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from hauktui.errors import ConfigError, NotInitializedError

CONFIG_FILE = "hauk.config.json"

DEFAULT_SCHEMA = "https://hauktui.dev/schema/config.json"
DEFAULT_COMPONENT_DIR = "src/tui/components"
DEFAULT_TOKENS_PATH = "src/tui/tokens.ts"
DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/hauktui/hauktui/main/packages/registry"


def _default_aliases() -> dict[str, str]:
    return {"@/tui": "./src/tui"}


@dataclass
class HaukConfig:
    """User configuration for a project."""

    component_dir: str = DEFAULT_COMPONENT_DIR
    tokens_path: str = DEFAULT_TOKENS_PATH
    registry_url: str = DEFAULT_REGISTRY_URL  # Informational; templates are bundled
    aliases: dict[str, str] = field(default_factory=_default_aliases)
    schema: str = DEFAULT_SCHEMA


def config_path(cwd: str | Path) -> Path:
    return Path(cwd) / CONFIG_FILE


def is_initialized(cwd: str | Path) -> bool:
    """A project is initialized once it has a config file."""
    return config_path(cwd).exists()


def read_config(cwd: str | Path) -> HaukConfig | None:
    """Read the config file, or None when the project has none."""
    path = config_path(cwd)
    if not path.exists():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not read {CONFIG_FILE}: {e}") from e
    return _dict_to_config(data)


def load_config(cwd: str | Path) -> HaukConfig:
    """Read the config file, raising NotInitializedError when it is absent."""
    config = read_config(cwd)
    if config is None:
        raise NotInitializedError()
    return config


def write_config(config: HaukConfig, cwd: str | Path) -> Path:
    path = config_path(cwd)
    with open(path, "w") as f:
        json.dump(_config_to_dict(config), f, indent=2)
        f.write("\n")
    return path


def get_component_dir(config: HaukConfig, cwd: str | Path) -> Path:
    return Path(cwd) / config.component_dir


def get_component_path(config: HaukConfig, name: str, cwd: str | Path) -> Path:
    """Directory a component's files are copied into."""
    return get_component_dir(config, cwd) / name


def _config_to_dict(config: HaukConfig) -> dict:
    return {
        "$schema": config.schema,
        "componentDir": config.component_dir,
        "tokensPath": config.tokens_path,
        "registryUrl": config.registry_url,
        "aliases": dict(config.aliases),
    }


def _dict_to_config(data: dict) -> HaukConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE} must contain a JSON object")
    return HaukConfig(
        component_dir=data.get("componentDir", DEFAULT_COMPONENT_DIR),
        tokens_path=data.get("tokensPath", DEFAULT_TOKENS_PATH),
        registry_url=data.get("registryUrl", DEFAULT_REGISTRY_URL),
        aliases=data.get("aliases", _default_aliases()),
        schema=data.get("$schema", DEFAULT_SCHEMA),
    )
