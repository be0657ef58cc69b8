"""Tests for the project layer (config, lock file, init scaffold)."""

import json
import tempfile
from pathlib import Path

import pytest

from hauktui.errors import ConfigError, NotInitializedError
from hauktui.project.config import (
    CONFIG_FILE,
    HaukConfig,
    get_component_path,
    is_initialized,
    load_config,
    read_config,
    write_config,
)
from hauktui.project.lockfile import LOCK_FILE, LockEntry, LockFile, LockStore
from hauktui.project.scaffold import (
    RUNTIME_PACKAGES,
    ProjectScaffold,
    detect_package_manager,
    install_command,
    install_dependencies,
)


# --- Config ---


def test_config_defaults():
    config = HaukConfig()
    assert config.component_dir == "src/tui/components"
    assert config.tokens_path == "src/tui/tokens.ts"
    assert config.aliases == {"@/tui": "./src/tui"}


def test_config_write_and_read():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert not is_initialized(tmpdir)
        assert read_config(tmpdir) is None

        write_config(HaukConfig(component_dir="ui/components"), tmpdir)
        assert is_initialized(tmpdir)

        raw = json.loads((Path(tmpdir) / CONFIG_FILE).read_text())
        assert raw["componentDir"] == "ui/components"
        assert raw["$schema"].startswith("https://")

        config = read_config(tmpdir)
        assert config.component_dir == "ui/components"


def test_config_reads_partial_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / CONFIG_FILE).write_text('{"componentDir": "lib/tui"}')
        config = load_config(tmpdir)
        assert config.component_dir == "lib/tui"
        assert config.tokens_path == "src/tui/tokens.ts"


def test_load_config_not_initialized():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(NotInitializedError):
            load_config(tmpdir)


def test_config_invalid_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / CONFIG_FILE).write_text("{not json")
        with pytest.raises(ConfigError):
            read_config(tmpdir)


def test_component_path():
    config = HaukConfig(component_dir="src/tui/components")
    path = get_component_path(config, "button", "/proj")
    assert path == Path("/proj/src/tui/components/button")


# --- Lock file ---


def test_lock_missing_reads_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        lock = LockStore(tmpdir).read()
        assert lock.version == "1.0.0"
        assert lock.components == {}


def test_lock_record_and_roundtrip():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LockStore(tmpdir)
        lock = LockFile()
        lock.record(LockEntry(name="badge", version="0.1.0", files={"badge.tsx": "abc123"}))
        assert lock.get("badge").installed_at != ""  # Should be auto-filled
        store.write(lock)

        raw = json.loads((Path(tmpdir) / LOCK_FILE).read_text())
        assert raw["components"]["badge"]["installedAt"]

        loaded = store.read()
        assert loaded.installed_names() == ["badge"]
        entry = loaded.get("badge")
        assert entry.version == "0.1.0"
        assert entry.files == {"badge.tsx": "abc123"}


def test_lock_record_replaces_entry():
    lock = LockFile()
    lock.record(LockEntry(name="badge", version="0.1.0"))
    lock.record(LockEntry(name="badge", version="0.2.0"))
    assert lock.installed_names() == ["badge"]
    assert lock.get("badge").version == "0.2.0"


def test_lock_invalid_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / LOCK_FILE).write_text("[")
        with pytest.raises(ConfigError):
            LockStore(tmpdir).read()


def test_lock_wrong_shape():
    shapes = [
        [],
        {"components": []},
        {"components": {"x": {}}},
        {"components": {"x": "badge"}},
        {"components": {"x": {"name": "x", "files": ["x.tsx"]}}},
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        for data in shapes:
            (Path(tmpdir) / LOCK_FILE).write_text(json.dumps(data))
            with pytest.raises(ConfigError):
                LockStore(tmpdir).read()


# --- Scaffold ---


def test_scaffold_creates_layout():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        result = ProjectScaffold(root).initialize(HaukConfig())

        assert (root / "src/tui/components").is_dir()
        assert (root / CONFIG_FILE).is_file()
        tokens = root / "src/tui/tokens.ts"
        assert "createTokens" in tokens.read_text()
        assert root / "src/tui/components" in result["directories"]
        assert tokens in result["files"]


def test_scaffold_keeps_existing_tokens():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        scaffold = ProjectScaffold(root)
        scaffold.initialize(HaukConfig())
        tokens = root / "src/tui/tokens.ts"
        tokens.write_text("// customised\n")

        scaffold.initialize(HaukConfig())  # Idempotent
        assert tokens.read_text() == "// customised\n"


def test_detect_package_manager():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        assert detect_package_manager(root) == "npm"
        (root / "yarn.lock").write_text("")
        assert detect_package_manager(root) == "yarn"
        (root / "pnpm-lock.yaml").write_text("")
        assert detect_package_manager(root) == "pnpm"


def test_install_command():
    assert install_command("npm") == ["npm", "install", *RUNTIME_PACKAGES]
    assert install_command("bun", ["ink"]) == ["bun", "add", "ink"]


def test_install_dependencies_missing_manager():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = install_dependencies(tmpdir, manager="hauktui-no-such-pm")
        assert not result.passed
        assert "not found" in result.error
        assert result.command_line.startswith("hauktui-no-such-pm add")
