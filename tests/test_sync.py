"""Tests for sync primitives (installer, drift, updates)."""

import tempfile
from pathlib import Path

from hauktui.project.config import HaukConfig, get_component_path
from hauktui.project.lockfile import LockEntry, LockFile
from hauktui.registry.index import RegistryIndex, get_index
from hauktui.registry.models import ComponentMeta
from hauktui.registry.templates import hash_content
from hauktui.sync.drift import FileStatus, classify_file, compare_component, has_local_changes
from hauktui.sync.installer import install_component
from hauktui.sync.updates import apply_updates, check_for_updates


def _templates(tmpdir: str, name: str, files: dict[str, str]) -> Path:
    root = Path(tmpdir) / "templates"
    (root / name).mkdir(parents=True)
    for filename, content in files.items():
        (root / name / filename).write_text(content)
    return root


# --- Installer ---


def test_install_writes_files_and_hashes():
    with tempfile.TemporaryDirectory() as tmpdir:
        templates = _templates(tmpdir, "card", {"card.tsx": "card v1\n", "card.css": "x\n"})
        meta = ComponentMeta(
            name="card", category="layout", description="", version="1.0.0",
            files=("card.tsx", "card.css"),
        )
        target = Path(tmpdir) / "project" / "card"

        entry = install_component(meta, target, templates)

        assert (target / "card.tsx").read_text() == "card v1\n"
        assert (target / "card.css").read_text() == "x\n"
        assert entry.name == "card"
        assert entry.version == "1.0.0"
        assert entry.files == {
            "card.tsx": hash_content("card v1\n"),
            "card.css": hash_content("x\n"),
        }


def test_install_bundled_component():
    with tempfile.TemporaryDirectory() as tmpdir:
        meta = get_index().require_component("badge")
        entry = install_component(meta, Path(tmpdir) / "badge")
        for filename in meta.files:
            assert (Path(tmpdir) / "badge" / filename).is_file()
        assert set(entry.files) == set(meta.files)


# --- Drift ---


def test_classify_file_three_way():
    assert classify_file("a", "a", "a") == FileStatus.UNCHANGED
    assert classify_file("a", "a", None) == FileStatus.UNCHANGED
    assert classify_file("a", "b", "a") == FileStatus.UPSTREAM_UPDATED
    assert classify_file("b", "a", "a") == FileStatus.LOCAL_MODIFIED
    assert classify_file("b", "c", "a") == FileStatus.BOTH_MODIFIED


def test_compare_unchanged_after_install():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "card"
        target.mkdir()
        (target / "card.tsx").write_text("v1")
        entry = LockEntry(name="card", version="1.0.0", files={"card.tsx": hash_content("v1")})

        report = compare_component(target, entry, {"card.tsx": "v1"}, "1.0.0")

        assert not report.has_changes
        assert [f.status for f in report.files] == [FileStatus.UNCHANGED]
        assert "no differences" in report.summary()


def test_compare_detects_each_status():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "card"
        target.mkdir()
        (target / "local.tsx").write_text("edited")
        (target / "upstream.tsx").write_text("v1")
        (target / "both.tsx").write_text("mine")
        (target / "notes.md").write_text("my notes")
        entry = LockEntry(
            name="card",
            version="1.0.0",
            files={
                "local.tsx": hash_content("v1"),
                "upstream.tsx": hash_content("v1"),
                "both.tsx": hash_content("v1"),
                "gone.tsx": hash_content("v1"),
            },
        )
        upstream = {
            "local.tsx": "v1",
            "upstream.tsx": "v2",
            "both.tsx": "theirs",
            "gone.tsx": "v1",
        }

        report = compare_component(target, entry, upstream, "1.1.0")
        statuses = {f.filename: f.status for f in report.files}

        assert statuses == {
            "local.tsx": FileStatus.LOCAL_MODIFIED,
            "upstream.tsx": FileStatus.UPSTREAM_UPDATED,
            "both.tsx": FileStatus.BOTH_MODIFIED,
            "gone.tsx": FileStatus.MISSING,
            "notes.md": FileStatus.LOCAL_ONLY,
        }
        assert report.has_changes
        assert "5 file(s) differ" in report.summary()


def test_unified_diff_upstream_to_local():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "card"
        target.mkdir()
        (target / "card.tsx").write_text("line one\nline two changed\n")
        entry = LockEntry(name="card", version="1.0.0", files={})

        report = compare_component(
            target, entry, {"card.tsx": "line one\nline two\n"}, "1.0.0"
        )
        text = report.files[0].unified_diff()
        assert "--- upstream/card.tsx" in text
        assert "+++ local/card.tsx" in text
        assert "-line two\n" in text
        assert "+line two changed\n" in text


def test_has_local_changes():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "card"
        entry = LockEntry(name="card", version="1.0.0", files={"card.tsx": hash_content("v1")})
        assert not has_local_changes(target, entry)  # Not installed at all

        target.mkdir()
        (target / "card.tsx").write_text("v1")
        assert not has_local_changes(target, entry)

        (target / "card.tsx").write_text("edited")
        assert has_local_changes(target, entry)

        (target / "card.tsx").unlink()
        assert not has_local_changes(target, entry)


def test_non_utf8_local_file_is_a_local_modification():
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "card"
        target.mkdir()
        (target / "card.tsx").write_bytes(b"\xff\xfe\x00bad")
        entry = LockEntry(name="card", version="1.0.0", files={"card.tsx": hash_content("v1")})

        report = compare_component(target, entry, {"card.tsx": "v1"}, "1.0.0")
        file_diff = report.files[0]
        assert file_diff.status == FileStatus.LOCAL_MODIFIED
        assert file_diff.local_content is None
        assert file_diff.unified_diff() == ""
        assert has_local_changes(target, entry)


def test_hash_content_text_matches_utf8_bytes():
    assert hash_content("héllo") == hash_content("héllo".encode("utf-8"))


# --- Updates ---


def _project(tmpdir: str, index: RegistryIndex, templates: Path, installed: dict[str, str]):
    """Install components then pin their lock entries to older versions."""
    config = HaukConfig()
    lock = LockFile()
    for name, locked_version in installed.items():
        meta = index.require_component(name)
        entry = install_component(meta, get_component_path(config, name, tmpdir), templates)
        entry.version = locked_version
        lock.record(entry)
    return config, lock


def test_check_for_updates_finds_version_changes():
    with tempfile.TemporaryDirectory() as tmpdir:
        templates = _templates(tmpdir, "card", {"card.tsx": "v2"})
        (templates / "chip").mkdir()
        (templates / "chip" / "chip.tsx").write_text("chip")
        index = RegistryIndex([
            ComponentMeta(name="card", category="layout", description="", version="2.0.0", files=("card.tsx",)),
            ComponentMeta(name="chip", category="display", description="", version="1.0.0", files=("chip.tsx",)),
        ])
        config, lock = _project(tmpdir, index, templates, {"card": "1.0.0", "chip": "1.0.0"})

        result = check_for_updates(["card", "chip"], lock, config, tmpdir, index)

        assert result.has_updates
        assert [c.name for c in result.candidates] == ["card"]
        candidate = result.candidates[0]
        assert candidate.installed_version == "1.0.0"
        assert candidate.latest_version == "2.0.0"
        assert not candidate.has_local_changes


def test_check_for_updates_flags_local_changes_and_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        templates = _templates(tmpdir, "card", {"card.tsx": "v2"})
        index = RegistryIndex([
            ComponentMeta(name="card", category="layout", description="", version="2.0.0", files=("card.tsx",)),
        ])
        config, lock = _project(tmpdir, index, templates, {"card": "1.0.0"})
        lock.record(LockEntry(name="retired", version="0.1.0"))
        get_component_path(config, "card", tmpdir).joinpath("card.tsx").write_text("edited")

        result = check_for_updates(["card", "retired"], lock, config, tmpdir, index)

        assert result.not_in_registry == ["retired"]
        assert result.candidates[0].has_local_changes
        assert result.safe_to_update == []
        assert len(result.with_local_changes) == 1


def test_apply_updates_rewrites_files_and_lock():
    with tempfile.TemporaryDirectory() as tmpdir:
        templates = _templates(tmpdir, "card", {"card.tsx": "v2"})
        index = RegistryIndex([
            ComponentMeta(name="card", category="layout", description="", version="2.0.0", files=("card.tsx",)),
        ])
        config, lock = _project(tmpdir, index, templates, {"card": "1.0.0"})
        card_file = get_component_path(config, "card", tmpdir) / "card.tsx"
        card_file.write_text("edited")

        result = check_for_updates(["card"], lock, config, tmpdir, index)
        updated = apply_updates(result.candidates, lock, config, tmpdir, index, templates)

        assert [c.name for c in updated] == ["card"]
        assert card_file.read_text() == "v2"
        assert lock.get("card").version == "2.0.0"
        assert lock.get("card").files == {"card.tsx": hash_content("v2")}
