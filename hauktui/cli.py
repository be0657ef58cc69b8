"""hauktui CLI — browse the component registry and copy components into a project."""

from __future__ import annotations

import re
from pathlib import Path
from typing import NoReturn

import click
from rich.markup import escape

from hauktui import __version__
from hauktui.errors import ConfigError, HaukError
from hauktui.project.config import (
    HaukConfig,
    get_component_path,
    is_initialized,
    load_config,
    read_config,
)
from hauktui.project.lockfile import LockFile, LockStore
from hauktui.registry.index import RegistryIndex, filter_by_category, get_index, group_by_category
from hauktui.registry.formatting import format_component_info
from hauktui.registry.templates import fetch_component_files
from hauktui.sync.drift import FileStatus, compare_component
from hauktui.sync.installer import install_component
from hauktui.sync.updates import apply_updates, check_for_updates
from hauktui.utils.logger import Logger, dim, highlight

# Column the component description starts at in `list`
NAME_COLUMN = 15

_STATUS_STYLES = {
    FileStatus.UNCHANGED: ("green", "✓"),
    FileStatus.UPSTREAM_UPDATED: ("yellow", "↑"),
    FileStatus.LOCAL_MODIFIED: ("blue", "●"),
    FileStatus.BOTH_MODIFIED: ("magenta", "⚡"),
    FileStatus.MISSING: ("red", "-"),
    FileStatus.LOCAL_ONLY: ("cyan", "+"),
}

_cwd_option = click.option(
    "--cwd",
    "-c",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Working directory",
)


def _fail(logger: Logger, message: str) -> NoReturn:
    logger.error(message)
    raise SystemExit(1)


def _registry(logger: Logger) -> RegistryIndex:
    try:
        return get_index()
    except HaukError as e:
        _fail(logger, escape(str(e)))


def _project_config(logger: Logger, cwd: Path) -> HaukConfig:
    try:
        return load_config(cwd)
    except HaukError as e:
        _fail(logger, escape(str(e)))


def _read_lock(logger: Logger, store: LockStore) -> LockFile:
    try:
        return store.read()
    except HaukError as e:
        _fail(logger, escape(str(e)))


def _split_names(text: str) -> list[str]:
    return [n for n in re.split(r"[,\s]+", text) if n]


def _display_path(path: Path, cwd: Path) -> str:
    try:
        return str(path.relative_to(cwd))
    except ValueError:
        return str(path)


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context):
    """hauktui — a shadcn-like workflow for terminal UIs.

    Browse the component registry, copy components into your project,
    and keep the copies in sync with upstream templates.
    """
    if ctx.obj is None:
        ctx.obj = Logger()


# ── Init ─────────────────────────────────────────────────────────────


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Skip prompts and use defaults")
@click.option("--no-install", is_flag=True, help="Don't install runtime packages")
@_cwd_option
@click.pass_obj
def init(logger: Logger, yes: bool, no_install: bool, cwd: Path):
    """Initialize hauktui in your project."""
    from hauktui.project.scaffold import ProjectScaffold, install_dependencies

    logger.log("\n[bold blue]haukTUI[/] — Setup\n")

    if is_initialized(cwd) and not yes:
        if not click.confirm("haukTUI is already initialized. Reinitialize?", default=False):
            logger.info("Initialization cancelled.")
            return

    try:
        config = read_config(cwd) or HaukConfig()
    except ConfigError as e:
        logger.warn(f"{escape(str(e))}. Starting from defaults.")
        config = HaukConfig()

    if not yes:
        config.component_dir = click.prompt(
            "Where would you like to store components?",
            default=config.component_dir,
        )

    result = ProjectScaffold(cwd).initialize(config)
    for directory in result["directories"]:
        logger.success(f"Directory ready: {escape(_display_path(directory, cwd))}")
    for path in result["files"]:
        logger.success(f"Wrote {escape(_display_path(path, cwd))}")

    if not no_install:
        with logger.status("Installing dependencies..."):
            install = install_dependencies(cwd)
        if install.passed:
            logger.success("Dependencies installed")
        else:
            logger.warn(f"Failed to install dependencies. Run manually: {escape(install.command_line)}")

    logger.break_()
    logger.success("haukTUI initialized! Run `hauktui add button` to add your first component.")


# ── Add ──────────────────────────────────────────────────────────────


@main.command()
@click.argument("components", nargs=-1)
@click.option("--all", "-a", "all_components", is_flag=True, help="Install all available components")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompts")
@click.option("--overwrite", "-o", is_flag=True, help="Overwrite existing files")
@_cwd_option
@click.pass_obj
def add(
    logger: Logger,
    components: tuple[str, ...],
    all_components: bool,
    yes: bool,
    overwrite: bool,
    cwd: Path,
):
    """Add components to your project."""
    config = _project_config(logger, cwd)
    index = _registry(logger)

    selected = list(components)
    if all_components:
        selected = index.available_names()
        logger.info(f"Installing all {len(selected)} components...")
    elif not selected:
        logger.log("Available components:")
        for meta in index.get_components():
            logger.log(f"  {meta.name.ljust(NAME_COLUMN)} {dim(escape(meta.description))}")
        selected = _split_names(
            click.prompt("Components to add (comma-separated)", default="", show_default=False)
        )

    if not selected:
        logger.warn("No components selected.")
        return

    valid, invalid = index.validate_components(selected)
    if invalid:
        logger.error(f"Unknown components: {escape(', '.join(invalid))}")
        logger.info(f"Available: {', '.join(index.available_names())}")
        raise SystemExit(1)

    store = LockStore(cwd)
    lock = _read_lock(logger, store)
    added = 0

    for meta in valid:
        target = get_component_path(config, meta.name, cwd)

        if target.exists() and not overwrite:
            existing = lock.get(meta.name)
            if existing:
                logger.info(f"{highlight(meta.name)} already installed (v{escape(existing.version)})")
                continue
            if not yes and not click.confirm(f"{meta.name} already exists. Overwrite?", default=False):
                continue

        with logger.status(f"Adding {highlight(meta.name)}..."):
            entry = install_component(meta, target)
        lock.record(entry)
        added += 1
        logger.success(f"Added {highlight(meta.name)}")

        if meta.notes:
            logger.info(f"  └─ {escape(meta.notes)}")

    store.write(lock)

    logger.break_()
    if added:
        logger.success(f"Added {added} component(s) to {escape(config.component_dir)}")
    else:
        logger.info("No components were added.")


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.option("--search", "-s", default=None, help="Search components")
@click.option("--category", "-c", default=None, help="Filter by category")
@click.pass_obj
def list_components(logger: Logger, search: str | None, category: str | None):
    """List available components."""
    index = _registry(logger)

    components = index.get_components()
    if search:
        components = index.search_components(search)
    if category:
        components = filter_by_category(components, category)

    if not components:
        logger.warn("No components found.")
        return

    logger.log("\nAvailable components:\n")

    for group, members in group_by_category(components).items():
        logger.log(highlight(escape(group.upper())))
        for meta in members:
            logger.log(f"  {meta.name.ljust(NAME_COLUMN)} {dim(escape(meta.description))}")
        logger.break_()

    logger.log(dim("Run `hauktui add <component>` to add a component"))


main.add_command(list_components, name="ls")


# ── View ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("component")
@click.pass_obj
def view(logger: Logger, component: str):
    """View component details."""
    try:
        meta = _registry(logger).require_component(component)
    except HaukError as e:
        _fail(logger, escape(str(e)))

    logger.break_()
    logger.log(format_component_info(meta))
    logger.break_()


# ── Diff ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("component")
@click.option("--patch", "-p", is_flag=True, help="Show a unified diff for changed files")
@_cwd_option
@click.pass_obj
def diff(logger: Logger, component: str, patch: bool, cwd: Path):
    """Show differences between local and upstream components."""
    config = _project_config(logger, cwd)

    meta = _registry(logger).get_component(component)
    if meta is None:
        _fail(logger, f'Component "{escape(component)}" not found in registry.')

    installed = _read_lock(logger, LockStore(cwd)).get(component)
    if installed is None:
        _fail(logger, f'Component "{escape(component)}" is not installed.')

    component_dir = get_component_path(config, component, cwd)
    if not component_dir.exists():
        _fail(logger, f"Component directory not found: {escape(str(component_dir))}")

    report = compare_component(
        component_dir, installed, fetch_component_files(meta), meta.version
    )

    logger.break_()
    logger.log(
        f"Comparing {highlight(component)} "
        f"(local v{escape(installed.version)} ↔ upstream v{escape(meta.version)})"
    )
    logger.break_()

    for file_diff in report.files:
        style, symbol = _STATUS_STYLES[file_diff.status]
        logger.log(f"[{style}]{symbol} {escape(file_diff.filename)}[/] {dim(f'({file_diff.status})')}")
        if patch and file_diff.changed:
            text = file_diff.unified_diff()
            if text:
                logger.raw(text)

    logger.break_()
    if not report.has_changes:
        logger.success("No differences found.")
    else:
        logger.info(f"Run `hauktui add --overwrite {escape(component)}` to update.")


# ── Update ───────────────────────────────────────────────────────────


@main.command()
@click.argument("components", nargs=-1)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompts")
@click.option("--force", "-f", is_flag=True, help="Force update even with local modifications")
@click.option("--check", is_flag=True, help="Only check for updates without applying")
@_cwd_option
@click.pass_obj
def update(
    logger: Logger,
    components: tuple[str, ...],
    yes: bool,
    force: bool,
    check: bool,
    cwd: Path,
):
    """Update installed components to the latest registry versions."""
    config = _project_config(logger, cwd)
    index = _registry(logger)
    store = LockStore(cwd)
    lock = _read_lock(logger, store)

    installed = lock.installed_names()
    if not installed:
        logger.info("No components installed.")
        return

    to_check = list(components) or installed
    not_installed = [name for name in to_check if lock.get(name) is None]
    if not_installed:
        _fail(logger, f"Not installed: {escape(', '.join(not_installed))}")

    with logger.status("Checking for updates..."):
        result = check_for_updates(to_check, lock, config, cwd, index)

    for name in result.not_in_registry:
        logger.warn(f'Component "{escape(name)}" not found in registry.')

    if not result.has_updates:
        logger.success("All components are up to date!")
        return

    logger.break_()
    logger.log("Updates available:")
    logger.break_()
    for candidate in result.candidates:
        warning = " (has local modifications)" if candidate.has_local_changes else ""
        logger.log(
            f"  {highlight(candidate.name)} "
            f"{escape(candidate.installed_version)} → {escape(candidate.latest_version)}{warning}"
        )
    logger.break_()

    if check:
        logger.info(f"{len(result.candidates)} update(s) available.")
        logger.info("Run `hauktui update` to apply updates.")
        return

    targets = result.candidates
    if result.with_local_changes and not force:
        logger.warn(f"{len(result.with_local_changes)} component(s) have local modifications.")
        logger.info("Use --force to overwrite, or update individually.")
        targets = result.safe_to_update
        if not targets:
            return

    if not yes and not click.confirm(f"Update {len(targets)} component(s)?", default=True):
        logger.info("Update cancelled.")
        return

    for candidate in apply_updates(targets, lock, config, cwd, index):
        logger.success(
            f"Updated {highlight(candidate.name)} "
            f"({escape(candidate.installed_version)} → {escape(candidate.latest_version)})"
        )

    store.write(lock)

    logger.break_()
    logger.success("Update complete!")


if __name__ == "__main__":
    main()
