"""Format component metadata for terminal display."""

from __future__ import annotations

from rich.markup import escape

from hauktui.registry.models import ComponentMeta


def format_component_info(meta: ComponentMeta) -> str:
    """Render a component as rich markup, one labelled fact per line."""
    lines = [
        f"[bold]{escape(meta.name)}[/] [dim]v{escape(meta.version)}[/]",
        f"  {escape(meta.description)}",
        f"  [dim]Category:[/] {escape(meta.category)}",
        f"  [dim]Tags:[/] {escape(', '.join(meta.tags))}",
        f"  [dim]Files:[/] {escape(', '.join(meta.files))}",
    ]

    deps = list(meta.dependencies) + list(meta.registry_dependencies)
    if deps:
        lines.append(f"  [dim]Dependencies:[/] {escape(', '.join(deps))}")

    if meta.notes:
        lines.append(f"  [dim]Note:[/] {escape(meta.notes)}")

    return "\n".join(lines)
