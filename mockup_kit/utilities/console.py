"""
Rich-based rendering of build plans.

Shows test authors which dotted paths a target type exposes, the type tag
of each, and where its value would come from.
"""

from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..config.builder_config import BuilderConfig
from ..core.builder import MockBuilder, PlanEntry
from .introspection import qualified_name

SOURCE_STYLES: dict[str, str] = {
    "override": "#ffd93d",  # Yellow for caller-supplied values
    "default": "#00d26a",  # Green for table defaults
    "nested": "#00d4ff",  # Cyan for recursive builds
    "skipped": "#6c757d",  # Gray for untyped properties
    "cycle": "#ff6b6b",  # Red for cyclic references
}


def build_plan_table(entries: list[PlanEntry], title: str | None = None) -> Table:
    """Build a table with one row per plan entry."""
    table = Table(title=title, show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("Path", no_wrap=True)
    table.add_column("Tag")
    table.add_column("Type")
    table.add_column("Source")

    for entry in entries:
        style = SOURCE_STYLES.get(entry.source, "")
        table.add_row(
            Text(str(entry.path)),
            entry.tag.value,
            entry.type_name,
            Text(entry.source, style=style),
        )
    return table


def render_plan(
    target: type,
    overrides: Mapping[str, Any] | None = None,
    *,
    config: BuilderConfig | None = None,
) -> Table:
    """Render the build plan of ``target`` as a rich table."""
    entries = MockBuilder(target, overrides, config).plan()
    return build_plan_table(entries, title=f"Build plan for {qualified_name(target)}")


def print_plan(
    target: type,
    overrides: Mapping[str, Any] | None = None,
    *,
    console: Console | None = None,
    config: BuilderConfig | None = None,
) -> None:
    """Print the build plan of ``target``."""
    (console or Console()).print(render_plan(target, overrides, config=config))
