"""
Unit tests for rich plan rendering.
"""

from rich.table import Table

from mockup_kit import print_plan, render_plan
from mockup_kit.core.builder import MockBuilder
from mockup_kit.utilities.console import build_plan_table
from tests.fixtures.models import Node, Person


class TestPlanRendering:
    """Test cases for plan tables."""

    def test_render_plan_table(self):
        """Test one row per visited property."""
        table = render_plan(Person)

        assert isinstance(table, Table)
        assert table.row_count == 7
        assert "Person" in str(table.title)

    def test_print_plan(self, record_console):
        """Test printed output lists paths and sources."""
        print_plan(Person, {"job.salary": 1}, console=record_console)
        output = record_console.export_text()

        assert "job.salary" in output
        assert "override" in output
        assert "nested" in output
        assert "decimal" in output

    def test_cycle_row(self, record_console):
        """Test cyclic properties are shown instead of failing."""
        print_plan(Node, console=record_console)
        assert "cycle" in record_console.export_text()

    def test_empty_plan(self):
        """Test an empty plan renders an empty table."""
        table = build_plan_table(MockBuilder(object).plan())
        assert table.row_count == 0
