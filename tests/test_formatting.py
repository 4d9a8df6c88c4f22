# =============================================================================
# ClickUp MCP Server - Formatting Tests
# =============================================================================
"""
Unit tests for timestamp helpers and markdown rendering.
"""

from typing import Callable

import pytest

from clickup_mcp.formatting import (
    format_duration,
    format_folder_markdown,
    format_task_compact,
    format_task_markdown,
    generate_task_summary,
)
from clickup_mcp.models.tasks import Task
from clickup_mcp.models.workspace import Folder
from clickup_mcp.utils import format_date, format_iso_timestamp, parse_epoch_millis


class TestTimestamps:
    """Tests for the epoch-millisecond helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1609459200000", 1609459200000),
            (1609459200000, 1609459200000),
            ("1609459200000.0", 1609459200000),
            ("abc", None),
            (None, None),
            (True, None),
        ],
    )
    def test_parse_epoch_millis(self, value, expected) -> None:
        """Test lenient parsing of timestamps."""
        assert parse_epoch_millis(value) == expected

    def test_format_date(self) -> None:
        """Test the markdown date format."""
        assert format_date("1609459200000") == "2021-01-01 00:00:00 UTC"
        assert format_date(None) == "Not set"
        assert format_date("garbage") == "Not set"

    def test_format_iso_timestamp(self) -> None:
        """Test the CSV timestamp format."""
        assert format_iso_timestamp("1609459200000") == "2021-01-01T00:00:00.000Z"
        assert format_iso_timestamp("") == ""


class TestTaskMarkdown:
    """Tests for task markdown rendering."""

    def test_full(self, make_task: Callable[..., Task]) -> None:
        """Test the detailed task block."""
        task = make_task(
            "t9",
            name="Follow up",
            status="open",
            date_created="1609459200000",
            assignees=[{"id": 7, "username": "ann"}],
            tags=[{"name": "vip"}],
            priority={"priority": "urgent"},
            description="Call twice.",
            url="https://app.clickup.com/t/t9",
        )

        text = format_task_markdown(task)

        assert text.startswith("# Follow up (t9)\n")
        assert "**Status**: open" in text
        assert "**Priority**: urgent" in text
        assert "**Created**: 2021-01-01 00:00:00 UTC" in text
        assert "**Updated**: Not set" in text
        assert "**Assignees**: @ann (7)" in text
        assert "**Tags**: vip" in text
        assert "## Description\nCall twice." in text
        assert text.endswith("**URL**: https://app.clickup.com/t/t9")
        assert "Due Date" not in text

    def test_compact_unassigned(self, make_task: Callable[..., Task]) -> None:
        """Test the one-line rendering of an unassigned task."""
        task = make_task("t1", name="Ping", status=None)

        assert format_task_compact(task) == (
            "- **Ping** (t1) | Status: Unknown | Assignees: Unassigned | URL: "
        )

    def test_summary(self, make_task: Callable[..., Task]) -> None:
        """Test counts by status, assignee and priority."""
        tasks = [
            make_task("a", status="open", assignees=[{"id": 1, "username": "ann"}]),
            make_task("b", status="open"),
            make_task("c", status="done", priority={"priority": "high"}),
        ]

        text = generate_task_summary(tasks)

        assert "**Total Tasks**: 3" in text
        assert "## By Status\n- open: 2\n- done: 1" in text
        assert "- Unassigned: 2" in text
        assert "- ann: 1" in text
        assert "## By Priority\n- None: 2\n- high: 1" in text


class TestHierarchyMarkdown:
    """Tests for hierarchy and time entry rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("5400000", "1h 30m"),
            (59_999, "0h 0m"),
            (None, "0h 0m"),
            ("-1609459200000", "running"),
        ],
    )
    def test_format_duration(self, value, expected: str) -> None:
        """Test hour and minute rendering of durations."""
        assert format_duration(value) == expected

    def test_hidden_folder_without_lists(self) -> None:
        """Test a folder with no task count, space or lists."""
        folder = Folder.model_validate(
            {"id": "f1", "name": "Archive", "hidden": True, "lists": None}
        )

        assert format_folder_markdown(folder) == (
            "# Archive (f1)\n\n**Tasks**: 0\n**Hidden**: Yes"
        )
