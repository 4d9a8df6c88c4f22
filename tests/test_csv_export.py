# =============================================================================
# ClickUp MCP Server - CSV Export Tests
# =============================================================================
"""
Unit tests for the CSV export pipeline.

These tests verify that:
- Cells are escaped only when they contain a comma, quote or newline
- Custom field columns are the union of fields across tasks
- A requested custom field list is intersected with the fields present
- The combined phone column is placed and resolved correctly
- Standard columns render timestamps as full ISO 8601
"""

from typing import Any, Callable

import pytest

from clickup_mcp.csv_export import (
    PHONE_NUMBER_COLUMN,
    STANDARD_FIELDS,
    CsvExportOptions,
    build_csv,
    build_field_order,
    collect_custom_field_names,
    escape_csv,
    export_tasks_to_csv,
    resolve_phone_number,
    task_to_csv_row,
)
from clickup_mcp.models.tasks import Task
from clickup_mcp.pagination import TaskPaginator
from tests.conftest import FakeTransport


def _field(name: str, value: Any = None, field_type: str = "text") -> dict[str, Any]:
    return {"id": name.lower(), "name": name, "type": field_type, "value": value}


# -----------------------------------------------------------------------------
# Escaping
# -----------------------------------------------------------------------------
class TestEscapeCsv:
    """Tests for escape_csv."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", "plain"),
            ("a,b", '"a,b"'),
            ('say "hi"', '"say ""hi"""'),
            ("two\nlines", '"two\nlines"'),
            ("", ""),
            (None, ""),
            (42, "42"),
        ],
    )
    def test_escape(self, value: Any, expected: str) -> None:
        """Test quoting and quote doubling."""
        assert escape_csv(value) == expected

    def test_carriage_return_not_quoted(self) -> None:
        """Test that a lone carriage return does not trigger quoting."""
        assert escape_csv("a\rb") == "a\rb"


# -----------------------------------------------------------------------------
# Field Order
# -----------------------------------------------------------------------------
class TestBuildFieldOrder:
    """Tests for collect_custom_field_names and build_field_order."""

    def test_union_in_first_seen_order(self, make_task: Callable[..., Task]) -> None:
        """Test that every field seen on any task gets a column."""
        tasks = [
            make_task("a", custom_fields=[_field("Company"), _field("Email")]),
            make_task("b", custom_fields=[_field("Email"), _field("Owner")]),
        ]

        assert collect_custom_field_names(tasks) == ["Company", "Email", "Owner"]
        assert build_field_order(tasks) == [*STANDARD_FIELDS, "Company", "Email", "Owner"]

    def test_requested_fields_intersected(self, make_task: Callable[..., Task]) -> None:
        """Test that requested names keep their order and unknowns drop."""
        tasks = [make_task(custom_fields=[_field("A"), _field("B"), _field("C")])]

        order = build_field_order(
            tasks, custom_fields=["C", "Missing", "A"], include_standard_fields=False
        )

        assert order == ["C", "A"]

    def test_without_standard_fields(self, make_task: Callable[..., Task]) -> None:
        """Test that standard columns can be left out."""
        tasks = [make_task(custom_fields=[_field("A")])]

        assert build_field_order(tasks, include_standard_fields=False) == ["A"]

    def test_phone_column_after_email(self, make_task: Callable[..., Task]) -> None:
        """Test that the phone column follows the Email column."""
        tasks = [make_task(custom_fields=[_field("Email"), _field("Company")])]

        order = build_field_order(
            tasks, include_standard_fields=False, add_phone_number_column=True
        )

        assert order == ["Email", PHONE_NUMBER_COLUMN, "Company"]

    def test_phone_column_at_end(self, make_task: Callable[..., Task]) -> None:
        """Test that the phone column is appended when there is no Email."""
        tasks = [make_task(custom_fields=[_field("Company")])]

        order = build_field_order(tasks, add_phone_number_column=True)

        assert order[-1] == PHONE_NUMBER_COLUMN
        assert order.count(PHONE_NUMBER_COLUMN) == 1

    def test_existing_phone_column_not_duplicated(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that a real phone_number field is not added twice."""
        tasks = [make_task(custom_fields=[_field(PHONE_NUMBER_COLUMN), _field("Email")])]

        order = build_field_order(
            tasks, include_standard_fields=False, add_phone_number_column=True
        )

        assert order == [PHONE_NUMBER_COLUMN, "Email"]

    def test_custom_field_named_like_standard_column(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that a custom "Priority" field does not add a second column."""
        tasks = [make_task(custom_fields=[_field("Priority"), _field("Company")])]

        order = build_field_order(tasks)

        assert order.count("Priority") == 1
        assert order == [*STANDARD_FIELDS, "Company"]


# -----------------------------------------------------------------------------
# Phone Resolution
# -----------------------------------------------------------------------------
class TestResolvePhoneNumber:
    """Tests for resolve_phone_number."""

    def test_real_phone_number_field_first(self, make_task: Callable[..., Task]) -> None:
        """Test that a populated phone_number field wins."""
        task = make_task(
            custom_fields=[
                _field("Personal Phone", "202-555-0143", "phone"),
                _field(PHONE_NUMBER_COLUMN, "412-481-2210", "phone"),
            ]
        )

        assert resolve_phone_number(task) == "+14124812210"

    def test_personal_before_biz(self, make_task: Callable[..., Task]) -> None:
        """Test the preference order of the named phone fields."""
        task = make_task(
            custom_fields=[
                _field("Biz Phone number", "202-555-0143", "phone"),
                _field("Personal Phone", "412-481-2210", "phone"),
            ]
        )

        assert resolve_phone_number(task) == "+14124812210"

    def test_biz_when_personal_empty(self, make_task: Callable[..., Task]) -> None:
        """Test that an empty Personal Phone falls through to Biz."""
        task = make_task(
            custom_fields=[
                _field("Personal Phone", "", "phone"),
                _field("Biz Phone number", "202-555-0143", "phone"),
            ]
        )

        assert resolve_phone_number(task) == "+12025550143"

    def test_any_phone_field(self, make_task: Callable[..., Task]) -> None:
        """Test the fallback to the first phone-like field."""
        task = make_task(
            custom_fields=[
                _field("Notes", "call after 5"),
                _field("Mobile phone", "(412) 481-2210"),
            ]
        )

        assert resolve_phone_number(task) == "+14124812210"

    def test_no_phone(self, make_task: Callable[..., Task]) -> None:
        """Test that a task without phone fields resolves to empty."""
        task = make_task(custom_fields=[_field("Notes", "hello")])

        assert resolve_phone_number(task) == ""


# -----------------------------------------------------------------------------
# Rows
# -----------------------------------------------------------------------------
class TestTaskToCsvRow:
    """Tests for task_to_csv_row and build_csv."""

    def test_standard_columns(self, make_task: Callable[..., Task]) -> None:
        """Test the rendering of every standard column."""
        task = make_task(
            "abc",
            name="Call, then email",
            status="in progress",
            date_created="1609459200000",
            date_updated="1609459200500",
            url="https://app.clickup.com/t/abc",
            assignees=[{"id": 1, "username": "ann"}, {"id": 2, "email": "bo@x.io"}],
            creator={"id": 3, "username": "cy"},
            priority={"id": "2", "priority": "high"},
            text_content="Plain text",
            tags=[{"name": "lead"}, {"name": "vip"}],
        )

        row = task_to_csv_row(task, list(STANDARD_FIELDS))

        assert row == [
            "abc",
            '"Call, then email"',
            "in progress",
            "2021-01-01T00:00:00.000Z",
            "2021-01-01T00:00:00.500Z",
            "https://app.clickup.com/t/abc",
            "ann; bo@x.io",
            "cy",
            "",
            "high",
            "Plain text",
            "lead; vip",
        ]

    def test_empty_standard_columns(self, make_task: Callable[..., Task]) -> None:
        """Test that missing attributes render as empty cells."""
        task = make_task("abc", status=None)

        row = task_to_csv_row(task, ["Status", "Creator", "Priority", "Tags"])

        assert row == ["", "", "", ""]

    def test_custom_and_phone_columns(self, make_task: Callable[..., Task]) -> None:
        """Test that custom columns use the extractor and phones normalize."""
        task = make_task(
            custom_fields=[
                _field("Email", "a@b.co", "email"),
                _field("Phone", "412.481.2210", "phone"),
                _field("Deal size", 1500.0, "currency"),
            ]
        )

        row = task_to_csv_row(
            task,
            ["Email", PHONE_NUMBER_COLUMN, "Deal size", "Nope"],
            combined_phone=True,
        )

        assert row == ["a@b.co", "+14124812210", "1500", ""]

    def test_build_csv(self, make_task: Callable[..., Task]) -> None:
        """Test the full CSV text with header and escaped cells."""
        tasks = [
            make_task("a", custom_fields=[_field("Note", 'He said "hi"')]),
            make_task("b", custom_fields=[_field("Company", "Acme, Inc")]),
        ]
        options = CsvExportOptions(include_standard_fields=False)

        assert build_csv(tasks, options) == (
            'Note,Company\n"He said ""hi""",\n,"Acme, Inc"'
        )

    def test_custom_status_without_standard_fields(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that "Status" is read as a custom field when standard columns are off."""
        tasks = [make_task("a", status="to do", custom_fields=[_field("Status", "Hot")])]
        options = CsvExportOptions(include_standard_fields=False)

        assert build_csv(tasks, options) == "Status\nHot"

    def test_standard_column_wins_name_clash(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that a clashing custom field yields one standard column."""
        tasks = [
            make_task(
                "a",
                priority={"priority": "high"},
                custom_fields=[_field("Priority", "VIP lead")],
            )
        ]

        header, row = build_csv(tasks, CsvExportOptions()).split("\n")

        columns = header.split(",")
        assert columns.count("Priority") == 1
        assert row.split(",")[columns.index("Priority")] == "high"

    def test_real_phone_column_keeps_own_value(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that an empty phone_number field is not filled from other phones."""
        tasks = [
            make_task(
                custom_fields=[
                    _field(PHONE_NUMBER_COLUMN),
                    _field("Personal Phone", "412.481.2210", "phone"),
                ]
            )
        ]
        options = CsvExportOptions(include_standard_fields=False)

        assert build_csv(tasks, options) == (
            "phone_number,Personal Phone\n,+14124812210"
        )

    def test_combined_phone_column(self, make_task: Callable[..., Task]) -> None:
        """Test that the added phone column merges the task's phone fields."""
        tasks = [
            make_task(
                custom_fields=[
                    _field("Email", "a@b.co", "email"),
                    _field("Biz Phone number", "(412) 481-2210", "phone"),
                ]
            )
        ]
        options = CsvExportOptions(
            include_standard_fields=False, add_phone_number_column=True
        )

        assert build_csv(tasks, options) == (
            "Email,phone_number,Biz Phone number\na@b.co,+14124812210,+14124812210"
        )

    def test_build_csv_empty(self) -> None:
        """Test that no tasks produce an empty string."""
        assert build_csv([], CsvExportOptions()) == ""


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------
class TestExportTasksToCsv:
    """Tests for export_tasks_to_csv."""

    @pytest.mark.asyncio
    async def test_export_all_pages(self) -> None:
        """Test that every page is exported and statuses filter locally."""
        tasks = [
            {
                "id": f"t{i}",
                "name": f"Lead {i}",
                "status": {"status": "open" if i % 2 == 0 else "closed"},
                "custom_fields": [_field("Email", f"lead{i}@x.io", "email")],
            }
            for i in range(5)
        ]
        transport = FakeTransport(tasks, page_size=2)
        paginator = TaskPaginator(transport, max_limit=2)

        csv_text = await export_tasks_to_csv(
            paginator,
            "L1",
            CsvExportOptions(
                statuses=["open"],
                include_standard_fields=False,
                add_phone_number_column=True,
                include_closed=True,
            ),
        )

        assert csv_text.split("\n") == [
            f"Email,{PHONE_NUMBER_COLUMN}",
            "lead0@x.io,",
            "lead2@x.io,",
            "lead4@x.io,",
        ]
        assert [q["page"] for q in transport.queries] == [0, 1, 2]
        assert all("statuses" not in q for q in transport.queries)
        assert transport.queries[0]["include_closed"] is True

    @pytest.mark.asyncio
    async def test_export_nothing_matches(self) -> None:
        """Test that an export with no matching tasks is empty."""
        transport = FakeTransport([{"id": "t1", "status": {"status": "done"}}])
        paginator = TaskPaginator(transport)

        csv_text = await export_tasks_to_csv(
            paginator, "L1", CsvExportOptions(statuses=["open"])
        )

        assert csv_text == ""
