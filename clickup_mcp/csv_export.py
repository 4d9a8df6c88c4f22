# =============================================================================
# ClickUp MCP Server - CSV Export
# =============================================================================
"""
Export of a ClickUp list to CSV.

Tasks in one list rarely share an identical set of custom fields, so the
header is built from the union of custom field names seen across every
task. An optional `phone_number` column merges the various phone fields
into one E.164 value per task, for dialers that expect a single column.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from clickup_mcp.custom_fields import (
    extract_custom_field_value,
    get_custom_field,
    is_phone_named,
)
from clickup_mcp.models.tasks import Task
from clickup_mcp.pagination import TaskPaginator, filter_tasks_by_status
from clickup_mcp.utils import format_iso_timestamp

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

STANDARD_FIELDS: tuple[str, ...] = (
    "Task ID",
    "Name",
    "Status",
    "Date Created",
    "Date Updated",
    "URL",
    "Assignees",
    "Creator",
    "Due Date",
    "Priority",
    "Description",
    "Tags",
)

PHONE_NUMBER_COLUMN = "phone_number"
EMAIL_COLUMN = "Email"

# Fallback order for the combined phone column
PREFERRED_PHONE_FIELDS: tuple[str, ...] = ("Personal Phone", "Biz Phone number")

_PHONE_TYPES = {"phone", "phone_number"}
_LIST_SEPARATOR = "; "


@dataclass
class CsvExportOptions:
    """
    Options for exporting a list to CSV.

    Attributes:
        archived: Include archived tasks.
        include_closed: Include closed tasks.
        statuses: Only export tasks with these status names (exact match).
        custom_fields: Only export these custom fields, in this order.
        include_standard_fields: Prepend the standard task columns.
        add_phone_number_column: Add a combined `phone_number` column.
    """

    archived: bool = False
    include_closed: bool = False
    statuses: Optional[list[str]] = None
    custom_fields: Optional[list[str]] = None
    include_standard_fields: bool = True
    add_phone_number_column: bool = False


# -----------------------------------------------------------------------------
# Cell Helpers
# -----------------------------------------------------------------------------
def escape_csv(value: Any) -> str:
    """
    Escape a value for a CSV cell.

    Values containing a comma, double quote or newline are wrapped in
    double quotes with inner quotes doubled.

    Args:
        value: Cell value (None renders as "").

    Returns:
        The CSV-safe cell text.
    """
    if value is None:
        return ""
    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def resolve_phone_number(task: Task) -> str:
    """
    Pick the single phone number for the combined phone column.

    Order: a real `phone_number` custom field, then "Personal Phone", then
    "Biz Phone number", then the first phone-typed or phone-named field.

    Args:
        task: Task to read from.

    Returns:
        E.164 phone number, or "" if the task has none.
    """
    value = get_custom_field(task, PHONE_NUMBER_COLUMN)
    if value:
        return value

    for field_name in PREFERRED_PHONE_FIELDS:
        value = get_custom_field(task, field_name)
        if value:
            return value

    for field in task.custom_fields:
        if field.type in _PHONE_TYPES or is_phone_named(field):
            return extract_custom_field_value(field)

    return ""


def _standard_value(task: Task, column: str) -> str:
    if column == "Task ID":
        return task.id
    if column == "Name":
        return task.name
    if column == "Status":
        return task.status_name or ""
    if column == "Date Created":
        return format_iso_timestamp(task.date_created)
    if column == "Date Updated":
        return format_iso_timestamp(task.date_updated)
    if column == "URL":
        return task.url or ""
    if column == "Assignees":
        return _LIST_SEPARATOR.join(
            a.username or a.email or "" for a in task.assignees
        )
    if column == "Creator":
        if not task.creator:
            return ""
        return task.creator.username or task.creator.email or ""
    if column == "Due Date":
        return format_iso_timestamp(task.due_date)
    if column == "Priority":
        return (task.priority.priority or "") if task.priority else ""
    if column == "Description":
        return task.description or task.text_content or ""
    if column == "Tags":
        return _LIST_SEPARATOR.join(t.name for t in task.tags)
    raise KeyError(column)


def task_to_csv_row(
    task: Task,
    field_order: list[str],
    include_standard_fields: bool = True,
    combined_phone: bool = False,
) -> list[str]:
    """
    Convert a task into escaped CSV cells.

    Args:
        task: Task to convert.
        field_order: Column names, in output order.
        include_standard_fields: Whether standard column names refer to the
            task attributes. When False, a custom field named "Status" or
            "Priority" is read as a custom field.
        combined_phone: Whether the `phone_number` column is the combined
            phone column. When False it is read as a plain custom field.

    Returns:
        One escaped cell per column.
    """
    row: list[str] = []
    for column in field_order:
        if include_standard_fields and column in STANDARD_FIELDS:
            value = _standard_value(task, column)
        elif combined_phone and column == PHONE_NUMBER_COLUMN:
            value = resolve_phone_number(task)
        else:
            value = get_custom_field(task, column)
        row.append(escape_csv(value))
    return row


# -----------------------------------------------------------------------------
# Header Construction
# -----------------------------------------------------------------------------
def collect_custom_field_names(tasks: list[Task]) -> list[str]:
    """
    Union of custom field names across tasks, in first-seen order.

    Args:
        tasks: Tasks to scan.

    Returns:
        Unique field names.
    """
    names: dict[str, None] = {}
    for task in tasks:
        for field in task.custom_fields:
            names.setdefault(field.name, None)
    return list(names)


def build_field_order(
    tasks: list[Task],
    custom_fields: Optional[list[str]] = None,
    include_standard_fields: bool = True,
    add_phone_number_column: bool = False,
) -> list[str]:
    """
    Decide the CSV columns for a set of tasks.

    Args:
        tasks: Tasks being exported.
        custom_fields: Requested custom fields; names no task carries are
            dropped. None or empty means every field seen.
        include_standard_fields: Prepend the standard task columns.
        add_phone_number_column: Add a combined `phone_number` column right
            after `Email` (or at the end) unless one already exists.

    Returns:
        Column names in output order.
    """
    seen = collect_custom_field_names(tasks)

    if custom_fields:
        available = set(seen)
        selected = [name for name in custom_fields if name in available]
    else:
        selected = seen

    field_order: list[str] = []
    if include_standard_fields:
        field_order.extend(STANDARD_FIELDS)
    # A custom field sharing a standard column name is shown once, as the
    # standard column.
    field_order.extend(name for name in selected if name not in field_order)

    if add_phone_number_column and PHONE_NUMBER_COLUMN not in field_order:
        if EMAIL_COLUMN in field_order:
            field_order.insert(field_order.index(EMAIL_COLUMN) + 1, PHONE_NUMBER_COLUMN)
        else:
            field_order.append(PHONE_NUMBER_COLUMN)

    return field_order


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------
def build_csv(tasks: list[Task], options: CsvExportOptions) -> str:
    """
    Render tasks as CSV text.

    Args:
        tasks: Tasks to export (already filtered).
        options: Column options.

    Returns:
        CSV text with a header row, rows joined by newlines; "" when there
        are no tasks.
    """
    if not tasks:
        return ""

    field_order = build_field_order(
        tasks,
        custom_fields=options.custom_fields,
        include_standard_fields=options.include_standard_fields,
        add_phone_number_column=options.add_phone_number_column,
    )

    # A real phone_number custom field keeps its own value
    combined_phone = (
        options.add_phone_number_column
        and PHONE_NUMBER_COLUMN not in collect_custom_field_names(tasks)
    )

    rows = [",".join(escape_csv(column) for column in field_order)]
    for task in tasks:
        cells = task_to_csv_row(
            task,
            field_order,
            include_standard_fields=options.include_standard_fields,
            combined_phone=combined_phone,
        )
        rows.append(",".join(cells))
    return "\n".join(rows)


async def export_tasks_to_csv(
    paginator: TaskPaginator,
    list_id: str,
    options: Optional[CsvExportOptions] = None,
) -> str:
    """
    Export every task in a list to CSV.

    All pages are fetched first (the status filter is applied locally),
    then the header is built from the fetched tasks.

    Args:
        paginator: Paginator to fetch with.
        list_id: The list to export.
        options: Export options.

    Returns:
        CSV text, or "" when no task matches.
    """
    options = options or CsvExportOptions()

    tasks = await paginator.fetch_all(
        f"list/{list_id}/task",
        {"archived": options.archived, "include_closed": options.include_closed},
    )
    tasks = filter_tasks_by_status(tasks, options.statuses)

    logger.info(f"Exporting {len(tasks)} tasks from list {list_id} to CSV")
    return build_csv(tasks, options)
