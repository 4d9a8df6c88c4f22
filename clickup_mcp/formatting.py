# =============================================================================
# ClickUp MCP Server - Markdown Formatting
# =============================================================================
"""
Markdown rendering for tasks, task listings, the team hierarchy, comments
and time entries.

Each task in a full listing starts with a `# {name} ({id})` header; the
truncator counts these headers to report how many tasks survived a cut.
"""

from typing import Any, Optional

from clickup_mcp.config import ResponseMode
from clickup_mcp.models.common import PaginationInfo, TaskCountResult
from clickup_mcp.models.tasks import Task, TaskPriority, User
from clickup_mcp.models.workspace import (
    Comment,
    Folder,
    Space,
    TaskList,
    Team,
    TimeEntry,
)
from clickup_mcp.utils import format_date, parse_epoch_millis


def format_priority(priority: Optional[TaskPriority]) -> str:
    """Priority label, or "None" when unset."""
    if not priority or not priority.priority:
        return "None"
    return priority.priority


def format_task_markdown(task: Task) -> str:
    """
    Render a task as detailed markdown.

    Args:
        task: The task to render.

    Returns:
        Markdown block for the task.
    """
    lines = [
        f"# {task.name} ({task.id})",
        "",
        f"**Status**: {task.status_name or 'Unknown'}",
        f"**Priority**: {format_priority(task.priority)}",
        f"**Created**: {format_date(task.date_created)}",
        f"**Updated**: {format_date(task.date_updated)}",
    ]

    if task.due_date:
        lines.append(f"**Due Date**: {format_date(task.due_date)}")

    if task.assignees:
        names = ", ".join(f"@{a.username} ({a.id})" for a in task.assignees)
        lines.append(f"**Assignees**: {names}")

    if task.tags:
        lines.append(f"**Tags**: {', '.join(t.name for t in task.tags)}")

    if task.description:
        lines.extend(["", "## Description", task.description])

    lines.extend(["", f"**URL**: {task.url or ''}"])
    return "\n".join(lines)


def format_task_compact(task: Task) -> str:
    """Render a task as a single markdown bullet."""
    assignees = (
        ", ".join(a.username or str(a.id) for a in task.assignees)
        if task.assignees
        else "Unassigned"
    )
    return (
        f"- **{task.name}** ({task.id}) | Status: {task.status_name or 'Unknown'} "
        f"| Assignees: {assignees} | URL: {task.url or ''}"
    )


def _count_lines(counts: dict[str, int]) -> list[str]:
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [f"- {name}: {count}" for name, count in ranked]


def generate_task_summary(tasks: list[Task]) -> str:
    """
    Summarize tasks by status, assignee and priority.

    Args:
        tasks: Tasks to summarize.

    Returns:
        Markdown summary with counts sorted from most to least common.
    """
    status_counts: dict[str, int] = {}
    assignee_counts: dict[str, int] = {}
    priority_counts: dict[str, int] = {}

    for task in tasks:
        status = task.status_name or "Unknown"
        status_counts[status] = status_counts.get(status, 0) + 1

        if task.assignees:
            for assignee in task.assignees:
                name = assignee.username or str(assignee.id)
                assignee_counts[name] = assignee_counts.get(name, 0) + 1
        else:
            assignee_counts["Unassigned"] = assignee_counts.get("Unassigned", 0) + 1

        priority = format_priority(task.priority)
        priority_counts[priority] = priority_counts.get(priority, 0) + 1

    lines = ["# Task Summary", "", f"**Total Tasks**: {len(tasks)}", ""]
    lines.append("## By Status")
    lines.extend(_count_lines(status_counts))
    lines.extend(["", "## By Assignee"])
    lines.extend(_count_lines(assignee_counts))
    lines.extend(["", "## By Priority"])
    lines.extend(_count_lines(priority_counts))
    return "\n".join(lines)


def format_task_list(
    title: str,
    tasks: list[Task],
    total_found: int,
    pagination: PaginationInfo,
    response_mode: ResponseMode,
) -> str:
    """
    Render a page of tasks for the list and search tools.

    Args:
        title: Heading for the listing.
        tasks: Tasks on this page.
        total_found: Number of tasks reported as found.
        pagination: Pagination info for the page.
        response_mode: FULL or COMPACT (SUMMARY is rendered by the caller).

    Returns:
        Markdown listing.
    """
    lines = [
        f"# {title}",
        "",
        f"Found {total_found} task(s) (offset: {pagination.offset})",
        "",
    ]

    for task in tasks:
        if response_mode == ResponseMode.COMPACT:
            lines.append(format_task_compact(task))
        else:
            lines.append(format_task_markdown(task))
            lines.extend(["", "---", ""])

    if pagination.has_more:
        lines.extend([
            "",
            f"More results available. Use offset={pagination.next_offset} "
            f"to get next page.",
        ])

    return "\n".join(lines)


def format_task_counts(
    list_id: str,
    result: TaskCountResult,
    statuses: Optional[list[str]] = None,
) -> str:
    """
    Render task counts for the count tool.

    Args:
        list_id: The list that was counted.
        result: Count result.
        statuses: Status filter that was applied, if any.

    Returns:
        Markdown report.
    """
    lines = [f"# Task Counts for List {list_id}", ""]

    if statuses:
        lines.extend([f"**Filtering by status**: {', '.join(statuses)}", ""])

    lines.extend([f"**Total tasks**: {result.total}", ""])

    if result.by_status:
        lines.append("## Counts by Status")
        lines.extend(_count_lines(result.by_status))
    else:
        lines.append("No tasks found matching the criteria.")

    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Hierarchy
# -----------------------------------------------------------------------------
def _enabled(flag: bool) -> str:
    return "Enabled" if flag else "Disabled"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def format_team_list(teams: list[Team]) -> str:
    """Render the teams the user belongs to."""
    lines = ["# ClickUp Teams", "", f"Found {len(teams)} team(s)", ""]
    for team in teams:
        lines.append(f"## {team.name} ({team.id})")
        if team.color:
            lines.append(f"- Color: {team.color}")
        lines.append("")
    return "\n".join(lines)


def format_space_markdown(space: Space) -> str:
    """
    Render a space with its feature toggles.

    Args:
        space: The space to render.

    Returns:
        Markdown block for the space.
    """
    lines = [
        f"# {space.name} ({space.id})",
        "",
        f"**Private**: {_yes_no(space.private)}",
        f"**Multiple Assignees**: {_yes_no(space.multiple_assignees)}",
    ]
    if space.features is not None:
        lines.extend([
            "",
            "## Features",
            f"- Due Dates: {_enabled(space.feature_enabled('due_dates'))}",
            f"- Time Tracking: {_enabled(space.feature_enabled('time_tracking'))}",
            f"- Tags: {_enabled(space.feature_enabled('tags'))}",
            f"- Custom Fields: {_enabled(space.feature_enabled('custom_fields'))}",
        ])
    return "\n".join(lines)


def format_folder_markdown(folder: Folder) -> str:
    """
    Render a folder and the lists in it.

    Args:
        folder: The folder to render.

    Returns:
        Markdown block for the folder.
    """
    lines = [
        f"# {folder.name} ({folder.id})",
        "",
        f"**Tasks**: {folder.task_count if folder.task_count is not None else 0}",
        f"**Hidden**: {_yes_no(folder.hidden)}",
    ]
    if folder.space and folder.space.name:
        lines.append(f"**Space**: {folder.space.name}")
    if folder.lists:
        lines.extend(["", "## Lists"])
        for task_list in folder.lists:
            count = task_list.task_count if task_list.task_count is not None else 0
            lines.append(f"- {task_list.name} ({task_list.id}) - {count} tasks")
    return "\n".join(lines)


def format_list_markdown(task_list: TaskList) -> str:
    """
    Render a list with its location and statuses.

    Args:
        task_list: The list to render.

    Returns:
        Markdown block for the list.
    """
    count = task_list.task_count if task_list.task_count is not None else 0
    lines = [f"# {task_list.name} ({task_list.id})", "", f"**Tasks**: {count}"]
    if task_list.folder and task_list.folder.name:
        lines.append(f"**Folder**: {task_list.folder.name}")
    if task_list.space and task_list.space.name:
        lines.append(f"**Space**: {task_list.space.name}")
    if task_list.statuses:
        lines.extend(["", "## Statuses"])
        for status in task_list.statuses:
            lines.append(f"- {status.status} ({status.type or 'custom'})")
    return "\n".join(lines)


def format_collection(
    title: str,
    items: list[str],
    found: str,
    separated: bool = False,
) -> str:
    """
    Render a titled markdown listing of pre-rendered items.

    Args:
        title: Heading for the listing.
        items: Rendered item blocks.
        found: The "Found N ..." line.
        separated: Put a horizontal rule after each item.

    Returns:
        Markdown listing.
    """
    lines = [f"# {title}", "", found, ""]
    for item in items:
        lines.extend([item, ""])
        if separated:
            lines.extend(["---", ""])
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Comments and Time Entries
# -----------------------------------------------------------------------------
def _username(user: Optional[User]) -> str:
    if not user:
        return "unknown"
    return user.username or str(user.id)


def format_comment_markdown(comment: Comment) -> str:
    """Render a comment with its author and date."""
    lines = [
        f"**@{_username(comment.user)}** ({format_date(comment.date)})",
        comment.comment_text,
    ]
    if comment.resolved:
        lines.append("*(Resolved)*")
    return "\n".join(lines)


def format_duration(value: Any) -> str:
    """
    Render a millisecond duration as hours and minutes, e.g. "1h 30m".

    Args:
        value: Raw duration in milliseconds.

    Returns:
        The duration, or "running" for the negative duration ClickUp
        reports on a running entry.
    """
    millis = parse_epoch_millis(value) or 0
    if millis < 0:
        return "running"
    hours, remainder = divmod(millis, 3_600_000)
    return f"{hours}h {remainder // 60_000}m"


def format_time_entry_markdown(entry: TimeEntry) -> str:
    """
    Render a time entry.

    Args:
        entry: The entry to render.

    Returns:
        Markdown block for the entry.
    """
    lines = [
        f"**@{_username(entry.user)}** - {format_duration(entry.duration)}",
        f"- Start: {format_date(entry.start)}",
    ]
    if entry.is_running:
        lines.append("- End: *(Still running)*")
    else:
        lines.append(f"- End: {format_date(entry.end)}")

    if entry.task and entry.task.id:
        lines.append(f"- Task: {entry.task.name or ''} ({entry.task.id})")
    if entry.description:
        lines.append(f"- Description: {entry.description}")
    lines.append(f"- Billable: {_yes_no(entry.billable)}")
    return "\n".join(lines)
