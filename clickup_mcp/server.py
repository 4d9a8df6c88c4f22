# =============================================================================
# ClickUp MCP Server
# =============================================================================
"""
FastMCP server providing ClickUp task tools.

This server exposes MCP tools for:
- Browsing the team, space, folder and list hierarchy
- Listing tasks in a list, with status filtering and pagination
- Searching tasks across a team
- Reading, creating, updating and deleting tasks
- Counting tasks per status
- Exporting a list to CSV (with a combined phone number column)
- Setting custom field values
- Reading and adding task comments
- Time tracking

Every tool returns text: markdown or JSON on success, a readable error
message on failure. Listing responses are bounded by the configured
character limit.
"""

import json
import logging
from typing import Any, Callable, Optional, Sequence

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, Field

from clickup_mcp.client import ClickUpApiError, ClickUpClient
from clickup_mcp.config import ResponseFormat, ResponseMode, get_settings
from clickup_mcp.csv_export import CsvExportOptions, export_tasks_to_csv
from clickup_mcp.formatting import (
    format_collection,
    format_comment_markdown,
    format_folder_markdown,
    format_list_markdown,
    format_space_markdown,
    format_task_counts,
    format_task_list,
    format_task_markdown,
    format_team_list,
    format_time_entry_markdown,
    generate_task_summary,
)
from clickup_mcp.models.common import PaginationInfo
from clickup_mcp.models.tasks import AssigneeChanges, TaskCreate, TaskUpdate
from clickup_mcp.pagination import TaskPage, TaskPaginator, count_tasks_by_status
from clickup_mcp.truncation import (
    TruncationResult,
    format_truncation_info,
    truncate_response,
    truncation_message,
)

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


# -----------------------------------------------------------------------------
# Initialize ClickUp Client
# -----------------------------------------------------------------------------
clickup_client: Optional[ClickUpClient] = None


def get_clickup_client() -> ClickUpClient:
    """
    Get or create the ClickUp client.

    A client is created even without a token; its requests then fail with
    an authentication error that the tools report to the caller.

    Returns:
        Initialized ClickUpClient instance.
    """
    global clickup_client

    if clickup_client is None:
        clickup_client = ClickUpClient(
            api_token=settings.clickup_api_token,
            base_url=settings.clickup_api_base_url,
            timeout=settings.clickup_request_timeout,
        )

    return clickup_client


def get_paginator() -> TaskPaginator:
    """Paginator over the shared client, using the configured page size."""
    return TaskPaginator(get_clickup_client(), max_limit=settings.max_limit)


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------
def handle_api_error(e: Exception) -> str:
    """
    Convert an exception to a readable error message.

    Args:
        e: The exception to handle.

    Returns:
        Error text for the tool response.
    """
    if isinstance(e, ClickUpApiError):
        err = (e.details or {}).get("err")
        status = e.status_code

        if status == 400:
            return f"Error: Bad request. {err or 'Check your parameters and try again.'}"
        if status == 401:
            return (
                "Error: Invalid or missing API token. Please check your "
                "CLICKUP_API_TOKEN environment variable."
            )
        if status == 403:
            return "Error: Permission denied. You don't have access to this resource."
        if status == 404:
            return f"Error: Resource not found. {err or 'Please check the ID is correct.'}"
        if status == 429:
            return (
                "Error: Rate limit exceeded. Please wait before making more "
                "requests. ClickUp allows 100 requests/minute (Business) or "
                "1000/minute (Business Plus+)."
            )
        if status >= 500:
            return (
                "Error: ClickUp server error. Please try again later or check "
                "https://status.clickup.com"
            )
        if status == 0:
            return f"Error: Cannot connect to ClickUp API. {e.message}"
        return f"Error: API request failed with status {status}. {err or ''}".rstrip()

    logger.error(f"Unexpected error: {e}")
    return f"Error: Unexpected error occurred: {e}"


def _validate_window(offset: int, limit: int) -> Optional[str]:
    """Return an error message for an unusable offset/limit pair."""
    if limit < 1 or limit > settings.max_limit:
        return f"Error: limit ({limit}) must be between 1 and {settings.max_limit}."
    if offset < 0:
        return f"Error: offset ({offset}) must not be negative."
    if offset % limit != 0:
        return (
            f"Error: offset ({offset}) must be a multiple of limit ({limit}) "
            f"for proper pagination."
        )
    return None


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _render_task_page(
    title: str,
    page: TaskPage,
    response_format: ResponseFormat,
    response_mode: ResponseMode,
) -> str:
    """
    Render a page of tasks and bound it to the character limit.

    Args:
        title: Markdown heading.
        page: The fetched page.
        response_format: Markdown or JSON.
        response_mode: Detail level for markdown.

    Returns:
        Response text, with a footer if it was truncated.
    """
    if response_format == ResponseFormat.JSON:
        result = _dump_json({
            "tasks": [
                t.model_dump(mode="json", exclude_none=True) for t in page.tasks
            ],
            "pagination": page.pagination.to_dict(),
        })
    elif response_mode == ResponseMode.SUMMARY:
        result = generate_task_summary(page.matched_tasks)
    else:
        result = format_task_list(
            title,
            page.tasks,
            page.total_matched,
            page.pagination,
            response_mode,
        )

    truncated = truncate_response(
        result,
        len(page.tasks),
        "tasks",
        limit=settings.character_limit,
    )
    if response_format == ResponseFormat.JSON and truncated.truncation:
        truncated = _restate_json_pagination(truncated, page)
    return truncated.content + format_truncation_info(truncated.truncation)


def _restate_json_pagination(
    truncated: TruncationResult, page: TaskPage
) -> TruncationResult:
    """
    Point a JSON page that lost tasks at the first task it dropped.

    The embedded pagination is rebuilt for the tasks actually kept, so
    `next_offset` resumes right after the last returned task. Rebuilding can
    lengthen the document; further tasks are dropped until it fits again.

    Args:
        truncated: Truncated JSON page.
        page: The page before truncation.

    Returns:
        The truncation result with consistent pagination.
    """
    try:
        data = json.loads(truncated.content)
    except json.JSONDecodeError:
        # Fell back to a markdown cut; there is no pagination object left
        return truncated

    tasks = data.get("tasks") if isinstance(data, dict) else None
    if not isinstance(tasks, list) or len(tasks) >= len(page.tasks):
        return truncated

    offset = page.pagination.offset
    while True:
        data["pagination"] = PaginationInfo(
            total=page.pagination.total,
            count=len(tasks),
            offset=offset,
            has_more=True,
            next_offset=offset + len(tasks),
        ).to_dict()
        content = _dump_json(data)
        if len(content) <= settings.character_limit or len(tasks) <= 1:
            break
        tasks.pop()

    truncation = truncated.truncation.model_copy(
        update={
            "returned_count": len(tasks),
            "truncation_message": truncation_message(
                len(page.tasks), len(tasks), "tasks", settings.character_limit
            ),
        }
    )
    return TruncationResult(content=content, truncation=truncation)


def _bounded(content: str, item_count: int, item_label: str) -> str:
    """Bound a listing to the character limit, adding the truncation footer."""
    truncated = truncate_response(
        content, item_count, item_label, limit=settings.character_limit
    )
    return truncated.content + format_truncation_info(truncated.truncation)


def _render_collection(
    key: str,
    items: Sequence[BaseModel],
    response_format: ResponseFormat,
    render_markdown: Callable[[], str],
) -> str:
    """
    Render a listing of API objects and bound it to the character limit.

    Args:
        key: JSON key for the items, also used as the item label.
        items: Parsed API objects.
        response_format: Markdown or JSON.
        render_markdown: Builds the markdown listing.

    Returns:
        Response text, with a footer if it was truncated.
    """
    if response_format == ResponseFormat.JSON:
        content = _dump_json({
            key: [item.model_dump(mode="json", exclude_none=True) for item in items]
        })
    else:
        content = render_markdown()
    return _bounded(content, len(items), key)


def _validate_priority(priority: Optional[int]) -> Optional[str]:
    """Return an error message for a priority outside 1..4."""
    if priority is not None and not 1 <= priority <= 4:
        return (
            f"Error: priority ({priority}) must be between 1 (urgent) "
            f"and 4 (low)."
        )
    return None


# -----------------------------------------------------------------------------
# FastMCP Server
# -----------------------------------------------------------------------------
mcp = FastMCP("clickup-mcp")


# -----------------------------------------------------------------------------
# Hierarchy Tools
# -----------------------------------------------------------------------------
@mcp.tool()
async def clickup_get_teams(
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get all teams (workspaces) accessible to the authenticated user.

    Team IDs are needed by the search and time tracking tools.

    Args:
        response_format: 'markdown' or 'json'.

    Returns:
        Teams, or an error message.
    """
    try:
        teams = await get_clickup_client().get_teams()
        return _render_collection(
            "teams", teams, response_format, lambda: format_team_list(teams)
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_get_spaces(
    team_id: str,
    archived: bool = False,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get all spaces in a team.

    Args:
        team_id: The team (workspace) ID.
        archived: Include archived spaces.
        response_format: 'markdown' or 'json'.

    Returns:
        Spaces, or an error message.
    """
    try:
        spaces = await get_clickup_client().get_spaces(team_id, archived=archived)
        return _render_collection(
            "spaces",
            spaces,
            response_format,
            lambda: format_collection(
                f"Spaces in Team {team_id}",
                [format_space_markdown(s) for s in spaces],
                f"Found {len(spaces)} space(s)",
            ),
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_get_folders(
    space_id: str,
    archived: bool = False,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get all folders in a space, with the lists inside each folder.

    Args:
        space_id: The space ID.
        archived: Include archived folders.
        response_format: 'markdown' or 'json'.

    Returns:
        Folders, or an error message.
    """
    try:
        folders = await get_clickup_client().get_folders(space_id, archived=archived)
        return _render_collection(
            "folders",
            folders,
            response_format,
            lambda: format_collection(
                f"Folders in Space {space_id}",
                [format_folder_markdown(f) for f in folders],
                f"Found {len(folders)} folder(s)",
            ),
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_get_lists(
    folder_id: Optional[str] = None,
    space_id: Optional[str] = None,
    archived: bool = False,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get the lists in a folder, or the folderless lists in a space.

    Provide exactly one of folder_id or space_id.

    Args:
        folder_id: The folder ID.
        space_id: The space ID.
        archived: Include archived lists.
        response_format: 'markdown' or 'json'.

    Returns:
        Lists, or an error message.
    """
    if not folder_id and not space_id:
        return "Error: Must provide either folder_id or space_id"
    if folder_id and space_id:
        return "Error: Provide only one of folder_id or space_id, not both"

    parent = f"Folder {folder_id}" if folder_id else f"Space {space_id}"
    try:
        lists = await get_clickup_client().get_lists(
            folder_id=folder_id, space_id=space_id, archived=archived
        )
        return _render_collection(
            "lists",
            lists,
            response_format,
            lambda: format_collection(
                f"Lists in {parent}",
                [format_list_markdown(item) for item in lists],
                f"Found {len(lists)} list(s)",
            ),
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_get_list_details(
    list_id: str,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get a list's details, including the statuses its tasks can take.

    Use this to find valid status names before filtering or creating tasks.

    Args:
        list_id: The list ID.
        response_format: 'markdown' or 'json'.

    Returns:
        List details, or an error message.
    """
    try:
        task_list = await get_clickup_client().get_list(list_id)
        if response_format == ResponseFormat.JSON:
            return _dump_json(task_list.model_dump(mode="json", exclude_none=True))
        return format_list_markdown(task_list)
    except Exception as e:
        return handle_api_error(e)


# -----------------------------------------------------------------------------
# Task Tools
# -----------------------------------------------------------------------------
@mcp.tool()
async def clickup_get_tasks(
    list_id: str,
    archived: bool = False,
    include_closed: bool = False,
    statuses: Optional[list[str]] = None,
    assignees: Optional[list[int]] = None,
    limit: int = settings.default_limit,
    offset: int = 0,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
    response_mode: ResponseMode = ResponseMode.FULL,
) -> str:
    """
    Get tasks in a specific list with filtering and pagination.

    If ClickUp rejects the status filter, all tasks are fetched and the
    statuses are matched exactly (case-sensitive) instead.

    Args:
        list_id: The list ID.
        archived: Include archived tasks.
        include_closed: Include closed tasks.
        statuses: Filter by status names, e.g. ["to do", "in progress"].
        assignees: Filter by assignee user IDs.
        limit: Maximum results (1-100, default 20).
        offset: Pagination offset. Must be a multiple of limit.
        response_format: 'markdown' or 'json'.
        response_mode: 'full', 'compact' or 'summary'.

    Returns:
        Tasks on the requested page, or an error message.
    """
    error = _validate_window(offset, limit)
    if error:
        return error

    try:
        params: dict[str, Any] = {
            "archived": archived,
            "include_closed": include_closed,
        }
        if assignees:
            params["assignees"] = assignees

        page = await get_paginator().fetch_page(
            f"list/{list_id}/task",
            params,
            statuses,
            offset,
            limit,
        )
        return _render_task_page(
            f"Tasks in List {list_id}", page, response_format, response_mode
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_search_tasks(
    team_id: str,
    query: Optional[str] = None,
    statuses: Optional[list[str]] = None,
    assignees: Optional[list[int]] = None,
    tags: Optional[list[str]] = None,
    date_created_gt: Optional[int] = None,
    date_updated_gt: Optional[int] = None,
    limit: int = settings.default_limit,
    offset: int = 0,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
    response_mode: ResponseMode = ResponseMode.FULL,
) -> str:
    """
    Search for tasks across a team with advanced filtering.

    Args:
        team_id: The team (workspace) ID to search in.
        query: Search query string.
        statuses: Filter by status names.
        assignees: Filter by assignee user IDs.
        tags: Filter by tag names.
        date_created_gt: Created after (Unix timestamp in milliseconds).
        date_updated_gt: Updated after (Unix timestamp in milliseconds).
        limit: Maximum results (1-100, default 20).
        offset: Pagination offset. Must be a multiple of limit.
        response_format: 'markdown' or 'json'.
        response_mode: 'full', 'compact' or 'summary'.

    Returns:
        Matching tasks on the requested page, or an error message.
    """
    error = _validate_window(offset, limit)
    if error:
        return error

    try:
        params: dict[str, Any] = {
            "query": query or None,
            "assignees": assignees or None,
            "tags": tags or None,
            "date_created_gt": date_created_gt,
            "date_updated_gt": date_updated_gt,
        }

        page = await get_paginator().fetch_page(
            f"team/{team_id}/task",
            params,
            statuses,
            offset,
            limit,
        )
        return _render_task_page(
            "Task Search Results", page, response_format, response_mode
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_get_task(
    task_id: str,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get a specific task by ID.

    Args:
        task_id: The unique task identifier.
        response_format: 'markdown' or 'json'.

    Returns:
        Task details, or an error message.
    """
    try:
        task = await get_clickup_client().get_task(task_id)
        if response_format == ResponseFormat.JSON:
            return _dump_json(task.model_dump(mode="json", exclude_none=True))
        return format_task_markdown(task)
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_count_tasks_by_status(
    list_id: str,
    statuses: Optional[list[str]] = None,
    archived: bool = False,
    include_closed: bool = False,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Count the tasks in a list per status.

    Every page of the list is fetched, so counts are exact.

    Args:
        list_id: The list ID.
        statuses: Only count these status names (exact match).
        archived: Include archived tasks.
        include_closed: Include closed tasks.
        response_format: 'markdown' or 'json'.

    Returns:
        Total and per-status counts, or an error message.
    """
    try:
        result = await count_tasks_by_status(
            get_paginator(),
            list_id,
            statuses=statuses,
            archived=archived,
            include_closed=include_closed,
        )
        if response_format == ResponseFormat.JSON:
            return _dump_json(result.model_dump())
        return format_task_counts(list_id, result, statuses)
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_export_tasks_to_csv(
    list_id: str,
    statuses: Optional[list[str]] = None,
    archived: bool = False,
    include_closed: bool = False,
    custom_fields: Optional[list[str]] = None,
    include_standard_fields: bool = True,
    add_phone_number_column: bool = False,
) -> str:
    """
    Export every task in a list to CSV.

    Custom field columns are the union of fields seen across the exported
    tasks. Phone values are normalized to E.164.

    Args:
        list_id: The list ID.
        statuses: Only export these status names (exact match).
        archived: Include archived tasks.
        include_closed: Include closed tasks.
        custom_fields: Only export these custom fields, in this order.
        include_standard_fields: Include Task ID, Name, Status and the
            other standard columns.
        add_phone_number_column: Add a combined `phone_number` column.

    Returns:
        CSV text, or a message when nothing matched or the export failed.
    """
    try:
        csv_content = await export_tasks_to_csv(
            get_paginator(),
            list_id,
            CsvExportOptions(
                archived=archived,
                include_closed=include_closed,
                statuses=statuses,
                custom_fields=custom_fields,
                include_standard_fields=include_standard_fields,
                add_phone_number_column=add_phone_number_column,
            ),
        )
        if not csv_content:
            return "No tasks found matching the criteria. CSV is empty."
        return csv_content
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_create_task(
    list_id: str,
    name: str,
    description: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[int] = None,
    assignees: Optional[list[int]] = None,
    due_date: Optional[int] = None,
    start_date: Optional[int] = None,
    tags: Optional[list[str]] = None,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Create a task in a list.

    Args:
        list_id: The list to create the task in.
        name: Task name (required).
        description: Task description (markdown supported).
        status: Status name; must exist in the list.
        priority: 1 (urgent), 2 (high), 3 (normal) or 4 (low).
        assignees: Assignee user IDs.
        due_date: Due date (epoch milliseconds).
        start_date: Start date (epoch milliseconds).
        tags: Tag names.
        response_format: 'markdown' or 'json'.

    Returns:
        The created task, or an error message.
    """
    if not name.strip():
        return "Error: name must not be empty."
    error = _validate_priority(priority)
    if error:
        return error

    try:
        task = await get_clickup_client().create_task(
            list_id,
            TaskCreate(
                name=name,
                description=description,
                status=status,
                priority=priority,
                assignees=assignees,
                due_date=due_date,
                start_date=start_date,
                tags=tags,
            ),
        )
        logger.info(f"Created task {task.id} in list {list_id}")
        if response_format == ResponseFormat.JSON:
            return _dump_json(task.model_dump(mode="json", exclude_none=True))
        return "# Task Created Successfully\n\n" + format_task_markdown(task)
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_update_task(
    task_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[int] = None,
    assignees_add: Optional[list[int]] = None,
    assignees_rem: Optional[list[int]] = None,
    due_date: Optional[int] = None,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Update a task. Only the arguments given are changed.

    Args:
        task_id: The task ID.
        name: New task name.
        description: New description ("" clears it).
        status: New status name.
        priority: 1 (urgent), 2 (high), 3 (normal) or 4 (low).
        assignees_add: User IDs to add as assignees.
        assignees_rem: User IDs to remove from the assignees.
        due_date: New due date (epoch milliseconds).
        response_format: 'markdown' or 'json'.

    Returns:
        The updated task, or an error message.
    """
    if name is not None and not name.strip():
        return "Error: name must not be empty."
    error = _validate_priority(priority)
    if error:
        return error

    updates = TaskUpdate(
        name=name,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        assignees=(
            AssigneeChanges(add=assignees_add or None, rem=assignees_rem or None)
            if assignees_add or assignees_rem
            else None
        ),
    )
    if not updates.to_body():
        return "Error: No updates provided."

    try:
        task = await get_clickup_client().update_task(task_id, updates)
        if response_format == ResponseFormat.JSON:
            return _dump_json(task.model_dump(mode="json", exclude_none=True))
        return "# Task Updated Successfully\n\n" + format_task_markdown(task)
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_delete_task(task_id: str) -> str:
    """
    Permanently delete a task.

    Args:
        task_id: The task ID.

    Returns:
        Confirmation, or an error message.
    """
    try:
        await get_clickup_client().delete_task(task_id)
        return f"Task {task_id} has been deleted successfully."
    except Exception as e:
        return handle_api_error(e)


# -----------------------------------------------------------------------------
# Custom Field Tools
# -----------------------------------------------------------------------------
@mcp.tool()
async def clickup_set_custom_field(
    task_id: str,
    field_id: str,
    value: Any,
) -> str:
    """
    Set a custom field value on a task.

    Args:
        task_id: The task ID.
        field_id: The custom field ID.
        value: The value; its shape depends on the field type (text,
            number, dropdown option ID, epoch milliseconds for dates).

    Returns:
        Confirmation, or an error message.
    """
    try:
        await get_clickup_client().set_custom_field(task_id, field_id, value)
        return f"Custom field {field_id} updated successfully on task {task_id}"
    except Exception as e:
        return handle_api_error(e)


# -----------------------------------------------------------------------------
# Comment Tools
# -----------------------------------------------------------------------------
@mcp.tool()
async def clickup_get_comments(
    task_id: str,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get the comments on a task.

    Args:
        task_id: The task ID.
        response_format: 'markdown' or 'json'.

    Returns:
        Comments, or an error message.
    """
    try:
        comments = await get_clickup_client().get_comments(task_id)
        return _render_collection(
            "comments",
            comments,
            response_format,
            lambda: format_collection(
                f"Comments on Task {task_id}",
                [format_comment_markdown(c) for c in comments],
                f"Found {len(comments)} comment(s)",
                separated=True,
            ),
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_add_comment(
    task_id: str,
    comment_text: str,
    notify_all: bool = False,
) -> str:
    """
    Add a comment to a task.

    Args:
        task_id: The task ID.
        comment_text: Comment text.
        notify_all: Notify everyone watching the task.

    Returns:
        Confirmation, or an error message.
    """
    if not comment_text.strip():
        return "Error: comment_text must not be empty."

    try:
        data = await get_clickup_client().add_comment(
            task_id, comment_text, notify_all=notify_all
        )
        message = f"Comment added successfully to task {task_id}"
        if data.get("id"):
            message += f" (comment ID: {data['id']})"
        return message
    except Exception as e:
        return handle_api_error(e)


# -----------------------------------------------------------------------------
# Time Tracking Tools
# -----------------------------------------------------------------------------
@mcp.tool()
async def clickup_get_time_entries(
    team_id: str,
    assignee: Optional[int] = None,
    start_date: Optional[int] = None,
    end_date: Optional[int] = None,
    response_format: ResponseFormat = ResponseFormat.MARKDOWN,
) -> str:
    """
    Get time tracking entries in a team.

    Without a date range ClickUp returns the last 30 days of your own
    entries.

    Args:
        team_id: The team ID.
        assignee: Only entries tracked by this user ID.
        start_date: Only entries after this time (epoch milliseconds).
        end_date: Only entries before this time (epoch milliseconds).
        response_format: 'markdown' or 'json'.

    Returns:
        Time entries, or an error message.
    """
    try:
        entries = await get_clickup_client().get_time_entries(
            team_id, assignee=assignee, start_date=start_date, end_date=end_date
        )
        noun = "entry" if len(entries) == 1 else "entries"
        return _render_collection(
            "entries",
            entries,
            response_format,
            lambda: format_collection(
                f"Time Entries for Team {team_id}",
                [format_time_entry_markdown(e) for e in entries],
                f"Found {len(entries)} time {noun}",
                separated=True,
            ),
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_start_time_entry(
    team_id: str,
    task_id: str,
    description: Optional[str] = None,
) -> str:
    """
    Start tracking time on a task.

    Args:
        team_id: The team ID.
        task_id: The task to track time on.
        description: What you are working on.

    Returns:
        The running entry, or an error message.
    """
    try:
        entry = await get_clickup_client().start_time_entry(
            team_id, task_id, description=description
        )
        return (
            "Time tracking started successfully\n\n"
            + format_time_entry_markdown(entry)
        )
    except Exception as e:
        return handle_api_error(e)


@mcp.tool()
async def clickup_stop_time_entry(team_id: str) -> str:
    """
    Stop your running time entry.

    Args:
        team_id: The team ID.

    Returns:
        The stopped entry, or an error message.
    """
    try:
        entry = await get_clickup_client().stop_time_entry(team_id)
        return (
            "Time tracking stopped successfully\n\n"
            + format_time_entry_markdown(entry)
        )
    except Exception as e:
        return handle_api_error(e)


# -----------------------------------------------------------------------------
# FastAPI Application (for HTTP access)
# -----------------------------------------------------------------------------
fastapi_app = FastAPI(
    title="ClickUp MCP Server",
    description=(
        "MCP server providing ClickUp task, hierarchy, comment and time "
        "tracking tools"
    ),
    version="0.1.0",
)


@fastapi_app.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Dictionary with service status.
    """
    configured = bool(settings.clickup_api_token)
    return {
        "status": "healthy" if configured else "unconfigured",
        "service": "clickup-mcp",
        "api_configured": configured,
    }


# -----------------------------------------------------------------------------
# HTTP Tool Endpoints (for agent access)
# -----------------------------------------------------------------------------
class GetTasksRequest(BaseModel):
    """Request model for listing tasks in a list."""

    list_id: str
    archived: bool = False
    include_closed: bool = False
    statuses: Optional[list[str]] = None
    assignees: Optional[list[int]] = None
    limit: int = Field(default=settings.default_limit, description="Page size")
    offset: int = Field(default=0, description="Multiple of limit")
    response_format: ResponseFormat = ResponseFormat.MARKDOWN
    response_mode: ResponseMode = ResponseMode.FULL


class SearchTasksRequest(BaseModel):
    """Request model for searching tasks across a team."""

    team_id: str
    query: Optional[str] = None
    statuses: Optional[list[str]] = None
    assignees: Optional[list[int]] = None
    tags: Optional[list[str]] = None
    date_created_gt: Optional[int] = None
    date_updated_gt: Optional[int] = None
    limit: int = Field(default=settings.default_limit, description="Page size")
    offset: int = Field(default=0, description="Multiple of limit")
    response_format: ResponseFormat = ResponseFormat.MARKDOWN
    response_mode: ResponseMode = ResponseMode.FULL


class GetTaskRequest(BaseModel):
    """Request model for getting a single task."""

    task_id: str
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class CountTasksRequest(BaseModel):
    """Request model for counting tasks per status."""

    list_id: str
    statuses: Optional[list[str]] = None
    archived: bool = False
    include_closed: bool = False
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class ExportTasksRequest(BaseModel):
    """Request model for exporting a list to CSV."""

    list_id: str
    statuses: Optional[list[str]] = None
    archived: bool = False
    include_closed: bool = False
    custom_fields: Optional[list[str]] = None
    include_standard_fields: bool = True
    add_phone_number_column: bool = False


class SetCustomFieldRequest(BaseModel):
    """Request model for setting a custom field value."""

    task_id: str
    field_id: str
    value: Any = None


class GetTeamsRequest(BaseModel):
    """Request model for listing teams."""

    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class GetSpacesRequest(BaseModel):
    """Request model for listing spaces in a team."""

    team_id: str
    archived: bool = False
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class GetFoldersRequest(BaseModel):
    """Request model for listing folders in a space."""

    space_id: str
    archived: bool = False
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class GetListsRequest(BaseModel):
    """Request model for listing lists in a folder or space."""

    folder_id: Optional[str] = None
    space_id: Optional[str] = None
    archived: bool = False
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class GetListDetailsRequest(BaseModel):
    """Request model for getting a list's details."""

    list_id: str
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class CreateTaskRequest(BaseModel):
    """Request model for creating a task."""

    list_id: str
    name: str
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = Field(default=None, description="1 (urgent) to 4 (low)")
    assignees: Optional[list[int]] = None
    due_date: Optional[int] = Field(default=None, description="Epoch milliseconds")
    start_date: Optional[int] = Field(default=None, description="Epoch milliseconds")
    tags: Optional[list[str]] = None
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class UpdateTaskRequest(BaseModel):
    """Request model for updating a task."""

    task_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = Field(default=None, description="1 (urgent) to 4 (low)")
    assignees_add: Optional[list[int]] = None
    assignees_rem: Optional[list[int]] = None
    due_date: Optional[int] = Field(default=None, description="Epoch milliseconds")
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class DeleteTaskRequest(BaseModel):
    """Request model for deleting a task."""

    task_id: str


class GetCommentsRequest(BaseModel):
    """Request model for listing a task's comments."""

    task_id: str
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class AddCommentRequest(BaseModel):
    """Request model for commenting on a task."""

    task_id: str
    comment_text: str
    notify_all: bool = False


class GetTimeEntriesRequest(BaseModel):
    """Request model for listing time entries."""

    team_id: str
    assignee: Optional[int] = None
    start_date: Optional[int] = Field(default=None, description="Epoch milliseconds")
    end_date: Optional[int] = Field(default=None, description="Epoch milliseconds")
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


class StartTimeEntryRequest(BaseModel):
    """Request model for starting time tracking."""

    team_id: str
    task_id: str
    description: Optional[str] = None


class StopTimeEntryRequest(BaseModel):
    """Request model for stopping time tracking."""

    team_id: str


@fastapi_app.post("/tools/clickup_get_tasks")
async def http_get_tasks(request: GetTasksRequest) -> dict[str, Any]:
    """HTTP endpoint for listing tasks."""
    return {"result": await clickup_get_tasks(**request.model_dump())}


@fastapi_app.post("/tools/clickup_search_tasks")
async def http_search_tasks(request: SearchTasksRequest) -> dict[str, Any]:
    """HTTP endpoint for searching tasks."""
    return {"result": await clickup_search_tasks(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_task")
async def http_get_task(request: GetTaskRequest) -> dict[str, Any]:
    """HTTP endpoint for getting a task."""
    return {
        "result": await clickup_get_task(
            task_id=request.task_id,
            response_format=request.response_format,
        )
    }


@fastapi_app.post("/tools/clickup_count_tasks_by_status")
async def http_count_tasks(request: CountTasksRequest) -> dict[str, Any]:
    """HTTP endpoint for counting tasks per status."""
    return {"result": await clickup_count_tasks_by_status(**request.model_dump())}


@fastapi_app.post("/tools/clickup_export_tasks_to_csv")
async def http_export_tasks(request: ExportTasksRequest) -> dict[str, Any]:
    """HTTP endpoint for exporting a list to CSV."""
    return {"result": await clickup_export_tasks_to_csv(**request.model_dump())}


@fastapi_app.post("/tools/clickup_set_custom_field")
async def http_set_custom_field(request: SetCustomFieldRequest) -> dict[str, Any]:
    """HTTP endpoint for setting a custom field."""
    return {
        "result": await clickup_set_custom_field(
            task_id=request.task_id,
            field_id=request.field_id,
            value=request.value,
        )
    }


@fastapi_app.post("/tools/clickup_get_teams")
async def http_get_teams(request: GetTeamsRequest) -> dict[str, Any]:
    """HTTP endpoint for listing teams."""
    return {"result": await clickup_get_teams(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_spaces")
async def http_get_spaces(request: GetSpacesRequest) -> dict[str, Any]:
    """HTTP endpoint for listing spaces."""
    return {"result": await clickup_get_spaces(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_folders")
async def http_get_folders(request: GetFoldersRequest) -> dict[str, Any]:
    """HTTP endpoint for listing folders."""
    return {"result": await clickup_get_folders(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_lists")
async def http_get_lists(request: GetListsRequest) -> dict[str, Any]:
    """HTTP endpoint for listing lists."""
    return {"result": await clickup_get_lists(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_list_details")
async def http_get_list_details(request: GetListDetailsRequest) -> dict[str, Any]:
    """HTTP endpoint for getting a list's details."""
    return {"result": await clickup_get_list_details(**request.model_dump())}


@fastapi_app.post("/tools/clickup_create_task")
async def http_create_task(request: CreateTaskRequest) -> dict[str, Any]:
    """HTTP endpoint for creating a task."""
    return {"result": await clickup_create_task(**request.model_dump())}


@fastapi_app.post("/tools/clickup_update_task")
async def http_update_task(request: UpdateTaskRequest) -> dict[str, Any]:
    """HTTP endpoint for updating a task."""
    return {"result": await clickup_update_task(**request.model_dump())}


@fastapi_app.post("/tools/clickup_delete_task")
async def http_delete_task(request: DeleteTaskRequest) -> dict[str, Any]:
    """HTTP endpoint for deleting a task."""
    return {"result": await clickup_delete_task(task_id=request.task_id)}


@fastapi_app.post("/tools/clickup_get_comments")
async def http_get_comments(request: GetCommentsRequest) -> dict[str, Any]:
    """HTTP endpoint for listing comments."""
    return {"result": await clickup_get_comments(**request.model_dump())}


@fastapi_app.post("/tools/clickup_add_comment")
async def http_add_comment(request: AddCommentRequest) -> dict[str, Any]:
    """HTTP endpoint for adding a comment."""
    return {"result": await clickup_add_comment(**request.model_dump())}


@fastapi_app.post("/tools/clickup_get_time_entries")
async def http_get_time_entries(request: GetTimeEntriesRequest) -> dict[str, Any]:
    """HTTP endpoint for listing time entries."""
    return {"result": await clickup_get_time_entries(**request.model_dump())}


@fastapi_app.post("/tools/clickup_start_time_entry")
async def http_start_time_entry(request: StartTimeEntryRequest) -> dict[str, Any]:
    """HTTP endpoint for starting time tracking."""
    return {"result": await clickup_start_time_entry(**request.model_dump())}


@fastapi_app.post("/tools/clickup_stop_time_entry")
async def http_stop_time_entry(request: StopTimeEntryRequest) -> dict[str, Any]:
    """HTTP endpoint for stopping time tracking."""
    return {"result": await clickup_stop_time_entry(team_id=request.team_id)}


@fastapi_app.on_event("shutdown")
async def shutdown_event() -> None:
    """Cleanup on shutdown."""
    global clickup_client
    if clickup_client:
        await clickup_client.close()
        clickup_client = None
    logger.info("ClickUp client closed")


# -----------------------------------------------------------------------------
# Main Entry Point
# -----------------------------------------------------------------------------
def main() -> None:
    """Run the server."""
    import uvicorn

    logging.getLogger().setLevel(settings.log_level)

    logger.info(f"Starting ClickUp MCP Server on {settings.host}:{settings.port}")

    if not settings.clickup_api_token:
        logger.warning("CLICKUP_API_TOKEN not set - server will not function properly")

    uvicorn.run(
        fastapi_app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
