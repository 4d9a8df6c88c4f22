# =============================================================================
# ClickUp MCP Server - Pagination
# =============================================================================
"""
Pagination over ClickUp task listings.

ClickUp pages task listings 100 at a time and reports no total. This module
provides:
- `paginate`: derive has_more/next_offset for a page
- `TaskPaginator`: sequential page fetching, including the fallback used
  when ClickUp rejects a status filter with 400 Bad Request. The fallback
  fetches every page without the status filter and filters locally.
- `count_tasks_by_status`: exhaustive count per status

Pages are always fetched one after another; a failure on any page aborts
the whole fetch.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from clickup_mcp.client import ClickUpBadRequestError
from clickup_mcp.config import MAX_LIMIT
from clickup_mcp.models.common import PaginationInfo, TaskCountResult
from clickup_mcp.models.tasks import Task, TaskListResponse

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


class TaskTransport(Protocol):
    """Anything that can issue a ClickUp API request (see ClickUpClient)."""

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[dict[str, Any]] = None,
        query: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]: ...


# -----------------------------------------------------------------------------
# Pagination Calculation
# -----------------------------------------------------------------------------
def paginate(
    total: Optional[int],
    count: int,
    offset: int,
    limit: int,
) -> PaginationInfo:
    """
    Build pagination info for a page of results.

    When the total is unknown, a full page (`count == limit`) is taken to
    mean more results may follow. `count` is not checked against `limit`.

    Args:
        total: Total matching items, or None if unknown.
        count: Items in this page.
        offset: Offset of the first item in this page.
        limit: Requested page size.

    Returns:
        PaginationInfo for the page.
    """
    if total is not None:
        has_more = offset + count < total
    else:
        has_more = count == limit

    return PaginationInfo(
        total=total,
        count=count,
        offset=offset,
        has_more=has_more,
        next_offset=offset + count if has_more else None,
    )


def filter_tasks_by_status(
    tasks: list[Task],
    statuses: Optional[list[str]],
) -> list[Task]:
    """
    Keep tasks whose status name exactly matches one of `statuses`.

    Args:
        tasks: Tasks to filter.
        statuses: Status names (case-sensitive). None or empty keeps all.

    Returns:
        Filtered list of tasks, in their original order.
    """
    if not statuses:
        return tasks

    wanted = set(statuses)
    return [task for task in tasks if task.status_name in wanted]


# -----------------------------------------------------------------------------
# Fetch Results
# -----------------------------------------------------------------------------
@dataclass
class PageFetched:
    """A page that the API returned."""

    tasks: list[Task]


@dataclass
class PageRejected:
    """A page request that the API rejected with 400 Bad Request."""

    error: ClickUpBadRequestError


PageResult = Union[PageFetched, PageRejected]


@dataclass
class TaskPage:
    """
    One page of tasks as returned to a tool.

    Attributes:
        tasks: Tasks in the requested window.
        pagination: Position of the window in the result set.
        total_matched: Tasks matching the filters. Only the full filtered
            set size in fallback mode; otherwise the page size.
        matched_tasks: Every matching task in fallback mode (used for
            summaries); otherwise the page itself.
        used_client_side_filter: Whether the status filter fallback ran.
    """

    tasks: list[Task]
    pagination: PaginationInfo
    total_matched: int
    matched_tasks: list[Task]
    used_client_side_filter: bool = False


# -----------------------------------------------------------------------------
# Paginator
# -----------------------------------------------------------------------------
class TaskPaginator:
    """
    Sequential page fetcher for ClickUp task listing endpoints.

    Works with any endpoint that takes a `page` query parameter and returns
    `{"tasks": [...]}`: `list/{id}/task` and `team/{id}/task`.

    Attributes:
        transport: Client used to issue requests.
        max_limit: Page size ClickUp uses; a shorter page means the end.
    """

    def __init__(self, transport: TaskTransport, max_limit: int = MAX_LIMIT) -> None:
        """
        Initialize the paginator.

        Args:
            transport: Client used to issue requests.
            max_limit: Server page size.
        """
        self.transport = transport
        self.max_limit = max_limit

    async def _fetch(self, endpoint: str, query: dict[str, Any]) -> list[Task]:
        data = await self.transport.request(endpoint, "GET", None, query)
        return TaskListResponse.from_api(data).tasks

    async def _try_fetch(self, endpoint: str, query: dict[str, Any]) -> PageResult:
        """Fetch a page, turning only a 400 response into a PageRejected."""
        try:
            tasks = await self._fetch(endpoint, query)
        except ClickUpBadRequestError as e:
            return PageRejected(error=e)
        return PageFetched(tasks=tasks)

    async def fetch_all(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> list[Task]:
        """
        Fetch every page of a task listing.

        Pages are requested at the server page size until one comes back
        short.

        Args:
            endpoint: Task listing endpoint.
            params: Filters sent with every page request.

        Returns:
            All tasks across all pages, in page order.
        """
        all_tasks: list[Task] = []
        page = 0

        while True:
            query = {**(params or {}), "page": page}
            tasks = await self._fetch(endpoint, query)
            all_tasks.extend(tasks)
            logger.debug(f"Fetched page {page} of {endpoint}: {len(tasks)} tasks")

            if len(tasks) < self.max_limit:
                break
            page += 1

        return all_tasks

    async def fetch_page(
        self,
        endpoint: str,
        params: Optional[dict[str, Any]],
        statuses: Optional[list[str]],
        offset: int,
        limit: int,
    ) -> TaskPage:
        """
        Fetch the `[offset, offset + limit)` window of a filtered listing.

        The status filter is first sent to ClickUp. If ClickUp answers 400
        and a status filter was requested, every page is fetched without
        it and the statuses are matched locally; the window is then sliced
        from the filtered set and the total becomes known. Any other error
        propagates.

        Args:
            endpoint: Task listing endpoint.
            params: Filters other than status.
            statuses: Status names to filter on.
            offset: Offset of the first requested task.
            limit: Page size.

        Returns:
            TaskPage for the requested window.
        """
        base_params = dict(params or {})
        query = {**base_params, "page": offset // limit}
        if statuses:
            query["statuses"] = statuses

        result = await self._try_fetch(endpoint, query)

        if isinstance(result, PageFetched):
            return TaskPage(
                tasks=result.tasks,
                pagination=paginate(None, len(result.tasks), offset, limit),
                total_matched=len(result.tasks),
                matched_tasks=result.tasks,
            )

        if not statuses:
            raise result.error

        logger.info(
            f"Status filter rejected by ClickUp ({result.error.message}); "
            f"filtering {endpoint} client-side"
        )
        all_tasks = await self.fetch_all(endpoint, base_params)
        matched = filter_tasks_by_status(all_tasks, statuses)
        window = matched[offset:offset + limit]

        return TaskPage(
            tasks=window,
            pagination=paginate(len(matched), len(window), offset, limit),
            total_matched=len(matched),
            matched_tasks=matched,
            used_client_side_filter=True,
        )


# -----------------------------------------------------------------------------
# Counting
# -----------------------------------------------------------------------------
async def count_tasks_by_status(
    paginator: TaskPaginator,
    list_id: str,
    statuses: Optional[list[str]] = None,
    archived: bool = False,
    include_closed: bool = False,
) -> TaskCountResult:
    """
    Count tasks in a list per status.

    Args:
        paginator: Paginator to fetch with.
        list_id: The list ID.
        statuses: Only count these statuses (exact match).
        archived: Include archived tasks.
        include_closed: Include closed tasks.

    Returns:
        TaskCountResult with the total and per-status counts.
    """
    tasks = await paginator.fetch_all(
        f"list/{list_id}/task",
        {"archived": archived, "include_closed": include_closed},
    )
    tasks = filter_tasks_by_status(tasks, statuses)

    by_status: dict[str, int] = {}
    for task in tasks:
        status = task.status_name or "Unknown"
        by_status[status] = by_status.get(status, 0) + 1

    return TaskCountResult(total=len(tasks), by_status=by_status)
