# =============================================================================
# ClickUp MCP Server - Test Fixtures
# =============================================================================
"""
Shared fixtures for the ClickUp MCP server tests.

Provides a task factory that builds Task models from minimal keyword
arguments, and an in-memory transport that serves task pages the way the
ClickUp listing endpoints do.
"""

from typing import Any, Callable, Optional

import pytest

from clickup_mcp.client import ClickUpApiError, ClickUpBadRequestError
from clickup_mcp.models.tasks import Task


# -----------------------------------------------------------------------------
# Task Factory
# -----------------------------------------------------------------------------
def build_task(
    task_id: str = "t1",
    name: str = "Task",
    status: Optional[str] = "to do",
    custom_fields: Optional[list[dict[str, Any]]] = None,
    **extra: Any,
) -> Task:
    """
    Build a Task from a minimal set of attributes.

    Args:
        task_id: Task ID.
        name: Task name.
        status: Status name (None for a task without status).
        custom_fields: Raw custom field payloads.
        **extra: Any other task attributes, as the API would send them.

    Returns:
        Validated Task.
    """
    data: dict[str, Any] = {
        "id": task_id,
        "name": name,
        "custom_fields": custom_fields or [],
        **extra,
    }
    if status is not None:
        data["status"] = {"status": status}
    return Task.model_validate(data)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """
    Provide the task factory.

    Returns:
        The build_task function.
    """
    return build_task


# -----------------------------------------------------------------------------
# Fake Transport
# -----------------------------------------------------------------------------
class FakeTransport:
    """
    In-memory stand-in for ClickUpClient.request on task listing endpoints.

    Attributes:
        tasks: Raw task payloads served across pages.
        page_size: Tasks per page.
        reject_statuses: Answer 400 whenever a status filter is sent.
        fail_on_page: Page number that fails with a 500 error.
        queries: Every query received, in order.
    """

    def __init__(
        self,
        tasks: list[dict[str, Any]],
        page_size: int = 100,
        reject_statuses: bool = False,
        fail_on_page: Optional[int] = None,
    ) -> None:
        self.tasks = tasks
        self.page_size = page_size
        self.reject_statuses = reject_statuses
        self.fail_on_page = fail_on_page
        self.queries: list[dict[str, Any]] = []

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[dict[str, Any]] = None,
        query: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        query = dict(query or {})
        self.queries.append(query)

        if self.reject_statuses and query.get("statuses"):
            raise ClickUpBadRequestError(
                status_code=400,
                message="Invalid statuses",
                details={"err": "Invalid statuses"},
            )

        page = query.get("page", 0)
        if page == self.fail_on_page:
            raise ClickUpApiError(status_code=500, message="Internal error")

        start = page * self.page_size
        return {"tasks": self.tasks[start:start + self.page_size]}


def raw_tasks(statuses: list[str]) -> list[dict[str, Any]]:
    """Raw task payloads, one per status, with IDs t0, t1, ..."""
    return [
        {"id": f"t{i}", "name": f"Task {i}", "status": {"status": status}}
        for i, status in enumerate(statuses)
    ]
