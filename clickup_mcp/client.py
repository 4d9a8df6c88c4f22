# =============================================================================
# ClickUp MCP Server - ClickUp API Client
# =============================================================================
"""
Async HTTP client for the ClickUp API v2.

This client handles all communication with the ClickUp API, including:
- Authentication via personal API token
- Mapping HTTP error statuses to typed exceptions
- Request/response serialization

The client does not retry. Callers decide which failures to recover from;
the only recovery in this server is the status filter fallback in
`clickup_mcp.pagination`, which keys on `ClickUpBadRequestError`.
"""

import logging
from typing import Any, Optional

import httpx

from clickup_mcp.config import API_BASE_URL, DEFAULT_TIMEOUT
from clickup_mcp.models.tasks import Task, TaskCreate, TaskUpdate
from clickup_mcp.models.workspace import (
    Comment,
    Folder,
    Space,
    TaskList,
    Team,
    TimeEntry,
)

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------
class ClickUpApiError(Exception):
    """
    Exception raised for ClickUp API errors.

    Attributes:
        status_code: HTTP status code (0 when no response was received).
        message: Error message from the API.
        details: Raw error body, if any.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            status_code: HTTP status code.
            message: Error message.
            details: Additional error details.
        """
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"ClickUp API Error ({status_code}): {message}")


class ClickUpBadRequestError(ClickUpApiError):
    """Exception raised when ClickUp rejects request parameters (400)."""

    pass


class ClickUpAuthenticationError(ClickUpApiError):
    """Exception raised for a missing or invalid API token (401)."""

    pass


class ClickUpPermissionError(ClickUpApiError):
    """Exception raised when the token lacks access to a resource (403)."""

    pass


class ClickUpNotFoundError(ClickUpApiError):
    """Exception raised when a resource is not found (404)."""

    pass


class ClickUpRateLimitError(ClickUpApiError):
    """Exception raised when ClickUp rate limits the token (429)."""

    pass


_STATUS_ERRORS: dict[int, type[ClickUpApiError]] = {
    400: ClickUpBadRequestError,
    401: ClickUpAuthenticationError,
    403: ClickUpPermissionError,
    404: ClickUpNotFoundError,
    429: ClickUpRateLimitError,
}


def _encode_query(query: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """
    Prepare query parameters for ClickUp.

    None values are dropped, booleans are sent as "true"/"false" and lists
    are sent as repeated `key[]` parameters.
    """
    if query is None:
        return None

    params: dict[str, Any] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            params[key if key.endswith("[]") else f"{key}[]"] = [
                str(v) for v in value
            ]
        else:
            params[key] = value
    return params


# -----------------------------------------------------------------------------
# ClickUp API Client
# -----------------------------------------------------------------------------
class ClickUpClient:
    """
    Async HTTP client for the ClickUp API.

    Attributes:
        api_token: ClickUp personal API token.
        base_url: Base URL for the ClickUp API.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the ClickUp API client.

        Args:
            api_token: ClickUp API token for authentication.
            base_url: Base URL for the ClickUp API.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(f"ClickUp client initialized (base_url={self.base_url})")

    async def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the async HTTP client.

        Returns:
            The httpx.AsyncClient instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=10.0, read=self.timeout, write=10.0, pool=10.0
                ),
                headers={
                    "Authorization": self.api_token,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
        logger.debug("ClickUp client closed")

    async def __aenter__(self) -> "ClickUpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[dict[str, Any]] = None,
        query: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Make an authenticated request to the ClickUp API.

        Args:
            endpoint: API endpoint relative to the base URL
                (e.g., "list/123/task").
            method: HTTP method (GET, POST, PUT, DELETE).
            body: JSON body for POST/PUT requests.
            query: Query parameters.

        Returns:
            JSON response from the API ({} for an empty body).

        Raises:
            ClickUpAuthenticationError: If no token is configured or the
                token is rejected.
            ClickUpBadRequestError: For 400 responses.
            ClickUpPermissionError: For 403 responses.
            ClickUpNotFoundError: For 404 responses.
            ClickUpRateLimitError: For 429 responses.
            ClickUpApiError: For any other error status or transport failure.
        """
        if not self.api_token:
            raise ClickUpAuthenticationError(
                status_code=401,
                message="CLICKUP_API_TOKEN environment variable is required",
            )

        client = await self._get_client()
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        logger.debug(f"ClickUp API {method} {endpoint} params={query}")

        try:
            response = await client.request(
                method=method,
                url=url,
                params=_encode_query(query),
                json=body,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {e}")
            raise ClickUpApiError(
                status_code=0,
                message="Request timed out",
            )
        except httpx.RequestError as e:
            logger.error(f"Request error: {e}")
            raise ClickUpApiError(
                status_code=0,
                message=f"Request failed: {e}",
            )

        if response.status_code >= 400:
            error_data = self._error_body(response)
            error_msg = error_data.get(
                "err", f"API error: {response.status_code}"
            )
            error_cls = _STATUS_ERRORS.get(response.status_code, ClickUpApiError)
            logger.warning(
                f"ClickUp API {method} {endpoint} failed "
                f"({response.status_code}): {error_msg}"
            )
            raise error_cls(
                status_code=response.status_code,
                message=error_msg,
                details=error_data,
            )

        if response.content:
            return response.json()
        return {}

    @staticmethod
    def _error_body(response: httpx.Response) -> dict[str, Any]:
        """Decode an error body, tolerating non-JSON responses."""
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {"err": response.text}
        return data if isinstance(data, dict) else {"err": str(data)}

    # -------------------------------------------------------------------------
    # Hierarchy Endpoints
    # -------------------------------------------------------------------------
    async def get_teams(self) -> list[Team]:
        """
        Get the teams (workspaces) the token's user belongs to.

        Returns:
            List of teams.
        """
        data = await self.request("team")
        return [Team.model_validate(t) for t in data.get("teams") or []]

    async def get_spaces(self, team_id: str, archived: bool = False) -> list[Space]:
        """
        Get the spaces in a team.

        Args:
            team_id: The team ID.
            archived: Include archived spaces.

        Returns:
            List of spaces.
        """
        data = await self.request(
            f"team/{team_id}/space", query={"archived": archived}
        )
        return [Space.model_validate(s) for s in data.get("spaces") or []]

    async def get_folders(self, space_id: str, archived: bool = False) -> list[Folder]:
        """
        Get the folders in a space.

        Args:
            space_id: The space ID.
            archived: Include archived folders.

        Returns:
            List of folders.
        """
        data = await self.request(
            f"space/{space_id}/folder", query={"archived": archived}
        )
        return [Folder.model_validate(f) for f in data.get("folders") or []]

    async def get_lists(
        self,
        folder_id: Optional[str] = None,
        space_id: Optional[str] = None,
        archived: bool = False,
    ) -> list[TaskList]:
        """
        Get the lists in a folder, or the folderless lists in a space.

        Args:
            folder_id: The folder ID.
            space_id: The space ID.
            archived: Include archived lists.

        Returns:
            List of lists.

        Raises:
            ValueError: If not exactly one of folder_id and space_id is given.
        """
        if bool(folder_id) == bool(space_id):
            raise ValueError("Exactly one of folder_id or space_id is required")

        endpoint = f"folder/{folder_id}/list" if folder_id else f"space/{space_id}/list"
        data = await self.request(endpoint, query={"archived": archived})
        return [TaskList.model_validate(item) for item in data.get("lists") or []]

    async def get_list(self, list_id: str) -> TaskList:
        """
        Get a list, including its statuses.

        Args:
            list_id: The list ID.

        Returns:
            TaskList object.
        """
        data = await self.request(f"list/{list_id}")
        return TaskList.model_validate(data)

    # -------------------------------------------------------------------------
    # Task Endpoints
    # -------------------------------------------------------------------------
    async def get_task(self, task_id: str) -> Task:
        """
        Get a specific task by ID.

        Args:
            task_id: The task ID.

        Returns:
            Task object.
        """
        data = await self.request(f"task/{task_id}")
        return Task.model_validate(data)

    async def set_custom_field(
        self,
        task_id: str,
        field_id: str,
        value: Any,
    ) -> dict[str, Any]:
        """
        Set a custom field value on a task.

        Args:
            task_id: The task ID.
            field_id: The custom field ID.
            value: The value (format depends on the field type).

        Returns:
            JSON response from the API.
        """
        return await self.request(
            f"task/{task_id}/field/{field_id}",
            method="POST",
            body={"value": value},
        )

    async def create_task(self, list_id: str, task: TaskCreate) -> Task:
        """
        Create a task in a list.

        Args:
            list_id: The list to create the task in.
            task: TaskCreate model with task details.

        Returns:
            Created Task object.
        """
        data = await self.request(
            f"list/{list_id}/task",
            method="POST",
            body=task.model_dump(exclude_none=True),
        )
        return Task.model_validate(data)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """
        Update a task.

        Args:
            task_id: The task ID.
            updates: TaskUpdate model with the attributes to change.

        Returns:
            Updated Task object.
        """
        data = await self.request(
            f"task/{task_id}", method="PUT", body=updates.to_body()
        )
        return Task.model_validate(data)

    async def delete_task(self, task_id: str) -> None:
        """
        Delete a task.

        Args:
            task_id: The task ID.
        """
        await self.request(f"task/{task_id}", method="DELETE")
        logger.info(f"Deleted task {task_id}")

    # -------------------------------------------------------------------------
    # Comment Endpoints
    # -------------------------------------------------------------------------
    async def get_comments(self, task_id: str) -> list[Comment]:
        """
        Get the comments on a task, newest first.

        Args:
            task_id: The task ID.

        Returns:
            List of comments.
        """
        data = await self.request(f"task/{task_id}/comment")
        return [Comment.model_validate(c) for c in data.get("comments") or []]

    async def add_comment(
        self,
        task_id: str,
        comment_text: str,
        notify_all: bool = False,
    ) -> dict[str, Any]:
        """
        Post a comment on a task.

        Args:
            task_id: The task ID.
            comment_text: Comment body.
            notify_all: Notify everyone watching the task.

        Returns:
            JSON response from the API (the new comment's ID and date).
        """
        return await self.request(
            f"task/{task_id}/comment",
            method="POST",
            body={"comment_text": comment_text, "notify_all": notify_all},
        )

    # -------------------------------------------------------------------------
    # Time Tracking Endpoints
    # -------------------------------------------------------------------------
    async def get_time_entries(
        self,
        team_id: str,
        assignee: Optional[int] = None,
        start_date: Optional[int] = None,
        end_date: Optional[int] = None,
    ) -> list[TimeEntry]:
        """
        Get time entries in a team.

        Without a date range ClickUp returns the last 30 days of the token
        user's entries.

        Args:
            team_id: The team ID.
            assignee: Only entries tracked by this user ID.
            start_date: Only entries after this time (epoch ms).
            end_date: Only entries before this time (epoch ms).

        Returns:
            List of time entries.
        """
        data = await self.request(
            f"team/{team_id}/time_entries",
            query={
                "assignee": assignee,
                "start_date": start_date,
                "end_date": end_date,
            },
        )
        return [TimeEntry.model_validate(e) for e in data.get("data") or []]

    async def start_time_entry(
        self,
        team_id: str,
        task_id: str,
        description: Optional[str] = None,
    ) -> TimeEntry:
        """
        Start tracking time on a task.

        Args:
            team_id: The team ID.
            task_id: The task to track time on.
            description: What is being worked on.

        Returns:
            The running TimeEntry.
        """
        body: dict[str, Any] = {"tid": task_id}
        if description:
            body["description"] = description

        data = await self.request(
            f"team/{team_id}/time_entries/start", method="POST", body=body
        )
        return TimeEntry.model_validate(data.get("data") or {})

    async def stop_time_entry(self, team_id: str) -> TimeEntry:
        """
        Stop the token user's running time entry.

        Args:
            team_id: The team ID.

        Returns:
            The stopped TimeEntry.
        """
        data = await self.request(f"team/{team_id}/time_entries/stop", method="POST")
        return TimeEntry.model_validate(data.get("data") or {})
