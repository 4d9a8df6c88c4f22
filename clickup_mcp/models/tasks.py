# =============================================================================
# ClickUp MCP Server - Task Models
# =============================================================================
"""
Pydantic models for ClickUp tasks.

Only the attributes this server reads are declared; everything else the API
returns is kept as extra data so JSON responses pass it through untouched.
ClickUp timestamps are epoch milliseconds encoded as strings.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clickup_mcp.models.custom_fields import CustomField


# -----------------------------------------------------------------------------
# Nested Models
# -----------------------------------------------------------------------------
class TaskStatus(BaseModel):
    """
    Task status information.

    Attributes:
        status: Status name (e.g., "to do", "#1 - phone call").
        color: Status color hex code.
        orderindex: Position of the status in the list workflow.
        type: Status type (open, custom, closed).
    """

    model_config = ConfigDict(extra="allow")

    status: str = Field(..., description="Status name")
    color: Optional[str] = Field(default=None, description="Status color")
    orderindex: Optional[Union[int, str]] = Field(
        default=None, description="Status position"
    )
    type: Optional[str] = Field(default=None, description="Status type")


class User(BaseModel):
    """
    ClickUp user reference (assignee, creator, watcher).

    Attributes:
        id: User ID.
        username: Display name.
        email: Email address.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = Field(default=None, description="User ID")
    username: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Email address")


class Tag(BaseModel):
    """
    Task tag.

    Attributes:
        name: Tag name.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Tag name")


class TaskPriority(BaseModel):
    """
    Task priority.

    Attributes:
        id: Priority ID ("1" urgent to "4" low).
        priority: Priority label (urgent, high, normal, low).
        color: Priority color hex code.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, description="Priority ID")
    priority: Optional[str] = Field(default=None, description="Priority label")
    color: Optional[str] = Field(default=None, description="Priority color")


# -----------------------------------------------------------------------------
# Task Model
# -----------------------------------------------------------------------------
class Task(BaseModel):
    """
    Task representation from the ClickUp API.

    Attributes:
        id: Unique task identifier.
        custom_id: Optional custom task ID.
        name: Task name.
        text_content: Plain-text description.
        description: Description (may contain markdown).
        status: Current status.
        date_created: Creation timestamp (epoch ms).
        date_updated: Last update timestamp (epoch ms).
        date_closed: Close timestamp (epoch ms).
        due_date: Due date (epoch ms).
        start_date: Start date (epoch ms).
        creator: User who created the task.
        assignees: Assigned users.
        tags: Task tags.
        priority: Task priority, if set.
        custom_fields: Typed custom field values.
        url: Link to the task in ClickUp.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Task ID")
    custom_id: Optional[str] = Field(default=None, description="Custom task ID")
    name: str = Field(default="", description="Task name")
    text_content: Optional[str] = Field(default=None, description="Plain text")
    description: Optional[str] = Field(default=None, description="Description")
    status: Optional[TaskStatus] = Field(default=None, description="Status")
    date_created: Optional[Union[str, int]] = Field(
        default=None, description="Created (epoch ms)"
    )
    date_updated: Optional[Union[str, int]] = Field(
        default=None, description="Updated (epoch ms)"
    )
    date_closed: Optional[Union[str, int]] = Field(
        default=None, description="Closed (epoch ms)"
    )
    due_date: Optional[Union[str, int]] = Field(
        default=None, description="Due date (epoch ms)"
    )
    start_date: Optional[Union[str, int]] = Field(
        default=None, description="Start date (epoch ms)"
    )
    creator: Optional[User] = Field(default=None, description="Task creator")
    assignees: list[User] = Field(default_factory=list, description="Assignees")
    tags: list[Tag] = Field(default_factory=list, description="Tags")
    priority: Optional[TaskPriority] = Field(default=None, description="Priority")
    custom_fields: list[CustomField] = Field(
        default_factory=list, description="Custom field values"
    )
    url: Optional[str] = Field(default=None, description="Task URL")

    @field_validator("assignees", "tags", "custom_fields", mode="before")
    @classmethod
    def null_list_to_empty(cls, v: Any) -> Any:
        """ClickUp sends null instead of an empty list on some endpoints."""
        return [] if v is None else v

    @property
    def status_name(self) -> Optional[str]:
        """Status name, or None if the task carries no status."""
        return self.status.status if self.status else None


# -----------------------------------------------------------------------------
# Request Models
# -----------------------------------------------------------------------------
class TaskCreate(BaseModel):
    """
    Request model for creating a task in a list.

    Attributes:
        name: Task name (required).
        description: Task description (markdown supported).
        status: Status name; must exist in the list.
        priority: Priority (1 urgent, 2 high, 3 normal, 4 low).
        assignees: Assignee user IDs.
        due_date: Due date (epoch ms).
        start_date: Start date (epoch ms).
        tags: Tag names.
    """

    name: str = Field(..., description="Task name", min_length=1, max_length=1000)
    description: Optional[str] = Field(default=None, description="Description")
    status: Optional[str] = Field(default=None, description="Status name")
    priority: Optional[int] = Field(
        default=None, description="Priority (1-4)", ge=1, le=4
    )
    assignees: Optional[list[int]] = Field(default=None, description="Assignee IDs")
    due_date: Optional[int] = Field(default=None, description="Due date (epoch ms)")
    start_date: Optional[int] = Field(
        default=None, description="Start date (epoch ms)"
    )
    tags: Optional[list[str]] = Field(default=None, description="Tag names")


class AssigneeChanges(BaseModel):
    """
    Assignees to add to and remove from a task.

    Attributes:
        add: User IDs to add.
        rem: User IDs to remove.
    """

    add: Optional[list[int]] = Field(default=None, description="User IDs to add")
    rem: Optional[list[int]] = Field(default=None, description="User IDs to remove")


class TaskUpdate(BaseModel):
    """
    Request model for updating a task. Unset attributes are left unchanged.

    Attributes:
        name: New task name.
        description: New description ("" clears it).
        status: New status name.
        priority: New priority (1-4).
        due_date: New due date (epoch ms).
        assignees: Assignee changes.
    """

    name: Optional[str] = Field(default=None, description="Task name", min_length=1)
    description: Optional[str] = Field(default=None, description="Description")
    status: Optional[str] = Field(default=None, description="Status name")
    priority: Optional[int] = Field(
        default=None, description="Priority (1-4)", ge=1, le=4
    )
    due_date: Optional[int] = Field(default=None, description="Due date (epoch ms)")
    assignees: Optional[AssigneeChanges] = Field(
        default=None, description="Assignee changes"
    )

    def to_body(self) -> dict[str, Any]:
        """JSON body for the update request, without unset attributes."""
        return self.model_dump(exclude_none=True)


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------
class TaskListResponse(BaseModel):
    """
    Response model for one page of tasks.

    Attributes:
        tasks: Tasks on this page.
        last_page: Whether ClickUp flagged this as the last page.
    """

    tasks: list[Task] = Field(default_factory=list, description="List of tasks")
    last_page: Optional[bool] = Field(default=None, description="Last page flag")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TaskListResponse":
        """
        Build a response from a raw API payload.

        Args:
            data: JSON body of a task listing endpoint.

        Returns:
            Parsed TaskListResponse.
        """
        return cls(tasks=data.get("tasks") or [], last_page=data.get("last_page"))
