# =============================================================================
# ClickUp MCP Server - Workspace Models
# =============================================================================
"""
Pydantic models for the ClickUp hierarchy, comments and time entries.

ClickUp organizes work as Team -> Space -> Folder -> List -> Task; lists can
also sit directly in a space ("folderless" lists). As with tasks, only the
attributes this server renders are declared and the rest is kept as extra
data.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clickup_mcp.models.tasks import TaskStatus, User


# -----------------------------------------------------------------------------
# Hierarchy Models
# -----------------------------------------------------------------------------
class ParentRef(BaseModel):
    """
    Reference to the space, folder or task an object belongs to.

    Attributes:
        id: Parent ID.
        name: Parent name.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = Field(default=None, description="Parent ID")
    name: Optional[str] = Field(default=None, description="Parent name")


class Team(BaseModel):
    """
    Team (workspace) accessible to the token's user.

    Attributes:
        id: Team ID.
        name: Team name.
        color: Team color hex code.
        avatar: Avatar image URL.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Team ID")
    name: str = Field(default="", description="Team name")
    color: Optional[str] = Field(default=None, description="Team color")
    avatar: Optional[str] = Field(default=None, description="Avatar URL")


class Space(BaseModel):
    """
    Space within a team.

    Attributes:
        id: Space ID.
        name: Space name.
        private: Whether the space is private.
        multiple_assignees: Whether tasks may have several assignees.
        features: Feature toggles, keyed by feature name, each with an
            `enabled` flag.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Space ID")
    name: str = Field(default="", description="Space name")
    private: bool = Field(default=False, description="Private space")
    multiple_assignees: bool = Field(
        default=False, description="Multiple assignees allowed"
    )
    features: Optional[dict[str, Any]] = Field(
        default=None, description="Feature toggles"
    )

    def feature_enabled(self, name: str) -> bool:
        """Whether the named feature is switched on."""
        feature = (self.features or {}).get(name)
        return bool(isinstance(feature, dict) and feature.get("enabled"))


class TaskList(BaseModel):
    """
    List holding tasks.

    Attributes:
        id: List ID.
        name: List name.
        task_count: Number of tasks in the list.
        folder: Folder the list is in (a hidden folder for folderless lists).
        space: Space the list is in.
        statuses: Statuses available to tasks in the list.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="List ID")
    name: str = Field(default="", description="List name")
    task_count: Optional[Union[int, str]] = Field(
        default=None, description="Number of tasks"
    )
    folder: Optional[ParentRef] = Field(default=None, description="Parent folder")
    space: Optional[ParentRef] = Field(default=None, description="Parent space")
    statuses: list[TaskStatus] = Field(
        default_factory=list, description="Available statuses"
    )

    @field_validator("statuses", mode="before")
    @classmethod
    def null_statuses_to_empty(cls, v: Any) -> Any:
        """Lists inheriting their statuses send null."""
        return [] if v is None else v


class Folder(BaseModel):
    """
    Folder grouping lists within a space.

    Attributes:
        id: Folder ID.
        name: Folder name.
        hidden: Whether the folder is hidden.
        task_count: Number of tasks across the folder's lists.
        space: Space the folder is in.
        lists: Lists in the folder.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Folder ID")
    name: str = Field(default="", description="Folder name")
    hidden: bool = Field(default=False, description="Hidden folder")
    task_count: Optional[Union[int, str]] = Field(
        default=None, description="Number of tasks"
    )
    space: Optional[ParentRef] = Field(default=None, description="Parent space")
    lists: list[TaskList] = Field(default_factory=list, description="Lists")

    @field_validator("lists", mode="before")
    @classmethod
    def null_lists_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


# -----------------------------------------------------------------------------
# Comment Models
# -----------------------------------------------------------------------------
class Comment(BaseModel):
    """
    Comment on a task.

    Attributes:
        id: Comment ID.
        comment_text: Plain-text comment body.
        user: Author.
        date: Posting timestamp (epoch ms).
        resolved: Whether the comment was resolved.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = Field(default=None, description="Comment ID")
    comment_text: str = Field(default="", description="Comment text")
    user: Optional[User] = Field(default=None, description="Author")
    date: Optional[Union[str, int]] = Field(
        default=None, description="Posted (epoch ms)"
    )
    resolved: bool = Field(default=False, description="Resolved")


# -----------------------------------------------------------------------------
# Time Tracking Models
# -----------------------------------------------------------------------------
class TimeEntry(BaseModel):
    """
    Time tracking entry.

    A running entry has no `end` and a negative `duration`.

    Attributes:
        id: Entry ID.
        task: Task the time was tracked on.
        user: User who tracked the time.
        start: Start timestamp (epoch ms).
        end: End timestamp (epoch ms), unset while running.
        duration: Duration in milliseconds.
        description: What was worked on.
        billable: Whether the time is billable.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = Field(default=None, description="Entry ID")
    task: Optional[ParentRef] = Field(default=None, description="Tracked task")
    user: Optional[User] = Field(default=None, description="Tracking user")
    start: Optional[Union[str, int]] = Field(
        default=None, description="Start (epoch ms)"
    )
    end: Optional[Union[str, int]] = Field(default=None, description="End (epoch ms)")
    duration: Optional[Union[str, int]] = Field(
        default=None, description="Duration (ms)"
    )
    description: Optional[str] = Field(default=None, description="Description")
    billable: bool = Field(default=False, description="Billable time")

    @property
    def is_running(self) -> bool:
        """Whether the entry is still being tracked."""
        return not self.end
