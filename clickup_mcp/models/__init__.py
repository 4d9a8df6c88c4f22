# =============================================================================
# ClickUp MCP Server - Models Package
# =============================================================================
"""
Pydantic models for ClickUp API data structures.

This package contains the models parsed from the ClickUp API (tasks,
custom fields, the team hierarchy, comments and time entries), the task
request models, and the pagination and truncation metadata attached to tool
responses.
"""

from clickup_mcp.models.common import (
    PaginationInfo,
    TaskCountResult,
    TruncationInfo,
)
from clickup_mcp.models.custom_fields import (
    CheckboxCustomField,
    ChecklistCustomField,
    CustomField,
    CustomFieldBase,
    DateCustomField,
    DropdownCustomField,
    LabelsCustomField,
    NumberCustomField,
    OtherCustomField,
    PhoneCustomField,
    TextCustomField,
    parse_custom_field,
)
from clickup_mcp.models.tasks import (
    AssigneeChanges,
    Tag,
    Task,
    TaskCreate,
    TaskListResponse,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    User,
)
from clickup_mcp.models.workspace import (
    Comment,
    Folder,
    ParentRef,
    Space,
    TaskList,
    Team,
    TimeEntry,
)

__all__ = [
    # Common
    "PaginationInfo",
    "TaskCountResult",
    "TruncationInfo",
    # Custom fields
    "CheckboxCustomField",
    "ChecklistCustomField",
    "CustomField",
    "CustomFieldBase",
    "DateCustomField",
    "DropdownCustomField",
    "LabelsCustomField",
    "NumberCustomField",
    "OtherCustomField",
    "PhoneCustomField",
    "TextCustomField",
    "parse_custom_field",
    # Tasks
    "AssigneeChanges",
    "Tag",
    "Task",
    "TaskCreate",
    "TaskListResponse",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "User",
    # Workspace
    "Comment",
    "Folder",
    "ParentRef",
    "Space",
    "TaskList",
    "Team",
    "TimeEntry",
]
