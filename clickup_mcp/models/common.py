# =============================================================================
# ClickUp MCP Server - Common Models
# =============================================================================
"""
Response metadata models shared by the list, search and count tools.

These models describe the shape of the data the server hands back to
clients on top of the task records themselves: where the page sits in the
full result set, and whether the body was cut down to fit the size budget.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------
class PaginationInfo(BaseModel):
    """
    Position of a page within a result set.

    `next_offset` is set exactly when `has_more` is true, and is then
    `offset + count`.

    Attributes:
        total: Total matching items, if known.
        count: Items in this page.
        offset: Offset of the first item in this page.
        has_more: Whether more items may follow.
        next_offset: Offset to request for the next page.
    """

    total: Optional[int] = Field(default=None, description="Total items, if known")
    count: int = Field(..., description="Items in this page")
    offset: int = Field(..., description="Offset of this page")
    has_more: bool = Field(..., description="Whether more items are available")
    next_offset: Optional[int] = Field(
        default=None, description="Offset for the next page"
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize without the keys that are unset."""
        return self.model_dump(exclude_none=True)


# -----------------------------------------------------------------------------
# Truncation
# -----------------------------------------------------------------------------
class TruncationInfo(BaseModel):
    """
    Report of a response that was cut to fit the character budget.

    Attributes:
        truncated: Always True; absence of the model means no truncation.
        original_count: Items before truncation.
        returned_count: Items (or estimated items) kept.
        truncation_message: Human-readable explanation for the client.
    """

    truncated: bool = Field(default=True, description="Whether truncation occurred")
    original_count: int = Field(..., description="Items before truncation")
    returned_count: int = Field(..., description="Items after truncation")
    truncation_message: str = Field(..., description="Explanation for the client")


# -----------------------------------------------------------------------------
# Counting
# -----------------------------------------------------------------------------
class TaskCountResult(BaseModel):
    """
    Task counts for a list.

    Attributes:
        total: Number of tasks counted.
        by_status: Count per status name.
    """

    total: int = Field(..., description="Total tasks counted")
    by_status: dict[str, int] = Field(
        default_factory=dict, description="Count per status"
    )
