# =============================================================================
# ClickUp MCP Server - Response Truncation
# =============================================================================
"""
Bounding tool responses to a character budget.

Two strategies, picked from the first non-whitespace character:

- JSON (`{` or `[`): drop trailing items from the collection array until the
  document fits, so the result is still valid JSON. A single item that is
  still too large has its long string properties shortened.
- Markdown (anything else, and JSON that cannot be handled): cut at the
  last section boundary before the limit.

Both report what was dropped through a TruncationInfo.
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from clickup_mcp.config import CHARACTER_LIMIT
from clickup_mcp.models.common import TruncationInfo

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

# How far back from the limit to look for a clean break
BOUNDARY_WINDOW = 1000

# String properties longer than this are shortened on an oversized item
MAX_FIELD_LENGTH = 10_000
FIELD_TRUNCATION_MARKER = "... [truncated]"

_MARKDOWN_BREAKS = ("\n# ", "\n## ", "\n---\n", "\n\n")
_ITEM_HEADER_PATTERN = re.compile(r"^# .+ \(", re.MULTILINE)


@dataclass
class TruncationResult:
    """
    Outcome of truncate_response.

    Attributes:
        content: The (possibly shortened) content.
        truncation: What was dropped, or None if nothing was.
    """

    content: str
    truncation: Optional[TruncationInfo] = None


@dataclass
class ParsedCollection:
    """A JSON document and the top-level key holding its item array."""

    data: dict[str, Any]
    key: str


def truncation_message(
    original: int,
    returned: int,
    item_label: str,
    limit: int,
) -> str:
    """Standard message for a response that lost items."""
    return (
        f"Response truncated from {original} to {returned} {item_label} "
        f"due to size limits ({limit:,} chars). Use pagination (offset/limit), "
        f"add filters, or use response_mode='compact' to see more results."
    )


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


# -----------------------------------------------------------------------------
# JSON Strategy
# -----------------------------------------------------------------------------
def _parse_collection(content: str) -> Optional[ParsedCollection]:
    """
    Parse a JSON document and locate its collection array.

    Returns:
        The parsed document and the first top-level key whose value is a
        list, or None if the content is not a JSON object with such a key.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None

    for key, value in data.items():
        if isinstance(value, list):
            return ParsedCollection(data=data, key=key)
    return None


def _shorten_long_strings(item: dict[str, Any]) -> None:
    for key, value in item.items():
        if isinstance(value, str) and len(value) > MAX_FIELD_LENGTH:
            item[key] = value[:MAX_FIELD_LENGTH] + FIELD_TRUNCATION_MARKER


def _truncate_json(
    content: str,
    item_count: int,
    item_label: str,
    limit: int,
) -> TruncationResult:
    parsed = _parse_collection(content)
    if parsed is None:
        logger.debug("No JSON collection found; truncating as markdown")
        return _truncate_markdown(content, item_count, item_label, limit)

    items: list[Any] = parsed.data[parsed.key]
    original_count = len(items)

    serialized = _dump(parsed.data)
    while len(serialized) > limit and len(items) > 1:
        items.pop()
        serialized = _dump(parsed.data)

    if len(serialized) > limit:
        if len(items) == 1 and isinstance(items[0], dict):
            _shorten_long_strings(items[0])
            compacted = _dump(parsed.data)
            if len(compacted) <= limit:
                return TruncationResult(
                    content=compacted,
                    truncation=TruncationInfo(
                        original_count=original_count,
                        returned_count=1,
                        truncation_message=(
                            f"Large {item_label} fields were truncated to fit "
                            f"size limits ({limit:,} chars)."
                        ),
                    ),
                )
        return _truncate_markdown(content, item_count, item_label, limit)

    if len(items) < original_count:
        return TruncationResult(
            content=serialized,
            truncation=TruncationInfo(
                original_count=original_count,
                returned_count=len(items),
                truncation_message=truncation_message(
                    original_count, len(items), item_label, limit
                ),
            ),
        )

    return TruncationResult(content=serialized)


# -----------------------------------------------------------------------------
# Markdown Strategy
# -----------------------------------------------------------------------------
def _find_cut(content: str, limit: int) -> int:
    """Position to cut markdown content at, never past `limit`."""
    window_start = max(0, limit - BOUNDARY_WINDOW)

    # A break may start at `limit` at the latest
    breaks = [
        pos
        for pos in (
            content.rfind(marker, 0, limit + len(marker))
            for marker in _MARKDOWN_BREAKS
        )
        if pos >= window_start
    ]
    if breaks:
        return max(breaks)

    last_newline = content.rfind("\n", 0, limit + 1)
    if last_newline > window_start:
        return last_newline
    return limit


def _truncate_markdown(
    content: str,
    item_count: int,
    item_label: str,
    limit: int,
) -> TruncationResult:
    if len(content) <= limit:
        return TruncationResult(content=content)

    cut = _find_cut(content, limit)
    kept = content[:cut]

    returned_count = len(_ITEM_HEADER_PATTERN.findall(kept))
    if not returned_count:
        returned_count = max(1, math.floor(item_count * cut / len(content)))
    returned_count = min(returned_count, max(item_count, 0))

    return TruncationResult(
        content=kept,
        truncation=TruncationInfo(
            original_count=item_count,
            returned_count=returned_count,
            truncation_message=truncation_message(
                item_count, returned_count, item_label, limit
            ),
        ),
    )


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def truncate_response(
    content: str,
    item_count: int,
    item_label: str = "items",
    limit: int = CHARACTER_LIMIT,
) -> TruncationResult:
    """
    Truncate a response body that exceeds the character limit.

    Args:
        content: Rendered response (JSON or markdown).
        item_count: Number of items the response describes.
        item_label: Plural item name for the message (e.g., "tasks").
        limit: Maximum characters allowed.

    Returns:
        TruncationResult with the content and truncation info. Content
        within the limit is returned unchanged with no truncation info.
    """
    if len(content) <= limit:
        return TruncationResult(content=content)

    if content.lstrip()[:1] in ("{", "["):
        result = _truncate_json(content, item_count, item_label, limit)
    else:
        result = _truncate_markdown(content, item_count, item_label, limit)

    if result.truncation:
        logger.info(
            f"Truncated response from {len(content)} to {len(result.content)} "
            f"chars ({result.truncation.returned_count}/"
            f"{result.truncation.original_count} {item_label})"
        )
    return result


def format_truncation_info(truncation: Optional[TruncationInfo]) -> str:
    """
    Render the footer appended to truncated responses.

    Args:
        truncation: Truncation info, or None.

    Returns:
        Footer text, or "" when nothing was truncated.
    """
    if not truncation:
        return ""
    return f"\n\n---\n⚠️ {truncation.truncation_message}"
