# =============================================================================
# ClickUp MCP Server - Phone Number Normalization
# =============================================================================
"""
Phone number normalization to E.164 (`+` followed by up to 15 digits).

Numbers are typed into ClickUp by hand, so they arrive in every format
imaginable: "(412) 481-2210", "+44 20 7123 4567", "412.481.2210 x206".
Anything that cannot be turned into a plausible E.164 number normalizes to
an empty string rather than raising.
"""

import re
from typing import Any, Optional

# Only the first extension marker is removed. A second one keeps its digits,
# which then run into the main number.
_EXTENSION_PATTERN = re.compile(
    r"\s*(?:x|ext|extension)\s*\d+", re.IGNORECASE | re.ASCII
)
_NON_DIGIT_PATTERN = re.compile(r"\D", re.ASCII)
E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$", re.ASCII)


def normalize_phone(phone: Optional[Any]) -> str:
    """
    Normalize a phone number to E.164 format.

    Ten-digit numbers are assumed to be North American and get a leading
    country code of 1.

    Args:
        phone: Phone number in any textual format.

    Returns:
        The E.164 number (e.g., "+14124812210"), or "" if the input is
        empty or cannot be normalized.

    Examples:
        >>> normalize_phone("(412) 481-2210")
        '+14124812210'
        >>> normalize_phone("+44 20 7123 4567")
        '+442071234567'
        >>> normalize_phone("0412481221")
        ''
    """
    if phone is None:
        return ""

    normalized = str(phone).strip()
    if not normalized:
        return ""

    normalized = _EXTENSION_PATTERN.sub("", normalized, count=1)

    if normalized.startswith("+"):
        normalized = normalized[1:]

    digits = _NON_DIGIT_PATTERN.sub("", normalized)

    if not digits or digits.startswith("0"):
        return ""

    if len(digits) == 10:
        digits = "1" + digits
    elif len(digits) == 11 and digits.startswith("1"):
        pass
    elif len(digits) < 10 or len(digits) > 15:
        return ""

    candidate = "+" + digits
    if not E164_PATTERN.match(candidate):
        return ""

    return candidate
