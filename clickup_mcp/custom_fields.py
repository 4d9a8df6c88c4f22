# =============================================================================
# ClickUp MCP Server - Custom Field Values
# =============================================================================
"""
Conversion of typed custom field values into display and export strings.

Phone numbers are normalized to E.164 wherever they are recognized: phone
typed fields always, and text fields whose name mentions "phone".
"""

import logging
from typing import Any, Optional

from clickup_mcp.models.custom_fields import (
    CheckboxCustomField,
    ChecklistCustomField,
    CustomFieldBase,
    DateCustomField,
    DropdownCustomField,
    LabelsCustomField,
    NumberCustomField,
    PhoneCustomField,
    TextCustomField,
)
from clickup_mcp.models.tasks import Task
from clickup_mcp.phone import normalize_phone
from clickup_mcp.utils import format_iso_date

# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)

LIST_SEPARATOR = "; "


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------
def is_phone_named(field: CustomFieldBase) -> bool:
    """Whether the field's name mentions "phone" (any case)."""
    return "phone" in field.name.lower()


def _option_text(option: Any) -> str:
    """Label of a dropdown or labels option, falling back to its name."""
    if isinstance(option, dict):
        return str(option.get("label") or option.get("name") or option)
    return str(option)


def _stringify_number(value: Any) -> str:
    # JSON integers sometimes decode as floats (5.0); render them as "5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text_value(field: CustomFieldBase) -> str:
    value = str(field.value).strip()
    return normalize_phone(value) if is_phone_named(field) else value


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------
def extract_custom_field_value(field: CustomFieldBase) -> str:
    """
    Convert a custom field's value into a display string.

    Args:
        field: Typed custom field.

    Returns:
        String representation of the value, or "" when the field has no
        value.
    """
    if not field.has_value:
        return ""

    value = field.value

    if isinstance(field, TextCustomField):
        return _text_value(field)

    if isinstance(field, PhoneCustomField):
        return normalize_phone(value)

    if isinstance(field, NumberCustomField):
        return _stringify_number(value)

    if isinstance(field, DateCustomField):
        formatted = format_iso_date(value)
        if not formatted:
            logger.debug(f"Unparseable date value on field {field.id}: {value!r}")
        return formatted

    if isinstance(field, DropdownCustomField):
        return _option_text(value)

    if isinstance(field, LabelsCustomField):
        if not isinstance(value, list):
            return ""
        return LIST_SEPARATOR.join(_option_text(item) for item in value)

    if isinstance(field, ChecklistCustomField):
        if not isinstance(value, list):
            return ""
        return LIST_SEPARATOR.join(
            str(item.get("name") or "") if isinstance(item, dict) else ""
            for item in value
        )

    if isinstance(field, CheckboxCustomField):
        return "Yes" if value else "No"

    return _text_value(field)


def get_custom_field(
    task: Task,
    field_name: str,
    preferred_type: Optional[str] = None,
) -> str:
    """
    Get a task's custom field value by field name.

    Tasks can carry several fields with the same name (for example a stale
    text "Phone" next to a phone-typed "Phone"). A field of
    `preferred_type` with a value wins; otherwise the first field with a
    value; otherwise the first field with that name.

    Args:
        task: Task to read from.
        field_name: Exact (case-sensitive) custom field name.
        preferred_type: Field type to prefer among duplicates.

    Returns:
        The extracted value, or "" if the task has no such field.
    """
    matches = [f for f in task.custom_fields if f.name == field_name]
    if not matches:
        return ""

    if preferred_type:
        for field in matches:
            if field.type == preferred_type and field.has_value:
                return extract_custom_field_value(field)

    field = next((f for f in matches if f.has_value), matches[0])
    return extract_custom_field_value(field)
