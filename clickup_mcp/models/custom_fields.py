# =============================================================================
# ClickUp MCP Server - Custom Field Models
# =============================================================================
"""
Pydantic models for ClickUp custom fields.

A custom field's value changes shape with its type: plain strings for text
fields, numbers for number fields, option objects for dropdowns, lists of
options for labels and checklists. Each type family gets its own model and
the `CustomField` union picks the right one from the `type` key, falling
back to `OtherCustomField` for types this server does not know about.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter


# -----------------------------------------------------------------------------
# Base Model
# -----------------------------------------------------------------------------
class CustomFieldBase(BaseModel):
    """
    Fields shared by every custom field type.

    Attributes:
        id: Custom field ID.
        name: Display name (not unique; a task may carry two fields with
            the same name and different types).
        type: ClickUp field type.
        value: Field value, shape depends on type.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(default="", description="Custom field ID")
    name: str = Field(default="", description="Custom field name")
    type: str = Field(..., description="Custom field type")
    value: Any = Field(default=None, description="Field value")

    @property
    def has_value(self) -> bool:
        """True unless the value is missing or an empty string."""
        return self.value is not None and self.value != ""


# -----------------------------------------------------------------------------
# Type Variants
# -----------------------------------------------------------------------------
class TextCustomField(CustomFieldBase):
    """Free text fields: text, short_text, email, url."""

    type: Literal["text", "short_text", "email", "url"]


class PhoneCustomField(CustomFieldBase):
    """Phone number fields."""

    type: Literal["phone", "phone_number"]


class NumberCustomField(CustomFieldBase):
    """Numeric fields: number, currency."""

    type: Literal["number", "currency"]
    value: Optional[Union[int, float, str]] = None


class DateCustomField(CustomFieldBase):
    """Date field; value is epoch milliseconds (ClickUp sends a string)."""

    type: Literal["date"]
    value: Optional[Union[int, float, str]] = None


class DropdownCustomField(CustomFieldBase):
    """Dropdown field; value is an option object or a raw option index."""

    type: Literal["dropdown"]


class LabelsCustomField(CustomFieldBase):
    """Multi-select labels field; value is a list of options."""

    type: Literal["labels"]


class ChecklistCustomField(CustomFieldBase):
    """Checklist field; value is a list of items with a name."""

    type: Literal["checklist"]


class CheckboxCustomField(CustomFieldBase):
    """Checkbox field."""

    type: Literal["checkbox"]


class OtherCustomField(CustomFieldBase):
    """Any field type not modeled above."""

    type: str = ""


# -----------------------------------------------------------------------------
# Discriminated Union
# -----------------------------------------------------------------------------
_TYPE_TAGS: dict[str, str] = {
    "text": "text",
    "short_text": "text",
    "email": "text",
    "url": "text",
    "phone": "phone",
    "phone_number": "phone",
    "number": "number",
    "currency": "number",
    "date": "date",
    "dropdown": "dropdown",
    "labels": "labels",
    "checklist": "checklist",
    "checkbox": "checkbox",
}


def _custom_field_tag(data: Any) -> str:
    """Map a raw or parsed custom field to its union tag."""
    if isinstance(data, dict):
        field_type = data.get("type")
    else:
        field_type = getattr(data, "type", None)
    if not isinstance(field_type, str):
        return "other"
    return _TYPE_TAGS.get(field_type, "other")


CustomField = Annotated[
    Union[
        Annotated[TextCustomField, Tag("text")],
        Annotated[PhoneCustomField, Tag("phone")],
        Annotated[NumberCustomField, Tag("number")],
        Annotated[DateCustomField, Tag("date")],
        Annotated[DropdownCustomField, Tag("dropdown")],
        Annotated[LabelsCustomField, Tag("labels")],
        Annotated[ChecklistCustomField, Tag("checklist")],
        Annotated[CheckboxCustomField, Tag("checkbox")],
        Annotated[OtherCustomField, Tag("other")],
    ],
    Discriminator(_custom_field_tag),
]

_custom_field_adapter: TypeAdapter[CustomField] = TypeAdapter(CustomField)


def parse_custom_field(data: dict[str, Any]) -> CustomFieldBase:
    """
    Validate a raw custom field payload into its typed variant.

    Args:
        data: Custom field object as returned by the ClickUp API.

    Returns:
        The matching CustomFieldBase subclass instance.
    """
    return _custom_field_adapter.validate_python(data)
