# =============================================================================
# ClickUp MCP Server - Custom Field Tests
# =============================================================================
"""
Unit tests for custom field parsing and value extraction.

These tests verify that:
- Raw payloads are parsed into the right typed variant
- Each field type renders to the expected display string
- Phone values are normalized by type and by name
- Duplicate field names resolve to the field that has a value
"""

from typing import Any, Callable

import pytest

from clickup_mcp.custom_fields import extract_custom_field_value, get_custom_field
from clickup_mcp.models.custom_fields import (
    CheckboxCustomField,
    DateCustomField,
    DropdownCustomField,
    NumberCustomField,
    OtherCustomField,
    PhoneCustomField,
    TextCustomField,
    parse_custom_field,
)
from clickup_mcp.models.tasks import Task


def _value(field_type: str, value: Any, name: str = "Field") -> str:
    field = parse_custom_field(
        {"id": "cf", "name": name, "type": field_type, "value": value}
    )
    return extract_custom_field_value(field)


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------
class TestParseCustomField:
    """Tests for the custom field discriminated union."""

    @pytest.mark.parametrize(
        ("field_type", "expected_cls"),
        [
            ("text", TextCustomField),
            ("email", TextCustomField),
            ("phone", PhoneCustomField),
            ("phone_number", PhoneCustomField),
            ("currency", NumberCustomField),
            ("date", DateCustomField),
            ("dropdown", DropdownCustomField),
            ("checkbox", CheckboxCustomField),
            ("location", OtherCustomField),
        ],
    )
    def test_variant_selected_by_type(self, field_type: str, expected_cls: type) -> None:
        """Test that the type key picks the variant."""
        field = parse_custom_field({"name": "F", "type": field_type})

        assert isinstance(field, expected_cls)
        assert field.type == field_type

    def test_extra_keys_kept(self) -> None:
        """Test that unmodeled keys such as type_config survive parsing."""
        field = parse_custom_field(
            {"name": "F", "type": "dropdown", "type_config": {"options": []}}
        )

        assert field.model_extra == {"type_config": {"options": []}}

    def test_task_parses_custom_fields(self, make_task: Callable[..., Task]) -> None:
        """Test that Task.custom_fields holds typed variants."""
        task = make_task(
            custom_fields=[
                {"name": "Phone", "type": "phone", "value": "4124812210"},
                {"name": "Score", "type": "number", "value": 3},
            ]
        )

        assert isinstance(task.custom_fields[0], PhoneCustomField)
        assert isinstance(task.custom_fields[1], NumberCustomField)

    def test_task_null_custom_fields(self) -> None:
        """Test that a null custom_fields list becomes empty."""
        task = Task.model_validate({"id": "t1", "custom_fields": None})

        assert task.custom_fields == []


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------
class TestExtractCustomFieldValue:
    """Tests for extract_custom_field_value."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_value(self, value: Any) -> None:
        """Test that absent and empty values render as an empty string."""
        assert _value("text", value) == ""
        assert _value("checkbox", value) == ""

    def test_text_trimmed(self) -> None:
        """Test that text values are trimmed."""
        assert _value("text", "  hello  ") == "hello"

    def test_text_named_phone_normalized(self) -> None:
        """Test that a text field named like a phone is normalized."""
        assert _value("text", "(412) 481-2210", name="Mobile PHONE") == "+14124812210"

    def test_text_not_named_phone_untouched(self) -> None:
        """Test that other text fields are returned as-is."""
        assert _value("short_text", "(412) 481-2210", name="Notes") == "(412) 481-2210"

    def test_phone_type_normalized(self) -> None:
        """Test that phone-typed fields are always normalized."""
        assert _value("phone", "412 481 2210", name="Contact") == "+14124812210"

    def test_invalid_phone_is_empty(self) -> None:
        """Test that an unusable phone number renders as empty."""
        assert _value("phone_number", "12345") == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(42, "42"), (5.0, "5"), (2.5, "2.5"), ("17", "17")],
    )
    def test_number(self, value: Any, expected: str) -> None:
        """Test that numbers are stringified."""
        assert _value("number", value) == expected

    def test_date(self) -> None:
        """Test that dates render as a UTC calendar date."""
        assert _value("date", "1609459200000") == "2021-01-01"

    def test_unparseable_date(self) -> None:
        """Test that an unparseable date renders as empty."""
        assert _value("date", "not a date") == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ({"label": "Hot", "name": "hot"}, "Hot"),
            ({"name": "warm"}, "warm"),
            (2, "2"),
        ],
    )
    def test_dropdown(self, value: Any, expected: str) -> None:
        """Test that dropdowns prefer the option label."""
        assert _value("dropdown", value) == expected

    def test_labels(self) -> None:
        """Test that labels are joined with a semicolon."""
        value = [{"label": "A"}, {"name": "B"}, "C"]

        assert _value("labels", value) == "A; B; C"

    def test_labels_not_a_list(self) -> None:
        """Test that a malformed labels value renders as empty."""
        assert _value("labels", "A") == ""

    def test_checklist(self) -> None:
        """Test that checklist item names are joined."""
        value = [{"name": "Call"}, {"name": "Email"}]

        assert _value("checklist", value) == "Call; Email"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "Yes"), ("true", "Yes"), (False, "No"), (0, "No")],
    )
    def test_checkbox(self, value: Any, expected: str) -> None:
        """Test that checkboxes render as Yes/No."""
        assert _value("checkbox", value) == expected

    def test_unknown_type_uses_name_heuristic(self) -> None:
        """Test that unknown types fall back to text handling."""
        assert _value("location", " Pittsburgh ") == "Pittsburgh"
        assert _value("formula", "4124812210", name="Phone calc") == "+14124812210"


# -----------------------------------------------------------------------------
# Lookup by Name
# -----------------------------------------------------------------------------
class TestGetCustomField:
    """Tests for get_custom_field."""

    def test_missing_field(self, make_task: Callable[..., Task]) -> None:
        """Test that a missing field name yields an empty string."""
        assert get_custom_field(make_task(), "Nope") == ""

    def test_name_is_case_sensitive(self, make_task: Callable[..., Task]) -> None:
        """Test that names must match exactly."""
        task = make_task(custom_fields=[{"name": "Email", "type": "email", "value": "a@b.co"}])

        assert get_custom_field(task, "email") == ""
        assert get_custom_field(task, "Email") == "a@b.co"

    def test_duplicate_prefers_field_with_value(
        self, make_task: Callable[..., Task]
    ) -> None:
        """Test that an empty duplicate does not hide a populated one."""
        task = make_task(
            custom_fields=[
                {"name": "Phone", "type": "text", "value": None},
                {"name": "Phone", "type": "phone", "value": "412-481-2210"},
            ]
        )

        assert get_custom_field(task, "Phone") == "+14124812210"

    def test_preferred_type_wins(self, make_task: Callable[..., Task]) -> None:
        """Test that a populated field of the preferred type wins."""
        task = make_task(
            custom_fields=[
                {"name": "Phone", "type": "text", "value": "old value"},
                {"name": "Phone", "type": "phone", "value": "412-481-2210"},
            ]
        )

        assert get_custom_field(task, "Phone") == "old value"
        assert get_custom_field(task, "Phone", preferred_type="phone") == "+14124812210"

    def test_all_duplicates_empty(self, make_task: Callable[..., Task]) -> None:
        """Test that duplicates with no values yield an empty string."""
        task = make_task(
            custom_fields=[
                {"name": "Phone", "type": "text"},
                {"name": "Phone", "type": "phone", "value": ""},
            ]
        )

        assert get_custom_field(task, "Phone") == ""
