"""Tests for email merge-field substitution."""

import pytest

from modules.emails.merge import (
    build_merge_values,
    format_wedding_date,
    merge_placeholders,
)


CLIENT = {
    "bride_name": "Sarah",
    "groom_name": "Michael",
    "wedding_date": "2024-07-15",
    "venue_name": "Thornton Manor",
    "contact_phone": "+44 123 456 7890",
}


class TestFormatWeddingDate:
    def test_formats_as_day_month_year(self):
        assert format_wedding_date("2024-07-15") == "15/07/2024"

    @pytest.mark.parametrize("value,expected", [("", ""), (None, ""), ("sometime in June", "sometime in June")])
    def test_passthrough(self, value, expected):
        assert format_wedding_date(value) == expected


class TestMergePlaceholders:
    def test_replaces_every_occurrence(self):
        merged = merge_placeholders("{{bride_name}} & {{groom_name}}, {{bride_name}}!", CLIENT)
        assert merged == "Sarah & Michael, Sarah!"

    def test_photographer_and_company_default_to_settings(self):
        merged = merge_placeholders("{{photographer_name}} at {{company_name}}", CLIENT)
        assert merged == "Sky Photography Team at Sky Photography"

    def test_overrides(self):
        merged = merge_placeholders("{{photographer_name}}", CLIENT, photographer_name="Alex")
        assert merged == "Alex"

    def test_missing_values_become_empty(self):
        assert merge_placeholders("Venue: {{venue_name}}.", {}) == "Venue: ."

    def test_unknown_tokens_are_left_alone(self):
        assert merge_placeholders("{{favourite_colour}}", CLIENT) == "{{favourite_colour}}"

    def test_values_are_not_escaped(self):
        merged = merge_placeholders("{{bride_name}}", {"bride_name": "<b>Sarah</b>"})
        assert merged == "<b>Sarah</b>"

    def test_build_merge_values_keys(self):
        values = build_merge_values(CLIENT)
        assert values["{{wedding_date}}"] == "15/07/2024"
        assert len(values) == 7
