"""Tests for client dashboard helpers and the section catalog."""

from datetime import date

import pytest

from modules.forms.dashboard import (
    days_until_wedding,
    generate_wedding_timeline,
    get_motivational_message,
    parse_wedding_date,
)
from modules.forms.sections import (
    FIELD_DEFAULTS,
    SECTIONS,
    get_adjacent_sections,
    get_section,
    resolve_section_index,
)


class TestMotivationalMessage:
    @pytest.mark.parametrize(
        "completion,prefix",
        [(100, "🎉"), (75, "✨"), (99, "✨"), (50, "💫"), (25, "🌟"), (24, "💑"), (0, "💑")],
    )
    def test_thresholds(self, completion, prefix):
        assert get_motivational_message(completion).startswith(prefix)


class TestWeddingDate:
    def test_parse(self):
        assert parse_wedding_date("2024-07-15") == date(2024, 7, 15)
        assert parse_wedding_date(date(2024, 7, 15)) == date(2024, 7, 15)

    @pytest.mark.parametrize("value", ["", None, "not a date"])
    def test_unparseable(self, value):
        assert parse_wedding_date(value) is None

    def test_days_until(self):
        today = date(2024, 6, 1)
        assert days_until_wedding("2024-07-15", today=today) == 44
        assert days_until_wedding("2024-05-31", today=today) == -1
        assert days_until_wedding("", today=today) is None


class TestTimeline:
    def test_sorted_by_time_and_skips_missing(self):
        timeline = generate_wedding_timeline({
            "venue_name": "Thornton Manor",
            "reception_time": "18:00",
            "ceremony_time": "14:00",
            "bride_getting_ready_time": "10:30",
            "bride_getting_ready_location": "Hotel Suite",
        })

        assert [e["event"] for e in timeline] == [
            "Bride getting ready photos", "Ceremony", "Reception",
        ]
        assert timeline[0]["location"] == "Hotel Suite"
        assert timeline[1]["location"] == "Thornton Manor"

    def test_empty_form(self):
        assert generate_wedding_timeline({}) == []


class TestSections:
    def test_every_section_field_is_in_the_schema(self):
        for section in SECTIONS:
            assert set(section.fields) <= set(FIELD_DEFAULTS)

    def test_lookup(self):
        assert get_section("ceremony").title == "Ceremony Details"
        assert get_section("nope") is None

    def test_unknown_ids_fall_back_to_first(self):
        assert resolve_section_index("reception") == 3
        assert resolve_section_index("nope") == 0
        assert resolve_section_index(None) == 0

    def test_adjacent(self):
        previous, following = get_adjacent_sections("basic")
        assert previous is None and following.id == "getting-ready"

        previous, following = get_adjacent_sections("special")
        assert previous.id == "groups" and following is None
