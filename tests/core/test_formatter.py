"""Unit tests for reminder formatting.

Pure function tests - no mocks needed.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from nearby.core.events import CatalogEvent, GeoPoint
from nearby.core.formatter import (
    compute_reminder_time,
    format_reminder_message,
    format_reminder_text,
    format_start_time,
    get_category_emoji,
)


EASTERN = ZoneInfo("America/New_York")


@pytest.fixture
def sample_event():
    """Create a sample event for testing."""
    return CatalogEvent(
        id="cat_001",
        title="Guardians vs Athletics",
        category="sports",
        start_iso="2025-06-05T22:10:00.000Z",
        end_iso="2025-06-06T01:10:00.000Z",
        venue="Progressive Field",
        address="2401 Ontario St, Cleveland, OH 44115",
        geo=GeoPoint(lat=41.4962, lng=-81.6852),
        popularity=0.92,
        description="MLB Baseball",
    )


class TestGetCategoryEmoji:
    """Tests for get_category_emoji()."""

    def test_known_category(self):
        assert get_category_emoji("sports") == "🏟️"
        assert get_category_emoji("concert") == "🎵"

    def test_unknown_category(self):
        assert get_category_emoji("general") == "📅"


class TestComputeReminderTime:
    """Tests for compute_reminder_time()."""

    def test_one_hour_before(self, sample_event):
        now = datetime(2025, 6, 3, 12, 0, tzinfo=timezone.utc)

        result = compute_reminder_time(sample_event, now)

        assert result == datetime(2025, 6, 5, 21, 10, tzinfo=timezone.utc)

    def test_custom_lead(self, sample_event):
        now = datetime(2025, 6, 3, 12, 0, tzinfo=timezone.utc)

        result = compute_reminder_time(sample_event, now, lead_minutes=15)

        assert result == datetime(2025, 6, 5, 21, 55, tzinfo=timezone.utc)

    def test_past_reminder(self, sample_event):
        """Inside the lead window there is nothing to schedule."""
        now = datetime(2025, 6, 5, 21, 30, tzinfo=timezone.utc)

        assert compute_reminder_time(sample_event, now) is None

    def test_exactly_at_reminder_time(self, sample_event):
        now = datetime(2025, 6, 5, 21, 10, tzinfo=timezone.utc)

        assert compute_reminder_time(sample_event, now) is None


class TestFormatStartTime:
    def test_local_time(self, sample_event):
        assert format_start_time(sample_event, EASTERN) == "Thu Jun 5, 6:10 PM"

    def test_utc_without_tz(self, sample_event):
        assert format_start_time(sample_event) == "Thu Jun 5, 10:10 PM"


class TestFormatReminder:
    """Tests for reminder text and Slack payloads."""

    def test_text(self, sample_event):
        text = format_reminder_text(sample_event, EASTERN)

        assert text == (
            "🏟️ Guardians vs Athletics starts in 60 min "
            "at Progressive Field (Thu Jun 5, 6:10 PM)"
        )

    def test_message_structure(self, sample_event):
        message = format_reminder_message(sample_event, EASTERN)

        assert message["text"] == format_reminder_text(sample_event, EASTERN)
        assert [b["type"] for b in message["blocks"]] == ["header", "section", "context"]

    def test_header_contains_title(self, sample_event):
        message = format_reminder_message(sample_event, EASTERN)

        header = message["blocks"][0]["text"]["text"]
        assert "Guardians vs Athletics" in header

    def test_section_fields(self, sample_event):
        message = format_reminder_message(sample_event, EASTERN)

        fields = message["blocks"][1]["fields"]
        assert len(fields) == 3
        assert "Progressive Field" in fields[1]["text"]

    def test_no_description_no_context(self, sample_event):
        event = CatalogEvent(**{**sample_event.__dict__, "description": None, "address": ""})

        message = format_reminder_message(event, EASTERN)

        assert [b["type"] for b in message["blocks"]] == ["header", "section"]
        assert len(message["blocks"][1]["fields"]) == 2
