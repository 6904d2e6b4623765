"""Reminder formatting - Pure functions.

This module formats event reminders for the notifier and decides when a
reminder should fire. All functions are pure with no side effects.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Any

from nearby.core.events import CatalogEvent, parse_iso


DEFAULT_REMINDER_LEAD_MINUTES = 60

CATEGORY_EMOJI: dict[str, str] = {
    "sports": "🏟️",
    "concert": "🎵",
    "bar": "🍻",
    "nightlife": "🍸",
    "comedy": "🎤",
    "theater": "🎭",
    "art": "🖼️",
    "food": "🍽️",
    "family": "👨‍👩‍👧",
    "festival": "🎪",
    "holiday": "🎉",
    "conference": "🗂️",
    "community": "🤝",
}


def get_category_emoji(category: str) -> str:
    """Get an emoji for an event category.

    Pure function.
    """
    return CATEGORY_EMOJI.get(category, "📅")


def compute_reminder_time(
    event: CatalogEvent,
    now: datetime,
    lead_minutes: int = DEFAULT_REMINDER_LEAD_MINUTES,
) -> datetime | None:
    """Decide when to remind the user about an event.

    Pure function.

    Args:
        event: The event
        now: Current time (timezone-aware)
        lead_minutes: How long before the start to remind

    Returns:
        Reminder time, or None if it would already be in the past
    """
    remind_at = parse_iso(event.start_iso) - timedelta(minutes=lead_minutes)
    if remind_at <= now:
        return None
    return remind_at


def format_start_time(event: CatalogEvent, tz: tzinfo | None = None) -> str:
    """Format an event start for display, e.g. 'Sat Nov 8, 7:10 PM'."""
    start = parse_iso(event.start_iso)
    if tz is not None:
        start = start.astimezone(tz)
    hour = start.strftime("%I").lstrip("0")
    return f"{start.strftime('%a %b')} {start.day}, {hour}:{start.strftime('%M %p')}"


def format_reminder_text(
    event: CatalogEvent,
    tz: tzinfo | None = None,
    lead_minutes: int = DEFAULT_REMINDER_LEAD_MINUTES,
) -> str:
    """Format a one-line reminder.

    Pure function.
    """
    emoji = get_category_emoji(event.category)
    return (
        f"{emoji} {event.title} starts in {lead_minutes} min "
        f"at {event.venue} ({format_start_time(event, tz)})"
    )


def format_reminder_message(
    event: CatalogEvent,
    tz: tzinfo | None = None,
    lead_minutes: int = DEFAULT_REMINDER_LEAD_MINUTES,
) -> dict[str, Any]:
    """Format an event reminder as a Slack message payload.

    Pure function.

    Args:
        event: Event to remind about
        tz: Timezone for the displayed start time
        lead_minutes: Minutes between reminder and start

    Returns:
        Dict with 'text' and 'blocks' keys
    """
    text = format_reminder_text(event, tz, lead_minutes)

    fields = [
        {"type": "mrkdwn", "text": f"*When:*\n{format_start_time(event, tz)}"},
        {"type": "mrkdwn", "text": f"*Where:*\n{event.venue}"},
    ]
    if event.address:
        fields.append({"type": "mrkdwn", "text": f"*Address:*\n{event.address}"})

    blocks: list[dict[str, Any]] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"{get_category_emoji(event.category)} {event.title}",
                "emoji": True,
            },
        },
        {"type": "section", "fields": fields},
    ]

    if event.description:
        blocks.append({
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": event.description}],
        })

    return {"text": text, "blocks": blocks}
