"""Slack Reminder Notifier - Imperative Shell.

This module schedules event reminders as Slack scheduled messages and
cancels them again. All I/O is contained here; message formatting and
reminder timing are in the core module.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Protocol

import requests

from nearby.core.events import CatalogEvent
from nearby.core.formatter import (
    DEFAULT_REMINDER_LEAD_MINUTES,
    compute_reminder_time,
    format_reminder_message,
)


logger = logging.getLogger(__name__)


SLACK_API_BASE = "https://slack.com/api"

# Default timeout for Slack API requests (seconds)
DEFAULT_TIMEOUT = 10


class Notifier(Protocol):
    """Schedules and cancels event reminders."""

    async def schedule(self, event: CatalogEvent) -> str | None:
        ...

    async def cancel(self, notification_id: str) -> None:
        ...


@dataclass
class SlackResponse:
    """Response from the Slack Web API.

    Attributes:
        success: Whether Slack accepted the call
        status_code: HTTP status code (0 if the request never completed)
        data: Parsed JSON body
        error: Error message if failed
    """
    success: bool
    status_code: int
    data: dict[str, Any] | None = None
    error: str | None = None


class SlackReminderNotifier:
    """Delivers event reminders through Slack's scheduled messages.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        bot_token: str,
        channel: str,
        lead_minutes: int = DEFAULT_REMINDER_LEAD_MINUTES,
        tz: tzinfo | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        base_url: str = SLACK_API_BASE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize Slack notifier.

        Args:
            bot_token: Bot token with chat:write scope
            channel: Channel or user id receiving reminders
            lead_minutes: Minutes before the event start to post
            tz: Timezone for displayed times
            timeout: Request timeout in seconds
            base_url: Slack Web API base URL
            clock: Returns the current time (timezone-aware)
        """
        self.bot_token = bot_token
        self.channel = channel
        self.lead_minutes = lead_minutes
        self.tz = tz
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.channel)

    def _call(self, method: str, payload: dict[str, Any]) -> SlackResponse:
        """POST to a Slack Web API method.

        This method performs HTTP I/O.
        """
        try:
            response = requests.post(
                f"{self.base_url}/{method}",
                json=payload,
                timeout=self.timeout,
                headers={
                    "Authorization": f"Bearer {self.bot_token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
            )
        except requests.Timeout:
            logger.error("Slack %s request timed out", method)
            return SlackResponse(success=False, status_code=0, error="Request timed out")
        except requests.RequestException as e:
            logger.error("Slack %s request failed: %s", method, str(e))
            return SlackResponse(success=False, status_code=0, error=str(e))

        if response.status_code != 200:
            logger.warning(
                "Slack %s returned non-200: %d - %s",
                method,
                response.status_code,
                response.text,
            )
            return SlackResponse(
                success=False,
                status_code=response.status_code,
                error=response.text,
            )

        try:
            data = response.json()
        except ValueError:
            return SlackResponse(
                success=False,
                status_code=response.status_code,
                error="Invalid JSON response",
            )

        if not data.get("ok"):
            error = data.get("error", "unknown_error")
            logger.warning("Slack %s rejected: %s", method, error)
            return SlackResponse(
                success=False,
                status_code=response.status_code,
                data=data,
                error=error,
            )

        return SlackResponse(success=True, status_code=response.status_code, data=data)

    def schedule_reminder(self, event: CatalogEvent) -> str | None:
        """Schedule a reminder message for an event.

        This method performs HTTP I/O.

        Args:
            event: Event to remind about

        Returns:
            Slack scheduled_message_id, or None if nothing was scheduled
        """
        if not self.configured:
            logger.warning("Slack reminders not configured, skipping %s", event.id)
            return None

        remind_at = compute_reminder_time(event, self._clock(), self.lead_minutes)
        if remind_at is None:
            logger.info("Reminder time for %s already passed, not scheduling", event.id)
            return None

        payload = format_reminder_message(event, self.tz, self.lead_minutes)
        payload["channel"] = self.channel
        payload["post_at"] = int(remind_at.timestamp())

        result = self._call("chat.scheduleMessage", payload)
        if not result.success or result.data is None:
            return None

        message_id = result.data.get("scheduled_message_id")
        logger.info("Scheduled reminder %s for %s", message_id, event.id)
        return message_id

    def cancel_reminder(self, notification_id: str) -> bool:
        """Delete a scheduled reminder.

        This method performs HTTP I/O.

        Returns:
            True if Slack deleted the message
        """
        if not self.configured:
            return False

        result = self._call("chat.deleteScheduledMessage", {
            "channel": self.channel,
            "scheduled_message_id": notification_id,
        })
        if result.success:
            logger.info("Cancelled reminder %s", notification_id)
        return result.success

    async def schedule(self, event: CatalogEvent) -> str | None:
        return await asyncio.to_thread(self.schedule_reminder, event)

    async def cancel(self, notification_id: str) -> None:
        await asyncio.to_thread(self.cancel_reminder, notification_id)
