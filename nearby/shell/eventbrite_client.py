"""Eventbrite API Client - Imperative Shell.

This module handles HTTP communication with the Eventbrite event search API.
All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from nearby.core.filters import DiscoveryQuery
from nearby.core.listings import build_eventbrite_params


logger = logging.getLogger(__name__)


EVENTBRITE_API_BASE = "https://www.eventbriteapi.com/v3/events/search/"

# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


class EventbriteClient:
    """Client for searching events on Eventbrite.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    name = "eventbrite"

    def __init__(
        self,
        api_key: str,
        base_url: str = EVENTBRITE_API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def fetch_events(self, query: DiscoveryQuery) -> dict[str, Any] | None:
        """Search Eventbrite for events around a point.

        This method performs HTTP I/O.

        Returns:
            Raw JSON response, or None when no API key is configured or the
            body is not a JSON object

        Raises:
            requests.RequestException: If the request fails
        """
        if not self.api_key:
            logger.warning("Eventbrite API key not configured, skipping")
            return None

        params = build_eventbrite_params(query)

        logger.info(
            "Fetching events from Eventbrite",
            extra={"within": params["location.within"]},
        )

        response = requests.get(
            self.base_url,
            params=params,
            timeout=self.timeout,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            },
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            logger.warning("Eventbrite returned a non-object body, ignoring it")
            return None

        count = (data.get("pagination") or {}).get("object_count", 0)

        logger.info("Eventbrite reported %d matching events", count)

        return data
