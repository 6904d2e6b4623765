"""Ticketmaster API Client - Imperative Shell.

This module handles HTTP communication with the Ticketmaster Discovery API.
All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from nearby.core.filters import DiscoveryQuery
from nearby.core.listings import build_ticketmaster_params


logger = logging.getLogger(__name__)


# Ticketmaster Discovery API v2 event search
TICKETMASTER_API_BASE = "https://app.ticketmaster.com/discovery/v2/events.json"

# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 30


class TicketmasterClient:
    """Client for searching events on Ticketmaster.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    name = "ticketmaster"

    def __init__(
        self,
        api_key: str,
        base_url: str = TICKETMASTER_API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize Ticketmaster client.

        Args:
            api_key: Ticketmaster consumer key
            base_url: API endpoint
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def fetch_events(self, query: DiscoveryQuery) -> dict[str, Any] | None:
        """Search Ticketmaster for events around a point.

        This method performs HTTP I/O.

        Args:
            query: Search parameters

        Returns:
            Raw JSON response, or None when no API key is configured or the
            body is not a JSON object

        Raises:
            requests.RequestException: If the request fails
        """
        if not self.api_key:
            logger.warning("Ticketmaster API key not configured, skipping")
            return None

        params = build_ticketmaster_params(query, self.api_key)

        logger.info(
            "Fetching events from Ticketmaster",
            extra={"latlong": params["latlong"], "radius": params["radius"]},
        )

        response = requests.get(
            self.base_url,
            params=params,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            logger.warning("Ticketmaster returned a non-object body, ignoring it")
            return None

        total = (data.get("page") or {}).get("totalElements", 0)

        logger.info("Ticketmaster reported %d matching events", total)

        return data
