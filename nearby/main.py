"""Engine Entry Point.

Builds a NearbyEngine with concrete shell collaborators from
configuration. It's a thin wrapper that loads configuration and
wires the clients.
"""

import logging
import os
from zoneinfo import ZoneInfo

from nearby.core.config import Config, validate_config
from nearby.engine import NearbyEngine
from nearby.shell.config_loader import load_config, load_config_from_env
from nearby.shell.discovery import MultiSourceDiscovery
from nearby.shell.eventbrite_client import EventbriteClient
from nearby.shell.firestore_store import FirestoreConfig, FirestoreStore
from nearby.shell.location import StaticLocationProvider
from nearby.shell.slack_notifier import SlackReminderNotifier
from nearby.shell.store import JsonFileStore, KeyValueStore, MemoryStore
from nearby.shell.ticketmaster_client import TicketmasterClient


logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("TICKETMASTER_API_KEY") or os.environ.get("EVENTBRITE_API_KEY"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def build_store(config: Config) -> KeyValueStore:
    """Create the key-value store selected by configuration."""
    backend = config.storage.backend

    if backend == "memory":
        return MemoryStore()
    if backend == "firestore":
        return FirestoreStore(FirestoreConfig(
            project_id=config.storage.firestore_project,
            database=config.storage.firestore_database,
            collection=config.storage.firestore_collection,
        ))
    return JsonFileStore(config.storage.path)


def create_engine(config: Config | None = None) -> NearbyEngine:
    """Build an engine wired to the configured shell clients.

    Args:
        config: Configuration (loaded from file/environment if None)

    Returns:
        An engine that still needs start()

    Raises:
        ValueError: If the configuration has errors
    """
    config = config or _get_config()

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not result.valid:
        details = "; ".join(f"{e.field}: {e.message}" for e in result.critical_errors)
        raise ValueError(f"Invalid configuration: {details}")

    tz = ZoneInfo(config.timezone)
    timeout = config.discovery.timeout_seconds

    discovery = MultiSourceDiscovery(
        ticketmaster_client=TicketmasterClient(config.discovery.ticketmaster_api_key, timeout=timeout),
        eventbrite_client=EventbriteClient(config.discovery.eventbrite_api_key, timeout=timeout),
        tz=tz,
    )
    notifier = SlackReminderNotifier(
        bot_token=config.notifications.slack_bot_token,
        channel=config.notifications.slack_channel,
        lead_minutes=config.notifications.reminder_lead_minutes,
        tz=tz,
    )

    return NearbyEngine(
        config,
        store=build_store(config),
        location_provider=StaticLocationProvider(config.device_location),
        discovery_source=discovery,
        notifier=notifier,
    )
