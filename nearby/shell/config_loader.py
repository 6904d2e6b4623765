"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, StorageConfig, ...) are defined in nearby/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from nearby.core.config import (
    Config,
    Coordinates,
    DiscoveryConfig,
    NotificationConfig,
    StorageConfig,
)
from nearby.core.formatter import DEFAULT_REMINDER_LEAD_MINUTES
from nearby.shell.secret_manager_client import (
    CREDENTIAL_SECRETS,
    SecretManagerClient,
    SecretManagerConfig,
)


logger = logging.getLogger(__name__)


def _get_secret_manager_client() -> Optional[SecretManagerClient]:
    """Get a Secret Manager client.

    Returns None if GCP_PROJECT is not set (e.g., local development).
    """
    project_id = os.environ.get("GCP_PROJECT")
    if project_id:
        return SecretManagerClient(SecretManagerConfig(project_id=project_id))
    return None


def _resolve_value(value: Any, secret_client: Optional[SecretManagerClient] = None) -> Any:
    """Resolve a value that may contain secret or env var placeholders.

    Args:
        value: Value to resolve (may contain ${...} placeholders)
        secret_client: Client for resolving secrets

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if secret_client:
        return secret_client.resolve(value)

    # No secret client - only handle env vars
    if value.startswith("${") and value.endswith("}"):
        var_spec = value[2:-1]
        if not var_spec.startswith("secret:"):
            env_value = os.environ.get(var_spec)
            if env_value:
                return env_value
            logger.warning("Environment variable %s not set", var_spec)

    return value


def _parse_coordinates(data: dict[str, Any] | None) -> Coordinates | None:
    """Parse a latitude/longitude pair from config data."""
    if not data:
        return None
    return Coordinates(
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )


def _parse_storage(data: dict[str, Any]) -> StorageConfig:
    """Parse the storage section."""
    defaults = StorageConfig()
    return StorageConfig(
        backend=data.get("backend", defaults.backend),
        path=data.get("path", defaults.path),
        firestore_project=data.get("firestore_project"),
        firestore_database=data.get("firestore_database"),
        firestore_collection=data.get("firestore_collection", defaults.firestore_collection),
    )


def _parse_discovery(
    data: dict[str, Any],
    secret_client: Optional[SecretManagerClient] = None,
) -> DiscoveryConfig:
    """Parse the discovery section, resolving API key placeholders."""
    defaults = DiscoveryConfig()
    return DiscoveryConfig(
        ticketmaster_api_key=_resolve_value(data.get("ticketmaster_api_key", ""), secret_client),
        eventbrite_api_key=_resolve_value(data.get("eventbrite_api_key", ""), secret_client),
        page_size=int(data.get("page_size", defaults.page_size)),
        timeout_seconds=int(data.get("timeout_seconds", defaults.timeout_seconds)),
    )


def _parse_notifications(
    data: dict[str, Any],
    secret_client: Optional[SecretManagerClient] = None,
) -> NotificationConfig:
    """Parse the notifications section, resolving token placeholders."""
    return NotificationConfig(
        slack_bot_token=_resolve_value(data.get("slack_bot_token", ""), secret_client),
        slack_channel=_resolve_value(data.get("slack_channel", ""), secret_client),
        reminder_lead_minutes=int(data.get("reminder_lead_minutes", DEFAULT_REMINDER_LEAD_MINUTES)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only placeholder expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    secret_client = _get_secret_manager_client()

    config = Config(
        timezone=data.get("timezone", Config().timezone),
        device_location=_parse_coordinates(data.get("device_location")),
        storage=_parse_storage(data.get("storage") or {}),
        discovery=_parse_discovery(data.get("discovery") or {}, secret_client),
        notifications=_parse_notifications(data.get("notifications") or {}, secret_client),
    )

    fallback = _parse_coordinates(data.get("fallback_location"))
    if fallback is not None:
        config.fallback_location = fallback

    return config


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: storage=%s, timezone=%s, device location %s",
        config.storage.backend,
        config.timezone,
        "set" if config.device_location else "not set",
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        TICKETMASTER_API_KEY: Ticketmaster key (or secret 'ticketmaster-api-key')
        EVENTBRITE_API_KEY: Eventbrite token (or secret 'eventbrite-api-key')
        SLACK_BOT_TOKEN: Slack bot token (or secret 'slack-bot-token')
        SLACK_CHANNEL: Slack channel for reminders
        REMINDER_LEAD_MINUTES: Minutes before start to remind
        DEVICE_LOCATION: Comma-separated lat,lng of the device
        NEARBY_TIMEZONE: IANA timezone name
        STORAGE_BACKEND: memory, file or firestore
        STORAGE_PATH: Directory for the file backend
        FIRESTORE_DATABASE: Firestore database name

    Returns:
        Config object from environment
    """
    secret_client = _get_secret_manager_client()

    def secret_or_env(secret_name: str) -> str:
        env_var = CREDENTIAL_SECRETS[secret_name]
        if secret_client:
            return secret_client.get_secret_or_env(secret_name, env_var) or ""
        return os.environ.get(env_var, "")

    device_location = None
    location_str = os.environ.get("DEVICE_LOCATION")
    if location_str:
        parts = [float(p.strip()) for p in location_str.split(",")]
        if len(parts) == 2:
            device_location = Coordinates(latitude=parts[0], longitude=parts[1])
        else:
            logger.warning("DEVICE_LOCATION must be 'lat,lng', ignoring %s", location_str)

    storage_defaults = StorageConfig()

    return Config(
        timezone=os.environ.get("NEARBY_TIMEZONE", Config().timezone),
        device_location=device_location,
        storage=StorageConfig(
            backend=os.environ.get("STORAGE_BACKEND", storage_defaults.backend),
            path=os.environ.get("STORAGE_PATH", storage_defaults.path),
            firestore_database=os.environ.get("FIRESTORE_DATABASE"),
        ),
        discovery=DiscoveryConfig(
            ticketmaster_api_key=secret_or_env("ticketmaster-api-key"),
            eventbrite_api_key=secret_or_env("eventbrite-api-key"),
        ),
        notifications=NotificationConfig(
            slack_bot_token=secret_or_env("slack-bot-token"),
            slack_channel=os.environ.get("SLACK_CHANNEL", ""),
            reminder_lead_minutes=int(
                os.environ.get("REMINDER_LEAD_MINUTES", str(DEFAULT_REMINDER_LEAD_MINUTES))
            ),
        ),
    )
