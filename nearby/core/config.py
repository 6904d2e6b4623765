"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from nearby.core.formatter import DEFAULT_REMINDER_LEAD_MINUTES
from nearby.core.geo import FALLBACK_LATITUDE, FALLBACK_LONGITUDE


STORAGE_BACKENDS = ("memory", "file", "firestore")


@dataclass
class Coordinates:
    """A configured latitude/longitude."""
    latitude: float
    longitude: float


@dataclass
class StorageConfig:
    """Where persisted state lives.

    Attributes:
        backend: 'memory', 'file' or 'firestore'
        path: Directory for the file backend
        firestore_project: GCP project (None for default)
        firestore_database: Firestore database name (None for default)
        firestore_collection: Firestore collection holding one document per key
    """
    backend: str = "file"
    path: str = ".nearby"
    firestore_project: str | None = None
    firestore_database: str | None = None
    firestore_collection: str = "nearby_state"


@dataclass
class DiscoveryConfig:
    """Discovery provider settings.

    Attributes:
        ticketmaster_api_key: Ticketmaster consumer key (empty to disable)
        eventbrite_api_key: Eventbrite private token (empty to disable)
        page_size: Maximum results requested per provider
        timeout_seconds: HTTP timeout per request
    """
    ticketmaster_api_key: str = ""
    eventbrite_api_key: str = ""
    page_size: int = 100
    timeout_seconds: int = 30


@dataclass
class NotificationConfig:
    """Reminder delivery settings.

    Attributes:
        slack_bot_token: Bot token allowed to schedule messages
        slack_channel: Channel or user id receiving reminders
        reminder_lead_minutes: Minutes before the event start to remind
    """
    slack_bot_token: str = ""
    slack_channel: str = ""
    reminder_lead_minutes: int = DEFAULT_REMINDER_LEAD_MINUTES


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        timezone: IANA timezone for local wall-clock times
        fallback_location: Used when no device fix is available
        device_location: Fixed device position (None means no location access)
        storage: Persistence settings
        discovery: Discovery provider settings
        notifications: Reminder settings
    """
    timezone: str = "America/New_York"
    fallback_location: Coordinates = field(
        default_factory=lambda: Coordinates(FALLBACK_LATITUDE, FALLBACK_LONGITUDE)
    )
    device_location: Coordinates | None = None
    storage: StorageConfig = field(default_factory=StorageConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def _is_unresolved(value: str) -> bool:
    return not value or value.startswith("${")


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_coordinates(
        config.fallback_location.latitude,
        config.fallback_location.longitude,
        "fallback_location",
    ))

    if config.device_location is not None:
        errors.extend(validate_coordinates(
            config.device_location.latitude,
            config.device_location.longitude,
            "device_location",
        ))

    if config.storage.backend not in STORAGE_BACKENDS:
        errors.append(ValidationError(
            field="storage.backend",
            message=f"Unknown storage backend '{config.storage.backend}', expected one of {STORAGE_BACKENDS}",
        ))

    if config.discovery.page_size <= 0:
        errors.append(ValidationError(
            field="discovery.page_size",
            message=f"Page size must be positive, got {config.discovery.page_size}",
        ))

    if config.notifications.reminder_lead_minutes < 0:
        errors.append(ValidationError(
            field="notifications.reminder_lead_minutes",
            message=f"Reminder lead time cannot be negative, got {config.notifications.reminder_lead_minutes}",
        ))

    if (
        _is_unresolved(config.discovery.ticketmaster_api_key)
        and _is_unresolved(config.discovery.eventbrite_api_key)
    ):
        errors.append(ValidationError(
            field="discovery",
            message="No discovery API keys configured, only catalog events will be shown",
            severity="warning",
        ))

    if (
        _is_unresolved(config.notifications.slack_bot_token)
        or _is_unresolved(config.notifications.slack_channel)
    ):
        errors.append(ValidationError(
            field="notifications",
            message="Slack token or channel not set, reminders will not be scheduled",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
