"""Imperative Shell - I/O operations.

This module contains all code that performs side effects:
- HTTP requests to Ticketmaster, Eventbrite and Slack
- Key-value persistence (memory, JSON files, Firestore)
- Device location access
- Configuration and secret loading

Business logic lives in the core module.
"""

from nearby.shell.discovery import DiscoverySource, MultiSourceDiscovery
from nearby.shell.eventbrite_client import EventbriteClient
from nearby.shell.firestore_store import FirestoreConfig, FirestoreStore
from nearby.shell.location import LocationProvider, StaticLocationProvider
from nearby.shell.slack_notifier import Notifier, SlackReminderNotifier
from nearby.shell.store import JsonFileStore, KeyValueStore, MemoryStore
from nearby.shell.ticketmaster_client import TicketmasterClient

__all__ = [
    "DiscoverySource",
    "EventbriteClient",
    "FirestoreConfig",
    "FirestoreStore",
    "JsonFileStore",
    "KeyValueStore",
    "LocationProvider",
    "MemoryStore",
    "MultiSourceDiscovery",
    "Notifier",
    "SlackReminderNotifier",
    "StaticLocationProvider",
    "TicketmasterClient",
]
