"""Firestore Store - Imperative Shell.

This module persists engine state to Google Cloud Firestore, one
document per logical key.

All I/O is contained here; state transitions are in the core module.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from google.cloud import firestore


logger = logging.getLogger(__name__)


# Default collection name for engine state documents
DEFAULT_COLLECTION = "nearby_state"


@dataclass
class FirestoreConfig:
    """Configuration for Firestore store.

    Attributes:
        project_id: GCP project ID (None for default)
        database: Firestore database name (None for default database)
        collection: Firestore collection name
    """
    project_id: str | None = None
    database: str | None = None
    collection: str = DEFAULT_COLLECTION


class FirestoreStore:
    """Key-value store backed by Firestore documents.

    This is part of the imperative shell - it handles database I/O.

    Document structure (one per key):
    {
        "value": <JSON-compatible value>,
        "updated_at": <timestamp>
    }
    """

    def __init__(self, config: FirestoreConfig | None = None) -> None:
        """Initialize Firestore store.

        Args:
            config: Firestore configuration
        """
        self.config = config or FirestoreConfig()
        self._client: firestore.Client | None = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of Firestore client."""
        if self._client is None:
            kwargs = {}
            if self.config.project_id:
                kwargs['project'] = self.config.project_id
            if self.config.database:
                kwargs['database'] = self.config.database
            self._client = firestore.Client(**kwargs)
        return self._client

    def _get_doc_ref(self, key: str) -> Any:
        """Get reference to the document holding a key."""
        return (
            self.client
            .collection(self.config.collection)
            .document(key.lstrip("@"))
        )

    def _read(self, key: str) -> Any | None:
        doc = self._get_doc_ref(key).get()
        if not doc.exists:
            return None
        return (doc.to_dict() or {}).get("value")

    def _write(self, key: str, value: Any) -> None:
        self._get_doc_ref(key).set({
            "value": value,
            "updated_at": datetime.now(timezone.utc),
        })

    async def get(self, key: str) -> Any | None:
        """Fetch the value stored under a key.

        This method performs database I/O.

        Returns:
            Stored value, or None if missing or on error
        """
        logger.debug("Fetching %s from Firestore", key)

        try:
            return await asyncio.to_thread(self._read, key)
        except Exception as e:
            logger.error("Failed to fetch %s: %s", key, str(e))
            return None

    async def set(self, key: str, value: Any) -> bool:
        """Replace the value stored under a key.

        A document set is atomic, so a key is never partially written.

        Returns:
            True if save was successful
        """
        logger.debug("Saving %s to Firestore", key)

        try:
            await asyncio.to_thread(self._write, key, value)
            return True
        except Exception as e:
            logger.error("Failed to save %s: %s", key, str(e))
            return False

    def close(self) -> None:
        """Release the underlying client, if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None
