"""
Event store abstraction for Cloud Firestore and an in-memory test implementation.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Protocol

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from events_api.errors import StoreError

logger = logging.getLogger(__name__)

CREATED_BY_FIELD = "createdBy"

# Exceptions raised by the Firestore client for failed calls.
FIRESTORE_ERRORS = (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError)


@dataclass
class StoredEvent:
    event_id: str
    data: dict

    def as_dict(self) -> dict:
        return {"id": self.event_id, **self.data}


class EventStore(Protocol):
    """Operations the API needs from the events collection."""

    def add_event(self, data: dict) -> str:
        ...

    def list_events(self) -> list[StoredEvent]:
        ...

    def find_events_by_creator(self, created_by: str) -> list[StoredEvent]:
        ...

    def count_events(self) -> int:
        ...


@dataclass
class InMemoryEventStore:
    """Simple in-memory store for development and tests."""

    docs: Dict[str, dict] = field(default_factory=dict)

    def add_event(self, data: dict) -> str:
        event_id = uuid.uuid4().hex
        self.docs[event_id] = dict(data)
        return event_id

    def list_events(self) -> list[StoredEvent]:
        return [StoredEvent(event_id, dict(data)) for event_id, data in self.docs.items()]

    def find_events_by_creator(self, created_by: str) -> list[StoredEvent]:
        return [
            StoredEvent(event_id, dict(data))
            for event_id, data in self.docs.items()
            if data.get(CREATED_BY_FIELD) == created_by
        ]

    def count_events(self) -> int:
        return len(self.docs)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.docs.clear()


class FirestoreEventStore:
    """
    Firestore-backed implementation. Client errors are re-raised as StoreError
    carrying the client's message.
    """

    def __init__(self, client, collection: str = "events"):
        self.client = client
        self.collection_name = collection

    @classmethod
    def from_service_account(
        cls, credentials_path: str, collection: str = "events"
    ) -> "FirestoreEventStore":
        try:
            app = firebase_admin.get_app()
        except ValueError:
            app = firebase_admin.initialize_app(
                credentials.Certificate(credentials_path)
            )
        return cls(firestore.client(app), collection=collection)

    @property
    def collection(self):
        return self.client.collection(self.collection_name)

    def add_event(self, data: dict) -> str:
        try:
            _, doc_ref = self.collection.add(data)
        except FIRESTORE_ERRORS as exc:
            raise StoreError(_message(exc)) from exc
        return doc_ref.id

    def list_events(self) -> list[StoredEvent]:
        return self._read(self.collection)

    def find_events_by_creator(self, created_by: str) -> list[StoredEvent]:
        query = self.collection.where(
            filter=FieldFilter(CREATED_BY_FIELD, "==", created_by)
        )
        return self._read(query)

    def count_events(self) -> int:
        try:
            results = self.collection.count().get()
        except FIRESTORE_ERRORS as exc:
            raise StoreError(_message(exc)) from exc
        return int(results[0][0].value)

    def _read(self, query) -> list[StoredEvent]:
        events = []
        try:
            for snapshot in query.stream():
                data = snapshot.to_dict() or {}
                logger.debug("[firestore] document %s: %s", snapshot.id, data)
                events.append(StoredEvent(snapshot.id, data))
        except FIRESTORE_ERRORS as exc:
            raise StoreError(_message(exc)) from exc
        return events


def _message(exc: Exception) -> str:
    # GoogleAPICallError keeps the server message separately from the status.
    return getattr(exc, "message", None) or str(exc)
