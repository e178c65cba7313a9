"""
Dependency wiring for the FastAPI app.

Client handles are built once by create_app() and kept on app.state; the
accessors below hand them to route handlers.
"""

from __future__ import annotations

import logging

from fastapi import Request

from events_api.config import Settings
from events_api.mailer import InMemoryMailer, MailgunMailer, Mailer
from events_api.store import EventStore, FirestoreEventStore, InMemoryEventStore

logger = logging.getLogger(__name__)


def build_event_store(settings: Settings) -> EventStore:
    if settings.use_in_memory_backends:
        return InMemoryEventStore()
    return FirestoreEventStore.from_service_account(
        settings.firebase_credentials_path,
        collection=settings.events_collection,
    )


def build_mailer(settings: Settings) -> Mailer:
    if settings.use_in_memory_backends:
        return InMemoryMailer()
    if not settings.mailgun_configured:
        logger.error(
            "[mailgun] Mailgun config missing. Set MAILGUN_API_KEY and "
            "MAILGUN_DOMAIN in environment."
        )
    return MailgunMailer(
        api_key=settings.mailgun_api_key,
        domain=settings.mailgun_domain,
        base_url=settings.mailgun_base_url,
    )


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_authorized_emails(request: Request) -> frozenset[str]:
    return request.app.state.authorized_emails
