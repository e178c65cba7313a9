"""
HTTP routes for the events backend.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from events_api.config import Settings
from events_api.dependencies import (
    get_authorized_emails,
    get_event_store,
    get_mailer,
    get_settings_dep,
)
from events_api.errors import AuthorizationError, ValidationError
from events_api.mailer import EmailMessage, Mailer
from events_api.schemas import (
    CreateEventRequest,
    CreateEventResponse,
    EventFields,
    ListEventsResponse,
    SendEmailRequest,
    SendEmailResponse,
)
from events_api.store import EventStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send-email", response_model=SendEmailResponse)
def send_email(
    payload: SendEmailRequest,
    settings: Settings = Depends(get_settings_dep),
    authorized_emails: frozenset[str] = Depends(get_authorized_emails),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Relay a contact message to an allow-listed address through the mailer.
    """
    if not payload.email or not payload.message:
        raise ValidationError("Missing fields")

    # Exact match only; non-string values are never on the list.
    if not isinstance(payload.email, str) or payload.email not in authorized_emails:
        raise AuthorizationError(
            f'The email "{payload.email}" is not authorized in the Mailgun Sandbox.'
        )

    message = EmailMessage(
        sender=settings.mail_sender,
        to=payload.email,
        subject=settings.mail_subject,
        text=payload.message,
    )
    body = mailer.send(message)
    return SendEmailResponse(body=body)


@router.get("/api/events", response_model=ListEventsResponse)
def list_events(store: EventStore = Depends(get_event_store)):
    events = [event.as_dict() for event in store.list_events()]
    return ListEventsResponse(events=events)


@router.get("/api/events/{email}", response_model=ListEventsResponse)
def list_events_by_creator(email: str, store: EventStore = Depends(get_event_store)):
    # Exact, case-sensitive match on createdBy.
    events = [event.as_dict() for event in store.find_events_by_creator(email)]
    return ListEventsResponse(events=events)


@router.post("/events", response_model=CreateEventResponse)
def create_event(
    payload: CreateEventRequest, store: EventStore = Depends(get_event_store)
):
    if payload.missing_fields():
        raise ValidationError("Missing required fields")

    event = EventFields(
        title=payload.title,
        start=payload.start,
        remindAt=payload.remindAt,
        createdBy=payload.createdBy,
        notes=payload.notes or "",
    )
    event_id = store.add_event(event.model_dump())
    logger.info("Created event %s for %s", event_id, event.createdBy)
    return CreateEventResponse(id=event_id, event=event)
