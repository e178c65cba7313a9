"""
Pydantic schemas for the events backend.

Request fields accept any JSON value and default to None; the routes only
check that required values are present and truthy, and pass them through
unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SendEmailRequest(BaseModel):
    email: Any = None
    message: Any = None


class SendEmailResponse(BaseModel):
    success: bool = True
    body: Any = None


class CreateEventRequest(BaseModel):
    title: Any = None
    start: Any = None
    remindAt: Any = None
    createdBy: Any = None
    notes: Any = None

    def missing_fields(self) -> list[str]:
        required = ("title", "start", "remindAt", "createdBy")
        return [name for name in required if not getattr(self, name)]


class EventFields(BaseModel):
    title: Any
    start: Any
    remindAt: Any
    createdBy: Any
    notes: Any = ""


class CreateEventResponse(BaseModel):
    success: bool = True
    id: str
    event: EventFields


class ListEventsResponse(BaseModel):
    success: bool = True
    events: list[dict] = Field(default_factory=list)
