"""
Outbound email through Mailgun, plus an in-memory mailer for local runs and tests.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

import requests

from events_api.errors import ProviderError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds

MISSING_CONFIG_MESSAGE = (
    "Mailgun config missing. Set MAILGUN_API_KEY and MAILGUN_DOMAIN in environment."
)


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: str
    subject: str
    text: str

    def as_form(self) -> dict:
        return {
            "from": self.sender,
            "to": self.to,
            "subject": self.subject,
            "text": self.text,
        }


class Mailer(Protocol):
    """Dispatches a single message and returns the provider's response body."""

    def send(self, message: EmailMessage) -> dict:
        ...


@dataclass
class InMemoryMailer:
    """Test double that records messages instead of sending them."""

    sent: list[EmailMessage] = field(default_factory=list)

    def send(self, message: EmailMessage) -> dict:
        self.sent.append(message)
        return {
            "id": f"<{uuid.uuid4().hex}@in-memory.test>",
            "message": "Queued. Thank you.",
        }


@dataclass
class MailgunMailer:
    """
    Client for the Mailgun messages API. Each call makes exactly one request;
    failures are raised as ProviderError with Mailgun's message.
    """

    api_key: Optional[str]
    domain: Optional[str]
    base_url: str = "https://api.mailgun.net/v3"

    def __post_init__(self):
        self._session = requests.Session()
        if self.api_key:
            self._session.auth = ("api", self.api_key)

    @property
    def messages_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.domain}/messages"

    def send(self, message: EmailMessage) -> dict:
        if not self.api_key or not self.domain:
            raise ProviderError(MISSING_CONFIG_MESSAGE)

        try:
            response = self._session.post(
                self.messages_url, data=message.as_form(), timeout=REQUEST_TIMEOUT
            )
        except requests.RequestException as exc:
            logger.error("[mailgun] request to %s failed: %s", message.to, exc)
            raise ProviderError(str(exc)) from exc

        if not response.ok:
            error = _error_message(response)
            logger.error(
                "[mailgun] send to %s rejected (%s): %s",
                message.to,
                response.status_code,
                error,
            )
            raise ProviderError(error)

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        message_id = body.get("id") if isinstance(body, dict) else None
        logger.info("[mailgun] email sent to %s: %s", message.to, message_id)
        return body


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return payload["message"]
    return response.text or f"{response.status_code} {response.reason}"
