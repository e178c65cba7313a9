"""
Configuration and settings for the events backend.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# The server always listens on this address.
HOST = "0.0.0.0"
PORT = 3000


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Mailgun
    mailgun_api_key: Optional[str] = Field(default=None, alias="MAILGUN_API_KEY")
    mailgun_domain: Optional[str] = Field(default=None, alias="MAILGUN_DOMAIN")
    mailgun_base_url: str = Field(
        default="https://api.mailgun.net/v3", alias="MAILGUN_BASE_URL"
    )
    mail_sender_name: str = Field(default="Mailgun Sandbox", alias="MAIL_SENDER_NAME")
    mail_subject: str = Field(
        default="Library Contact Message", alias="MAIL_SUBJECT"
    )

    # Destination addresses accepted by /send-email
    authorized_emails: Annotated[list[str], NoDecode] = Field(
        default_factory=list, alias="AUTHORIZED_EMAILS"
    )

    # Firestore
    firebase_credentials_path: str = Field(
        default="serviceAccountKey.json", alias="FIREBASE_CREDENTIALS_PATH"
    )
    events_collection: str = Field(default="events", alias="EVENTS_COLLECTION")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, alias="EVENTS_USE_IN_MEMORY_BACKENDS"
    )

    @field_validator("authorized_emails", mode="before")
    @classmethod
    def _split_emails(cls, value):
        # Accept either a JSON list or a comma-separated string.
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return json.loads(value)
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def mailgun_configured(self) -> bool:
        return bool(self.mailgun_api_key and self.mailgun_domain)

    @property
    def mail_sender(self) -> str:
        return f"{self.mail_sender_name} <postmaster@{self.mailgun_domain}>"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
