from datetime import datetime
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    debug: bool = True
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = ["*"]

    ENVIRONMENT: str = "Production"

    # Party / RSVP status store (external)
    invitation_api_url: str = "http://localhost:3000"
    lookup_timeout_seconds: float = 10.0

    # Event
    event_id: str = "boda-marielos-guillermo-2025"
    event_title: str = "Boda Marielos & Guillermo"
    event_start: datetime = datetime.fromisoformat("2025-12-27T16:00:00-06:00")
    event_end: datetime = datetime.fromisoformat("2025-12-28T00:00:00-06:00")
    event_timezone: str = "America/Guatemala"
    event_location: str = "San José Catedral y Hotel Soleil La Antigua"
    event_details: str = "Te esperamos para celebrar con nosotros."
    calendar_title: str = "Boda de Marielos y Guillermo"

    # RSVP deadlines
    rsvp_base_deadline: datetime = datetime.fromisoformat("2025-11-16T06:00:00+00:00")
    rsvp_base_deadline_label: str = "15 de noviembre de 2025"
    rsvp_extended_deadline: datetime = datetime.fromisoformat("2025-12-01T06:00:00+00:00")
    rsvp_extended_deadline_label: str = "30 de noviembre de 2025"
    # Comma separated tokens allowed to confirm until the extended deadline
    rsvp_extended_tokens: str = ""

    # Ticket
    ticket_logo_path: str = ""

    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0
    SENTRY_PROFILES_SAMPLE_RATE: float = 0.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def get_extended_tokens(self) -> frozenset[str]:
        return frozenset(
            token.strip() for token in self.rsvp_extended_tokens.split(",") if token.strip()
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
