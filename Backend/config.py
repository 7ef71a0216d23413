import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


MAX_BODY_BYTES = 10 * 1024 * 1024  # 10 MB


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    openai_api_key: Optional[str] = None
    email_user: Optional[str] = None
    email_pass: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 5001
    log_level: str = "info"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    max_body_bytes: int = MAX_BODY_BYTES

    @property
    def openai_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_pass)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables (and .env if present)."""
        if load_env_file:
            load_dotenv()

        origins = _split_csv(os.getenv("CORS_ORIGINS", "")) or ["*"]

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            email_user=os.getenv("EMAIL_USER") or None,
            email_pass=os.getenv("EMAIL_PASS") or None,
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT") or cls.port),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            allowed_origins=origins,
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
