"""Centralised application settings loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings populated from environment / .env file.

    Instances are frozen: the configuration is built once at startup and
    shared read-only by every request.
    """

    # Shared HMAC secret used to check ``X-Super-Signature``
    secret: str = "sk_prod_123456"

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = Field(3000, ge=0, le=65535)

    # Logging
    log_level: str = "INFO"

    @property
    def secret_bytes(self) -> bytes:
        """Return *secret* as the UTF-8 bytes used for the HMAC key."""
        return self.secret.encode("utf-8")

    model_config = {
        "env_prefix": "WEBHOOK_PROBE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "frozen": True,
    }


@lru_cache
def get_settings() -> Settings:
    """Return a cached *Settings* instance."""
    return Settings()
