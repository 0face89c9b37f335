# config.py
"""
Runtime configuration read from the environment (and a local .env file).
"""
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env(name: str, default: str = "") -> str:
     return os.getenv(name, default)


class Settings(BaseModel):
     """Runtime configuration for the verification backend."""

     otp_ttl_seconds: int = Field(default_factory=lambda: int(_env("OTP_TTL_SECONDS", "600")), gt=0)
     otp_max_attempts: int = Field(default_factory=lambda: int(_env("OTP_MAX_ATTEMPTS", "3")), gt=0)
     otp_length: int = Field(default_factory=lambda: int(_env("OTP_LENGTH", "4")), gt=0, le=12)
     transaction_id_prefix: str = Field(default_factory=lambda: _env("TRANSACTION_ID_PREFIX", "INV"), min_length=1)

     notifier_backend: str = Field(default_factory=lambda: _env("NOTIFIER_BACKEND", "log"))
     notifier_timeout_seconds: float = Field(default_factory=lambda: float(_env("NOTIFIER_TIMEOUT_SECONDS", "10")), gt=0)
     brevo_api_key: str = Field(default_factory=lambda: _env("BREVO_API_KEY"))
     email_from_name: str = Field(default_factory=lambda: _env("EMAIL_FROM_NAME", "Secure Payment Portal"))
     email_from_address: str = Field(default_factory=lambda: _env("EMAIL_FROM_ADDRESS", "noreply@example.com"))

     cors_origins: List[str] = Field(
          default_factory=lambda: [origin.strip() for origin in _env("CORS_ORIGINS").split(",") if origin.strip()]
     )
     log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
     port: int = Field(default_factory=lambda: int(_env("PORT", "10000")))


@lru_cache
def get_settings() -> Settings:
     """Return cached settings instance."""
     return Settings()
