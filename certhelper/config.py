"""
Configuration via Pydantic Settings.

All values can be overridden by ``CERTHELPER_``-prefixed environment variables
or a .env file.  The defaults for new keys live here rather than in function
signatures, so that key generation always receives its parameters explicitly.
"""
from __future__ import annotations

import logging
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CERTHELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Key generation defaults ────────────────────────────────────────────
    DEFAULT_KEY_TYPE: Literal["RSA", "EC"] = "RSA"
    DEFAULT_KEY_SIZE: int = 4096

    # ── CSR subject / signature ────────────────────────────────────────────
    CSR_COUNTRY_NAME: str = "NL"
    CSR_DIGEST: Literal["sha256", "sha384", "sha512"] = "sha512"

    # ── Logging ────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_KEY_TYPE", mode="before")
    @classmethod
    def upper_key_type(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("CSR_DIGEST", mode="before")
    @classmethod
    def lower_digest(cls, v: object) -> object:
        return v.lower() if isinstance(v, str) else v

    @field_validator("CSR_COUNTRY_NAME")
    @classmethod
    def validate_country(cls, v: str) -> str:
        if len(v) != 2 or not v.isalpha():
            raise ValueError("CSR_COUNTRY_NAME must be a two-letter country code")
        return v.upper()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"LOG_LEVEL {v!r} is not a logging level name")
        return v.upper()

    @model_validator(mode="after")
    def validate_key_defaults(self) -> "Settings":
        if self.DEFAULT_KEY_TYPE == "EC" and self.DEFAULT_KEY_SIZE not in (256, 384):
            raise ValueError("DEFAULT_KEY_SIZE must be 256 or 384 when DEFAULT_KEY_TYPE='EC'")
        if self.DEFAULT_KEY_SIZE <= 0:
            raise ValueError("DEFAULT_KEY_SIZE must be positive")
        return self


# Module-level singleton, import and use everywhere.
settings = Settings()
