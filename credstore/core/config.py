"""
Configuration models and helpers.

Centralizes the settings that decide which credential backend is built and
how its keys are namespaced, so every consumer shares one configuration
surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BackendName = Literal["auto", "keyring", "embedded"]

DEFAULT_SERVICE_LABEL = "googlephotos-uploader-go-api"
DEFAULT_KEY_PREFIX = "credential"


class CredentialStoreSettings(BaseSettings):
    """Root settings object for credential persistence."""

    backend: BackendName = Field(
        "auto",
        description=(
            "Backend to construct. 'auto' prefers the OS secret store when the "
            "availability probe succeeds and falls back to the embedded database."
        ),
    )
    service_label: str = Field(
        DEFAULT_SERVICE_LABEL,
        description="Service name under which secrets are filed in the OS keyring.",
    )
    key_prefix: str = Field(
        DEFAULT_KEY_PREFIX,
        description="Namespace prefix for keys written to the embedded database.",
    )
    db_path: Path = Field(
        Path("data/credentials.db"),
        description="Location of the embedded key-value database file.",
    )
    kv_enforce_expiry: bool = Field(
        False,
        description="Reject expired credentials read from the embedded database.",
    )
    encryption_secret: Optional[str] = Field(
        None,
        description=(
            "Secret used to derive the symmetric key for encrypting records in "
            "the embedded database. Records are stored as plain JSON when unset."
        ),
    )
    log_level: str = Field("INFO")

    model_config = SettingsConfigDict(
        env_prefix="CREDSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: object) -> object:
        """Accept backend names regardless of case or surrounding whitespace."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("service_label", "key_prefix")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be empty")
        return cleaned


@lru_cache()
def get_settings() -> CredentialStoreSettings:
    """Return a cached settings object."""
    return CredentialStoreSettings()


__all__ = [
    "BackendName",
    "DEFAULT_KEY_PREFIX",
    "DEFAULT_SERVICE_LABEL",
    "CredentialStoreSettings",
    "get_settings",
]
