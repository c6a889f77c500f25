"""
Domain model for persisted OAuth credentials.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from google.oauth2.credentials import Credentials
from pydantic import BaseModel, ConfigDict, Field, field_validator

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Tokens are treated as expired slightly early to absorb clock skew.
EXPIRY_DELTA = timedelta(seconds=10)

# Records written by the legacy uploader carry nanosecond precision and the
# zero time for tokens without an expiry.
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_FRACTION_PATTERN = re.compile(r"(\.\d{6})\d+")


class Credential(BaseModel):
    """An OAuth access credential as stored by every backend."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., description="Bearer value sent to APIs.")
    token_type: str = Field("Bearer", description="Authorization header scheme.")
    refresh_token: Optional[str] = Field(
        None, description="Token used by the auth flow to mint new access tokens."
    )
    expiry: Optional[datetime] = Field(
        None, description="UTC expiry instant. None means the token never expires."
    )

    @field_validator("token_type", mode="before")
    @classmethod
    def _default_token_type(cls, value: Any) -> Any:
        if value in (None, ""):
            return "Bearer"
        return value

    @field_validator("refresh_token", mode="before")
    @classmethod
    def _blank_refresh_token(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("expiry", mode="before")
    @classmethod
    def _trim_expiry_precision(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _FRACTION_PATTERN.sub(r"\1", value)
        return value

    @field_validator("expiry")
    @classmethod
    def _normalize_expiry(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        try:
            value = value.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ValueError("expiry is outside the supported datetime range") from exc
        if value == _ZERO_TIME:
            return None
        return value

    def expired(self, now: Optional[datetime] = None) -> bool:
        """Return True when the credential is past (or about to reach) its expiry."""
        if self.expiry is None:
            return False
        current = now or datetime.now(timezone.utc)
        # expiry - EXPIRY_DELTA < now, without underflow near datetime.min.
        return self.expiry < current + EXPIRY_DELTA

    def valid(self, now: Optional[datetime] = None) -> bool:
        """Return True when the credential carries an access token and is unexpired."""
        return bool(self.access_token) and not self.expired(now)

    @classmethod
    def from_google_credentials(cls, credentials: Credentials) -> "Credential":
        """Build a credential from the google-auth type produced by the auth flow."""
        return cls(
            access_token=credentials.token or "",
            refresh_token=credentials.refresh_token,
            expiry=credentials.expiry,
        )

    def to_google_credentials(
        self,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        scopes: Optional[Iterable[str]] = None,
        token_uri: str = GOOGLE_TOKEN_URI,
    ) -> Credentials:
        """Return google-auth credentials suitable for building API clients."""
        # google-auth compares expiry against naive UTC timestamps.
        expiry = self.expiry.replace(tzinfo=None) if self.expiry else None
        return Credentials(
            token=self.access_token,
            refresh_token=self.refresh_token,
            token_uri=token_uri,
            client_id=client_id,
            client_secret=client_secret,
            scopes=list(scopes) if scopes is not None else None,
            expiry=expiry,
        )


def encode_credential(credential: Credential | dict[str, Any]) -> str:
    """Serialize a credential to its canonical JSON text form.

    Raises ``pydantic.ValidationError`` or ``TypeError`` when the value cannot be
    represented as a credential.
    """
    if isinstance(credential, dict):
        credential = Credential.model_validate(credential)
    if not isinstance(credential, Credential):
        raise TypeError(
            f"Expected Credential, got {type(credential).__name__}"
        )
    return credential.model_dump_json()


def decode_credential(payload: str | bytes) -> Credential:
    """Parse canonical JSON text (or UTF-8 bytes) into a credential.

    Raises ``pydantic.ValidationError`` when the payload is not a credential.
    """
    return Credential.model_validate_json(payload)


__all__ = [
    "Credential",
    "EXPIRY_DELTA",
    "GOOGLE_TOKEN_URI",
    "decode_credential",
    "encode_credential",
]
