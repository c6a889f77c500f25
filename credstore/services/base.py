"""
Backend-agnostic contract for persisting per-identity credentials.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import ValidationError

from credstore.core.errors import (
    DecodeError,
    InvalidCredentialError,
    InvalidIdentityError,
    SerializationError,
)
from credstore.models.credential import Credential, decode_credential, encode_credential

STORE_OPERATION = "store_token"
RETRIEVE_OPERATION = "retrieve_token"


class CredentialStore(ABC):
    """Store and retrieve one credential per identity.

    Implementations never cache credentials: every call round-trips through
    the backend, and ``store_token`` replaces any previous record.
    """

    @abstractmethod
    def store_token(self, identity: str, token: Credential) -> None:
        """Persist ``token`` for ``identity``, overwriting any prior value."""

    @abstractmethod
    def retrieve_token(self, identity: str) -> Credential:
        """Return the credential stored for ``identity``."""

    @staticmethod
    def _require_identity(identity: str, operation: str) -> str:
        if not isinstance(identity, str) or not identity.strip():
            raise InvalidIdentityError(
                "Identity must be a non-empty string",
                operation=operation,
                identity=identity if isinstance(identity, str) else None,
            )
        return identity

    @staticmethod
    def _encode(identity: str, token: Credential) -> str:
        try:
            return encode_credential(token)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                "Failed serializing credential",
                operation=STORE_OPERATION,
                identity=identity,
            ) from exc

    @staticmethod
    def _decode(identity: str, payload: str | bytes) -> Credential:
        try:
            return decode_credential(payload)
        except ValidationError as exc:
            raise DecodeError(
                "Failed decoding stored credential",
                operation=RETRIEVE_OPERATION,
                identity=identity,
            ) from exc

    @staticmethod
    def _validate(identity: str, credential: Credential) -> Credential:
        if credential.valid():
            return credential
        reason = "expired" if credential.expired() else "missing access token"
        raise InvalidCredentialError(
            f"Stored credential is invalid: {reason}",
            operation=RETRIEVE_OPERATION,
            identity=identity,
        )


__all__ = ["CredentialStore", "RETRIEVE_OPERATION", "STORE_OPERATION"]
