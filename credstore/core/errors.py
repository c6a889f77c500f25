"""
Error taxonomy shared by every credential store backend.

Each error records the operation and identity it originated from so callers
can log or retry at a higher layer without inspecting backend internals.
"""

from __future__ import annotations

from typing import Optional


class CredentialStoreError(Exception):
    """Base class for failures raised by credential stores."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        identity: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.identity = identity

    def __str__(self) -> str:
        context = []
        if self.operation:
            context.append(f"operation={self.operation}")
        if self.identity is not None:
            context.append(f"identity={self.identity!r}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class NotFoundError(CredentialStoreError):
    """Raised when no credential is stored for an identity."""


class InvalidCredentialError(CredentialStoreError):
    """Raised when a stored credential is expired or malformed."""


class DecodeError(CredentialStoreError):
    """Raised when stored bytes cannot be parsed into a credential."""


class SerializationError(CredentialStoreError):
    """Raised when a credential cannot be encoded for storage."""


class BackendWriteError(CredentialStoreError):
    """Raised when the underlying store rejects a write."""


class BackendReadError(CredentialStoreError):
    """Raised when the underlying store fails while reading."""


class InvalidIdentityError(CredentialStoreError, ValueError):
    """Raised when an identity is empty or not a string."""


__all__ = [
    "BackendReadError",
    "BackendWriteError",
    "CredentialStoreError",
    "DecodeError",
    "InvalidCredentialError",
    "InvalidIdentityError",
    "NotFoundError",
    "SerializationError",
]
