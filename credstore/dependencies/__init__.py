"""Expose factory helpers for wiring a credential store."""

from .clients import (
    build_credential_store,
    get_token_cipher_service,
    open_embedded_database,
)

__all__ = [
    "build_credential_store",
    "get_token_cipher_service",
    "open_embedded_database",
]
