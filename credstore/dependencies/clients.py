"""
Factory functions that assemble the credential store an application injects
into its consumers.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from keyring.backend import KeyringBackend

from credstore.clients import EmbeddedDatabase
from credstore.core.config import CredentialStoreSettings, get_settings
from credstore.services import (
    CredentialStore,
    EmbeddedCredentialStore,
    KeyringCredentialStore,
    TokenCipherService,
    keyring_supported,
)

logger = logging.getLogger(__name__)


def get_token_cipher_service(
    settings: CredentialStoreSettings,
) -> Optional[TokenCipherService]:
    """Provide record encryption when an encryption secret is configured."""
    if not settings.encryption_secret:
        return None
    return TokenCipherService(secret=settings.encryption_secret)


def open_embedded_database(settings: CredentialStoreSettings) -> EmbeddedDatabase:
    """Open the embedded database at the configured path."""
    return EmbeddedDatabase(settings.db_path)


def build_credential_store(
    settings: Optional[CredentialStoreSettings] = None,
    *,
    database: Optional[EmbeddedDatabase] = None,
    probe: Callable[[], bool] = keyring_supported,
    keyring_backend: Optional[KeyringBackend] = None,
) -> CredentialStore:
    """Construct exactly one credential store for the configured backend.

    With ``backend="auto"`` the availability probe decides between the OS
    keyring and the embedded database. An embedded database handle supplied by
    the caller is reused; otherwise one is opened from ``settings.db_path`` and
    remains open for the life of the process.
    """
    settings = settings or get_settings()
    backend = settings.backend
    if backend == "auto":
        backend = "keyring" if probe() else "embedded"

    logger.info("Using credential backend", extra={"backend": backend})
    if backend == "keyring":
        return KeyringCredentialStore(
            service_label=settings.service_label,
            backend=keyring_backend,
        )

    if database is None:
        database = open_embedded_database(settings)
    return EmbeddedCredentialStore(
        database,
        key_prefix=settings.key_prefix,
        cipher=get_token_cipher_service(settings),
        enforce_expiry=settings.kv_enforce_expiry,
    )


__all__ = [
    "build_credential_store",
    "get_token_cipher_service",
    "open_embedded_database",
]
