"""
Credential store backed by the embedded key-value database.

Records live under ``"<prefix>_<identity>"``. The prefix is a fixed constant,
so distinct identities always map to distinct keys even when an identity
contains the separator.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from credstore.clients.sqlite_store import EmbeddedDatabase
from credstore.core.config import DEFAULT_KEY_PREFIX
from credstore.core.errors import BackendReadError, BackendWriteError, DecodeError, NotFoundError
from credstore.models.credential import Credential
from credstore.services.base import RETRIEVE_OPERATION, STORE_OPERATION, CredentialStore
from credstore.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class EmbeddedCredentialStore(CredentialStore):
    """Persist credentials in a shared :class:`EmbeddedDatabase` handle.

    Expiry is not checked on read unless ``enforce_expiry`` is set; callers
    relying on freshness must inspect ``Credential.valid()`` themselves.
    """

    def __init__(
        self,
        database: EmbeddedDatabase,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        cipher: Optional[TokenCipherService] = None,
        enforce_expiry: bool = False,
    ) -> None:
        if not key_prefix:
            raise ValueError("Key prefix must be provided.")
        self._db = database
        self._prefix = key_prefix
        self._cipher = cipher
        self._enforce_expiry = enforce_expiry

    def key_for(self, identity: str) -> str:
        """Return the database key holding the credential for ``identity``."""
        return f"{self._prefix}_{identity}"

    def store_token(self, identity: str, token: Credential) -> None:
        identity = self._require_identity(identity, STORE_OPERATION)
        payload = self._encode(identity, token).encode("utf-8")
        if self._cipher is not None:
            payload = self._cipher.encrypt(payload)

        try:
            self._db.put(self.key_for(identity), payload)
        except sqlite3.Error as exc:
            raise BackendWriteError(
                "Failed writing credential to embedded database",
                operation=STORE_OPERATION,
                identity=identity,
            ) from exc
        logger.info("Stored credential in embedded database", extra={"identity": identity})

    def retrieve_token(self, identity: str) -> Credential:
        identity = self._require_identity(identity, RETRIEVE_OPERATION)
        try:
            payload = self._db.get(self.key_for(identity))
        except sqlite3.Error as exc:
            raise BackendReadError(
                "Failed reading credential from embedded database",
                operation=RETRIEVE_OPERATION,
                identity=identity,
            ) from exc

        if payload is None:
            logger.info("No credential found in embedded database", extra={"identity": identity})
            raise NotFoundError(
                "No credential stored in embedded database",
                operation=RETRIEVE_OPERATION,
                identity=identity,
            )

        if self._cipher is not None:
            try:
                payload = self._cipher.decrypt(payload)
            except ValueError as exc:
                raise DecodeError(
                    "Failed decrypting stored credential",
                    operation=RETRIEVE_OPERATION,
                    identity=identity,
                ) from exc

        credential = self._decode(identity, payload)
        if self._enforce_expiry:
            return self._validate(identity, credential)
        return credential


__all__ = ["DEFAULT_KEY_PREFIX", "EmbeddedCredentialStore"]
