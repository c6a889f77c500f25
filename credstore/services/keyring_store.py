"""
Credential store backed by the operating system keyring.

Secrets are filed under a fixed service label with the identity as the account
name. Reads re-validate the decoded credential so callers never receive an
expired token from this backend.
"""

from __future__ import annotations

import logging
from typing import Optional

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError

from credstore.core.config import DEFAULT_SERVICE_LABEL
from credstore.core.errors import BackendReadError, BackendWriteError, NotFoundError
from credstore.models.credential import Credential
from credstore.services.base import RETRIEVE_OPERATION, STORE_OPERATION, CredentialStore

logger = logging.getLogger(__name__)


class KeyringCredentialStore(CredentialStore):
    """Persist credentials in the OS secret store via ``keyring``."""

    def __init__(
        self,
        service_label: str = DEFAULT_SERVICE_LABEL,
        backend: Optional[KeyringBackend] = None,
    ) -> None:
        if not service_label:
            raise ValueError("Service label must be provided.")
        self._service_label = service_label
        self._keyring = backend or keyring.get_keyring()

    @property
    def service_label(self) -> str:
        return self._service_label

    def store_token(self, identity: str, token: Credential) -> None:
        identity = self._require_identity(identity, STORE_OPERATION)
        payload = self._encode(identity, token)
        try:
            self._keyring.set_password(self._service_label, identity, payload)
        except KeyringError as exc:
            raise BackendWriteError(
                "Failed storing token into keyring",
                operation=STORE_OPERATION,
                identity=identity,
            ) from exc
        logger.info("Stored credential in keyring", extra={"identity": identity})

    def retrieve_token(self, identity: str) -> Credential:
        identity = self._require_identity(identity, RETRIEVE_OPERATION)
        try:
            payload = self._keyring.get_password(self._service_label, identity)
        except KeyringError as exc:
            raise BackendReadError(
                "Failed retrieving token from keyring",
                operation=RETRIEVE_OPERATION,
                identity=identity,
            ) from exc

        if payload is None:
            raise NotFoundError(
                "No credential stored in keyring",
                operation=RETRIEVE_OPERATION,
                identity=identity,
            )

        credential = self._decode(identity, payload)
        return self._validate(identity, credential)


__all__ = ["DEFAULT_SERVICE_LABEL", "KeyringCredentialStore"]
