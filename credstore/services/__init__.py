"""Service layer exports."""

from .availability import keyring_supported, secret_service_reachable
from .base import CredentialStore
from .keyring_store import KeyringCredentialStore
from .kv_store import EmbeddedCredentialStore
from .token_cipher import TokenCipherService

__all__ = [
    "CredentialStore",
    "EmbeddedCredentialStore",
    "KeyringCredentialStore",
    "TokenCipherService",
    "keyring_supported",
    "secret_service_reachable",
]
