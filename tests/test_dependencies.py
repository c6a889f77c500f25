from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from credstore.core.config import CredentialStoreSettings
from credstore.core.errors import InvalidCredentialError
from credstore.dependencies import build_credential_store, get_token_cipher_service
from credstore.services import EmbeddedCredentialStore, KeyringCredentialStore


def _settings(tmp_path: Path, **overrides) -> CredentialStoreSettings:
    overrides.setdefault("db_path", tmp_path / "credentials.db")
    return CredentialStoreSettings(_env_file=None, **overrides)


def _probe_never_called() -> bool:
    raise AssertionError("probe should not run for an explicit backend")


def test_auto_prefers_keyring_when_probe_succeeds(tmp_path, fake_keyring) -> None:
    store = build_credential_store(
        _settings(tmp_path, backend="auto"),
        probe=lambda: True,
        keyring_backend=fake_keyring,
    )

    assert isinstance(store, KeyringCredentialStore)


def test_auto_falls_back_to_embedded_database(tmp_path, database) -> None:
    store = build_credential_store(
        _settings(tmp_path, backend="auto"),
        database=database,
        probe=lambda: False,
    )

    assert isinstance(store, EmbeddedCredentialStore)


def test_explicit_keyring_backend_skips_probe(tmp_path, fake_keyring, make_credential) -> None:
    store = build_credential_store(
        _settings(tmp_path, backend="keyring", service_label="photos"),
        probe=_probe_never_called,
        keyring_backend=fake_keyring,
    )
    credential = make_credential()

    store.store_token("alice", credential)

    assert ("photos", "alice") in fake_keyring.secrets


def test_embedded_backend_opens_configured_database(tmp_path, make_credential) -> None:
    settings = _settings(tmp_path, backend="embedded", key_prefix="photos")
    credential = make_credential()

    store = build_credential_store(settings, probe=_probe_never_called)
    store.store_token("alice", credential)

    assert settings.db_path.exists()
    assert store.key_for("alice") == "photos_alice"
    assert store.retrieve_token("alice") == credential


def test_embedded_backend_applies_encryption_and_expiry_settings(
    tmp_path, database, make_credential
) -> None:
    store = build_credential_store(
        _settings(
            tmp_path,
            backend="embedded",
            encryption_secret="at-rest",
            kv_enforce_expiry=True,
        ),
        database=database,
    )

    store.store_token("alice", make_credential(expires_in=-timedelta(minutes=1)))

    assert not database.get("credential_alice").startswith(b"{")
    with pytest.raises(InvalidCredentialError):
        store.retrieve_token("alice")


def test_cipher_service_only_built_with_secret(tmp_path) -> None:
    assert get_token_cipher_service(_settings(tmp_path)) is None
    assert get_token_cipher_service(_settings(tmp_path, encryption_secret="s")) is not None
