"""Pytest configuration shared across the suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterator

import pytest

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - rootdir-relative import
    import _bootstrap  # type: ignore # noqa: F401

from keyring.errors import KeyringError, PasswordSetError

from credstore.clients import EmbeddedDatabase
from credstore.models.credential import Credential


class FakeKeyring:
    """In-memory stand-in for an OS keyring backend."""

    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], str] = {}
        self.fail_writes = False
        self.fail_reads = False

    def set_password(self, service: str, username: str, password: str) -> None:
        if self.fail_writes:
            raise PasswordSetError("keyring is locked")
        self.secrets[(service, username)] = password

    def get_password(self, service: str, username: str) -> str | None:
        if self.fail_reads:
            raise KeyringError("keyring is locked")
        return self.secrets.get((service, username))


@pytest.fixture
def fake_keyring() -> FakeKeyring:
    return FakeKeyring()


@pytest.fixture
def database(tmp_path: Path) -> Iterator[EmbeddedDatabase]:
    db = EmbeddedDatabase(tmp_path / "credentials.db")
    yield db
    db.close()


@pytest.fixture
def make_credential() -> Callable[..., Credential]:
    def _make(
        access_token: str = "access-token",
        *,
        refresh_token: str | None = "refresh-token",
        expires_in: timedelta = timedelta(hours=1),
    ) -> Credential:
        return Credential(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry=datetime.now(timezone.utc) + expires_in,
        )

    return _make
