"""
Capability checks used to decide whether the OS keyring can hold credentials.

The probe is a pure query: it never builds a store and its answer does not
depend on anything the stores do.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Keychain and Credential Manager need no session to be reachable.
NATIVE_KEYRING_PLATFORMS = ("darwin", "win32")
# Freedesktop platforms expose the Secret Service over the D-Bus session bus.
SESSION_KEYRING_PLATFORMS = ("linux", "freebsd", "openbsd", "netbsd")


def _is_session_platform(platform: str) -> bool:
    return platform.startswith(SESSION_KEYRING_PLATFORMS)


def secret_service_reachable() -> bool:
    """Return True when a Secret Service provider answers on the session bus."""
    # secretstorage is only installed on freedesktop platforms.
    import secretstorage
    from jeepney.wrappers import DBusErrorResponse
    from secretstorage.exceptions import SecretStorageException

    try:
        connection = secretstorage.dbus_init()
    except (SecretStorageException, OSError) as exc:
        logger.info("No D-Bus session bus available: %s", exc)
        return False
    try:
        return bool(secretstorage.check_service_availability(connection))
    except (SecretStorageException, DBusErrorResponse, OSError) as exc:
        logger.info("Secret Service availability check failed: %s", exc)
        return False
    finally:
        connection.close()


def keyring_supported(
    platform: Optional[str] = None,
    session_check: Optional[Callable[[], bool]] = None,
) -> bool:
    """Report whether the OS secret store is usable on this host.

    ``platform`` defaults to ``sys.platform``; ``session_check`` defaults to a
    live Secret Service probe and is only consulted on freedesktop platforms.
    """
    name = platform or sys.platform
    if name in NATIVE_KEYRING_PLATFORMS:
        logger.info("Keyring is supported", extra={"platform": name})
        return True

    if not _is_session_platform(name):
        logger.info("Keyring is not supported on this platform", extra={"platform": name})
        return False

    check = session_check or secret_service_reachable
    if not check():
        logger.info("No Secret Service support", extra={"platform": name})
        return False
    logger.info("Keyring is supported", extra={"platform": name})
    return True


__all__ = [
    "NATIVE_KEYRING_PLATFORMS",
    "SESSION_KEYRING_PLATFORMS",
    "keyring_supported",
    "secret_service_reachable",
]
