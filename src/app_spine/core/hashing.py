"""
Hashing helpers for telemetry.

Host names identify where errors come from and help with rate limiting, but
they may be personal data, so only their SHA-256 digest ever leaves the
machine.

Examples:
    >>> len(hash_string("laptop.local"))
    64
    >>> hash_string("a") == hash_string("a")
    True

Tags:
    hashing, telemetry, privacy, app-spine
"""

import hashlib
import socket

UNKNOWN_HOSTNAME = "unknown"


def hash_string(value: str) -> str:
    """SHA-256 hex digest of ``value``."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def get_hostname() -> str:
    """Hashed host name, or ``"unknown"`` when it cannot be read."""
    try:
        hostname = socket.gethostname()
    except OSError:
        return UNKNOWN_HOSTNAME
    if not hostname:
        return UNKNOWN_HOSTNAME
    return hash_string(hostname)
