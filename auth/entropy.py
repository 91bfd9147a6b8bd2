"""
auth/entropy.py -- Secure random source, refresh tokens, session identifiers.

Everything random in the harness flows through secure_random_bytes() or a
caller-supplied replacement with the same signature. Tests inject a
deterministic source; production code never does.

The OS entropy pool is thread-safe, so parallel test workers can share one
RefreshTokenGenerator without locking.
"""

from __future__ import annotations

import base64
import secrets
import uuid
from typing import Callable

from core.errors import RandomnessError

RandomSource = Callable[[int], bytes]

REFRESH_TOKEN_BYTES = 32
# Refresh tokens are stored in an NVARCHAR(64) column server-side.
REFRESH_TOKEN_MAX_LENGTH = 64


def secure_random_bytes(count: int) -> bytes:
    """Return `count` bytes from the OS CSPRNG.

    Raises RandomnessError when the entropy source is unavailable. Not retried:
    a missing /dev/urandom does not come back on the second call.
    """
    try:
        return secrets.token_bytes(count)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessError("Secure random source is unavailable") from exc


def draw(source: RandomSource, count: int) -> bytes:
    """Call `source` and insist on exactly `count` bytes back."""
    try:
        data = source(count)
    except RandomnessError:
        raise
    except (OSError, NotImplementedError) as exc:
        raise RandomnessError("Secure random source is unavailable") from exc
    if not isinstance(data, bytes) or len(data) != count:
        raise RandomnessError(f"Random source did not return {count} bytes")
    return data


def new_session_validation_token() -> str:
    """Return a random UUID4 string, the format the service issues at login."""
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as exc:
        raise RandomnessError("Secure random source is unavailable") from exc


class RefreshTokenGenerator:
    """Opaque session-refresh tokens: 32 random bytes, standard base64 (44 chars)."""

    def __init__(self, random_bytes: RandomSource = secure_random_bytes) -> None:
        self._random_bytes = random_bytes

    def generate(self) -> str:
        raw = draw(self._random_bytes, REFRESH_TOKEN_BYTES)
        return base64.b64encode(raw).decode("ascii")
