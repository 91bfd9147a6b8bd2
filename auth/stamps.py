"""
auth/stamps.py -- Salted PBKDF2 hashing of user security stamps.

Activation and reset-password tokens carry a SecurityStamp claim in the form
"{salt_b64}|{hash_b64}":

  salt  16 bytes from the secure random source, fresh on every call
  hash  PBKDF2(HMAC-SHA512, password=stamp as UTF-8, salt, 10,000 iterations,
        32 bytes)

Both halves use standard base64 (with padding), so the whole value matches
^[A-Za-z0-9+/=]+\\|[A-Za-z0-9+/=]+$.

A fresh salt means two hashes of the same stamp never compare equal as
strings. That is the behaviour of the login service we are mirroring, so it
is reproduced as-is; use matches() to check a hash against a stamp.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

from auth.entropy import RandomSource, draw, secure_random_bytes

SALT_BYTES = 16
HASH_BYTES = 32
ITERATIONS = 10_000
_PRF = "sha512"
_SEPARATOR = "|"


def _derive(stamp: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(_PRF, stamp.encode("utf-8"), salt, iterations, dklen=HASH_BYTES)


class SecurityStampHasher:
    def __init__(self, random_bytes: RandomSource = secure_random_bytes, iterations: int = ITERATIONS) -> None:
        self._random_bytes = random_bytes
        self._iterations = iterations

    def hash(self, stamp: str) -> str:
        """Return "{salt_b64}|{hash_b64}" for `stamp` using a new random salt."""
        salt = draw(self._random_bytes, SALT_BYTES)
        derived = _derive(stamp, salt, self._iterations)
        return f"{base64.b64encode(salt).decode('ascii')}{_SEPARATOR}{base64.b64encode(derived).decode('ascii')}"

    def matches(self, stamp: str, stamp_hash: str) -> bool:
        """Return True if `stamp_hash` was derived from `stamp`.

        Malformed hashes (missing separator, bad base64, wrong lengths) return
        False rather than raising -- the caller asked a yes/no question.
        """
        salt_b64, sep, hash_b64 = stamp_hash.partition(_SEPARATOR)
        if not sep:
            return False
        try:
            salt = base64.b64decode(salt_b64, validate=True)
            expected = base64.b64decode(hash_b64, validate=True)
        except (binascii.Error, ValueError):
            return False
        if len(salt) != SALT_BYTES or len(expected) != HASH_BYTES:
            return False
        return hmac.compare_digest(_derive(stamp, salt, self._iterations), expected)
