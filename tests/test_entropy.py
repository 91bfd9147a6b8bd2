"""Unit tests for auth/entropy.py.

Covers:
- Refresh token length, alphabet, and storage-column fit
- No collisions across 10,000 consecutive refresh tokens
- Injected random sources are used as-is
- Broken or short random sources surface RandomnessError
- Session validation tokens are UUID strings
"""

import base64
import re
import uuid

import pytest

from auth.entropy import (
    REFRESH_TOKEN_MAX_LENGTH,
    RefreshTokenGenerator,
    new_session_validation_token,
    secure_random_bytes,
)
from core.errors import RandomnessError

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")


class TestRefreshTokenGenerator:
    def test_token_is_44_base64_chars(self):
        token = RefreshTokenGenerator().generate()
        assert len(token) == 44
        assert _BASE64_RE.match(token)

    def test_token_decodes_to_32_bytes(self):
        token = RefreshTokenGenerator().generate()
        assert len(base64.b64decode(token)) == 32

    def test_token_fits_storage_column(self):
        assert len(RefreshTokenGenerator().generate()) <= REFRESH_TOKEN_MAX_LENGTH

    def test_no_collisions_over_10000_calls(self):
        gen = RefreshTokenGenerator()
        tokens = {gen.generate() for _ in range(10_000)}
        assert len(tokens) == 10_000

    def test_uses_injected_source(self):
        gen = RefreshTokenGenerator(random_bytes=lambda n: b"\x00" * n)
        assert gen.generate() == "A" * 43 + "="

    def test_short_source_raises(self):
        gen = RefreshTokenGenerator(random_bytes=lambda n: b"\x00" * (n - 1))
        with pytest.raises(RandomnessError):
            gen.generate()

    def test_failing_source_raises_randomness_error(self):
        def _broken(n):
            raise OSError("no entropy")

        gen = RefreshTokenGenerator(random_bytes=_broken)
        with pytest.raises(RandomnessError) as exc_info:
            gen.generate()
        assert isinstance(exc_info.value.__cause__, OSError)


class TestSecureRandomBytes:
    def test_returns_requested_length(self):
        assert len(secure_random_bytes(16)) == 16

    def test_unavailable_os_source_raises(self, monkeypatch):
        def _broken(n):
            raise NotImplementedError

        monkeypatch.setattr("auth.entropy.secrets.token_bytes", _broken)
        with pytest.raises(RandomnessError):
            secure_random_bytes(16)


class TestSessionValidationToken:
    def test_is_uuid4_string(self):
        value = new_session_validation_token()
        assert str(uuid.UUID(value)) == value
        assert uuid.UUID(value).version == 4

    def test_fresh_each_call(self):
        assert new_session_validation_token() != new_session_validation_token()
