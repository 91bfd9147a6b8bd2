"""
tests/conftest.py -- Shared fixtures for the token harness tests.

This module provides:
  - ACTIVATION_KEY / RESET_PASSWORD_KEY / ACCESS_KEY: the container-environment
    keys, one per purpose, all distinct
  - issuer: a TokenIssuer built from those keys with the real random source
  - fixed_clock: a clock pinned to a known instant for reproducible tokens
  - counting_random: a deterministic stand-in for the secure random source
  - clean_env: runs a test in an empty directory with no JWT_* variables set,
    so a developer's own .env or shell exports never leak into config tests

Signature checks use python-jose's jwt.decode() directly. The harness itself
never verifies tokens; the tests do it to prove the external verifier would
accept them.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from auth.issuer import TokenIssuer

ACTIVATION_KEY = "s3cu1tyJwtT0k3nK3ys3cu1tyJwtT0k3C"
RESET_PASSWORD_KEY = "s3cu1tyJwtT0k3nK3ys3cu1tyJwtT0k3D"
ACCESS_KEY = "s3cu1tyJwtT0k3nK3ys3cu1tyJwtT0k3B"

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

_ENV_VARS = (
    "JWT_ACTIVATION_KEY",
    "JWT_RESET_PASSWORD_KEY",
    "JWT_SECURITY_KEY",
    "CLIENT_URL_TEMPLATE",
    "TEST_ENVIRONMENT",
)


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(ACTIVATION_KEY, RESET_PASSWORD_KEY, ACCESS_KEY)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def counting_random() -> Callable[[int], bytes]:
    """Return a source yielding 0x00.., 0x01.., 0x02.. on successive calls."""
    calls = {"n": 0}

    def _source(count: int) -> bytes:
        value = calls["n"] % 256
        calls["n"] += 1
        return bytes([value]) * count

    return _source


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
