"""
auth/tokens.py -- Compact JWT signing and unverified claim reading.

Security design decisions:
  JWT: python-jose with HS256. The header is always {"alg": "HS256",
       "typ": "JWT"}. The payload is the caller's claim set merged with
       iss/aud (both "workwareplus.com"), exp, and iat/nbf set to the issuance
       instant -- the same standard fields the production issuer emits.
       Standard fields win over same-named caller claims.

  Keys: raw bytes, chosen by the caller per token purpose. This module never
       picks a key itself; the purpose -> key mapping lives in auth/issuer.py.
       An empty key is refused with SigningError rather than producing a token
       any HS256 verifier with an empty secret would accept.

  Expiry: exp = now + expiry_minutes. Negative minutes are allowed and produce
       an already-expired token, which the refresh-flow tests need.

  Reading: read_claims()/read_header() decode WITHOUT verifying the signature.
       They exist so tests can lift SessionValidationToken out of a token the
       real service issued. Never use them to make an authorization decision.

Layer rule: no imports from main.py. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping

from jose import jwt
from jose.exceptions import JOSEError

from core.errors import SigningError, TokenFormatError
from core.models import ALGORITHM, AUDIENCE, ISSUER

logger = logging.getLogger("wwtokens.auth")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------


class TokenSigner:
    """Serialize a claim set plus the standard fields into a signed compact JWT.

    The clock is injectable so tests can pin the issuance instant and compare
    whole token strings.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock

    def create_token(self, claims: Mapping[str, str], key: bytes, expiry_minutes: int) -> str:
        """Return header.payload.signature for `claims`, signed with `key`.

        Raises SigningError if the key is empty or the backend cannot
        serialize or sign the payload. No partial token is ever returned.
        """
        if not key:
            raise SigningError("Signing key is empty")

        issued_at = self._clock()
        expires = issued_at + timedelta(minutes=expiry_minutes)
        payload: dict = dict(claims)
        payload.update(
            {
                "iss": ISSUER,
                "aud": AUDIENCE,
                "exp": expires,
                "iat": issued_at,
                "nbf": issued_at,
            }
        )
        try:
            token = jwt.encode(payload, key, algorithm=ALGORITHM)
        except (JOSEError, TypeError, ValueError) as exc:
            raise SigningError(f"Could not sign token: {exc}") from exc
        logger.debug("Signed token with %d claims, expires %s", len(payload), expires.isoformat())
        return token


# ---------------------------------------------------------------------------
# Unverified reading
# ---------------------------------------------------------------------------


def read_claims(token: str) -> dict:
    """Return the payload of a compact JWT without checking its signature."""
    try:
        return jwt.get_unverified_claims(token)
    except JOSEError as exc:
        raise TokenFormatError(f"Not a readable JWT: {exc}") from exc


def read_header(token: str) -> dict:
    """Return the JOSE header of a compact JWT without checking its signature."""
    try:
        return jwt.get_unverified_header(token)
    except JOSEError as exc:
        raise TokenFormatError(f"Not a readable JWT: {exc}") from exc
