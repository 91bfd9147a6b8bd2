"""
auth/claims.py -- Claim sets for the three token purposes.

No field validation happens here. Empty strings and zero ids are embedded
exactly as given; tests that probe the service's own input handling depend
on being able to mint such tokens.

Randomness is injected: the stamp hasher draws salts, and the session token
factory supplies SessionValidationToken when the caller leaves it out.
"""

from __future__ import annotations

from typing import Callable, Optional

from auth.entropy import new_session_validation_token
from auth.stamps import SecurityStampHasher
from core.models import (
    CLIENT_IDENTIFIER_CLAIM,
    DEFAULT_LOCATION,
    NAME_CLAIM,
    SECURITY_STAMP_CLAIM,
    SESSION_VALIDATION_TOKEN_CLAIM,
    STAFF_MEMBER_ID_CLAIM,
    STAFF_MEMBER_LOCATION_CLAIM,
    ClaimSet,
)


class ClaimsBuilder:
    def __init__(
        self,
        stamp_hasher: Optional[SecurityStampHasher] = None,
        session_token_factory: Callable[[], str] = new_session_validation_token,
    ) -> None:
        self._stamp_hasher = stamp_hasher or SecurityStampHasher()
        self._session_token_factory = session_token_factory

    def _stamped_claims(self, name: str, client_identifier: str, staff_member_id: int, security_stamp: str) -> ClaimSet:
        return {
            NAME_CLAIM: name,
            CLIENT_IDENTIFIER_CLAIM: client_identifier,
            STAFF_MEMBER_ID_CLAIM: str(staff_member_id),
            SECURITY_STAMP_CLAIM: self._stamp_hasher.hash(security_stamp),
        }

    def build_activation_claims(
        self, client_identifier: str, staff_member_id: int, email: str, security_stamp: str
    ) -> ClaimSet:
        """Claims for an account-activation link. The name claim is the email address."""
        return self._stamped_claims(email, client_identifier, staff_member_id, security_stamp)

    def build_reset_password_claims(
        self, client_identifier: str, staff_member_id: int, username: str, security_stamp: str
    ) -> ClaimSet:
        """Claims for a password-reset link. The name claim is the username."""
        return self._stamped_claims(username, client_identifier, staff_member_id, security_stamp)

    def build_access_claims(
        self,
        username: str,
        staff_member_id: int,
        client_identifier: str,
        location: str = DEFAULT_LOCATION,
        session_validation_token: Optional[str] = None,
    ) -> ClaimSet:
        """Claims for an API access token.

        Pass session_validation_token to reuse the value from a real login
        (the refresh endpoint checks it against the stored session); leave it
        out to get a fresh random one.
        """
        if session_validation_token is None:
            session_validation_token = self._session_token_factory()
        return {
            NAME_CLAIM: username,
            CLIENT_IDENTIFIER_CLAIM: client_identifier,
            STAFF_MEMBER_ID_CLAIM: str(staff_member_id),
            STAFF_MEMBER_LOCATION_CLAIM: location,
            SESSION_VALIDATION_TOKEN_CLAIM: session_validation_token,
        }
