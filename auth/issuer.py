"""
auth/issuer.py -- TokenIssuer, the facade test code talks to.

Holds the three signing keys for its whole lifetime and nothing else mutable.
Each generate_* call builds the purpose's claims and signs them with that
purpose's key; there is no path that signs one purpose's claims with another
purpose's key.

Configuration is explicit: pass the keys to the constructor, or a Settings
instance to from_settings(). Nothing here reads the process environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from auth.claims import ClaimsBuilder
from auth.entropy import RefreshTokenGenerator
from auth.tokens import TokenSigner
from core.errors import ConfigurationError
from core.models import DEFAULT_EXPIRY_MINUTES, DEFAULT_LOCATION, ClaimSet, SigningKeys, TokenPurpose

if TYPE_CHECKING:
    from core.config import Settings

logger = logging.getLogger("wwtokens.auth")

KeyInput = Union[str, bytes, None]


def _as_key_bytes(name: str, key: KeyInput) -> bytes:
    if key is None or len(key) == 0:
        raise ConfigurationError(f"{name} signing key is missing or empty")
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


class TokenIssuer:
    def __init__(
        self,
        activation_key: KeyInput,
        reset_password_key: KeyInput,
        access_key: KeyInput,
        *,
        claims_builder: Optional[ClaimsBuilder] = None,
        signer: Optional[TokenSigner] = None,
        refresh_tokens: Optional[RefreshTokenGenerator] = None,
    ) -> None:
        """Validate and take ownership of the three signing keys.

        String keys are UTF-8 encoded, matching how the service turns its
        configured key strings into HMAC secrets. Raises ConfigurationError if
        any key is missing or empty; no issuer is built with a partial key set.
        """
        self._keys = SigningKeys(
            activation=_as_key_bytes("Activation", activation_key),
            reset_password=_as_key_bytes("Reset-password", reset_password_key),
            access=_as_key_bytes("Access", access_key),
        )
        self._claims = claims_builder or ClaimsBuilder()
        self._signer = signer or TokenSigner()
        self._refresh_tokens = refresh_tokens or RefreshTokenGenerator()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> TokenIssuer:
        return cls(
            settings.jwt_activation_key,
            settings.jwt_reset_password_key,
            settings.jwt_security_key,
            **kwargs,
        )

    def _sign(self, purpose: TokenPurpose, claims: ClaimSet, expiry_minutes: int) -> str:
        token = self._signer.create_token(claims, self._keys.key_for(purpose), expiry_minutes)
        logger.debug("Issued %s token (expiry %+d min)", purpose.value, expiry_minutes)
        return token

    def generate_activation_token(
        self,
        client_identifier: str,
        staff_member_id: int,
        email: str,
        security_stamp: str,
        expiry_minutes: int = DEFAULT_EXPIRY_MINUTES[TokenPurpose.ACTIVATION],
    ) -> str:
        """Token for the /activateaccount/{token} link sent to new users.

        Args:
            client_identifier: Client site identifier (e.g. "ww7client").
            staff_member_id:   Staff member ID; embedded as a string.
            email:             User's email address, used as the name claim.
            security_stamp:    User's SecurityStamp from the database. Hashed
                               with a fresh salt before embedding.
            expiry_minutes:    Minutes from now until exp (default 24 hours).
        """
        claims = self._claims.build_activation_claims(client_identifier, staff_member_id, email, security_stamp)
        return self._sign(TokenPurpose.ACTIVATION, claims, expiry_minutes)

    def generate_reset_password_token(
        self,
        client_identifier: str,
        staff_member_id: int,
        username: str,
        security_stamp: str,
        expiry_minutes: int = DEFAULT_EXPIRY_MINUTES[TokenPurpose.RESET_PASSWORD],
    ) -> str:
        """Token for the /resetpassword/{token} link. Same shape as activation, keyed on username."""
        claims = self._claims.build_reset_password_claims(client_identifier, staff_member_id, username, security_stamp)
        return self._sign(TokenPurpose.RESET_PASSWORD, claims, expiry_minutes)

    def generate_access_token(
        self,
        username: str,
        staff_member_id: int,
        client_identifier: str,
        location: str = DEFAULT_LOCATION,
        session_validation_token: Optional[str] = None,
        expiry_minutes: int = DEFAULT_EXPIRY_MINUTES[TokenPurpose.ACCESS],
    ) -> str:
        """Bearer token for API calls.

        Args:
            username:                 Username, used as the name claim.
            staff_member_id:          Staff member ID; embedded as a string.
            client_identifier:        Client site identifier.
            location:                 Timezone name for StaffMemberLocation.
            session_validation_token: Reuse a real session's value; a random
                                      UUID is generated when omitted.
            expiry_minutes:           Minutes from now until exp (default 30).
                                      Negative values give an already-expired
                                      token, e.g. -5 expired five minutes ago.
        """
        claims = self._claims.build_access_claims(
            username,
            staff_member_id,
            client_identifier,
            location=location,
            session_validation_token=session_validation_token,
        )
        return self._sign(TokenPurpose.ACCESS, claims, expiry_minutes)

    def generate_refresh_token(self) -> str:
        """Bare refresh token (44 base64 chars), not wrapped in a JWT."""
        return self._refresh_tokens.generate()
