"""
core/models.py -- Token purposes, signing keys, and the wire constants.

The claim names and the issuer/audience string are a contract with an
external verifier we do not control. They are case-sensitive and must match
byte-for-byte; change them only when the production service changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Wire constants
# ---------------------------------------------------------------------------

ISSUER = "workwareplus.com"
AUDIENCE = "workwareplus.com"
ALGORITHM = "HS256"

NAME_CLAIM = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/name"
CLIENT_IDENTIFIER_CLAIM = "ClientIdentifier"
STAFF_MEMBER_ID_CLAIM = "StaffMemberId"
STAFF_MEMBER_LOCATION_CLAIM = "StaffMemberLocation"
SESSION_VALIDATION_TOKEN_CLAIM = "SessionValidationToken"
SECURITY_STAMP_CLAIM = "SecurityStamp"

DEFAULT_LOCATION = "Europe/London"

# Claim name -> value. Insertion order is kept so serialized payloads are stable.
ClaimSet = dict[str, str]


class TokenPurpose(str, Enum):
    ACTIVATION = "activation"
    RESET_PASSWORD = "reset_password"
    ACCESS = "access"


# Minutes from issuance. Activation and reset links live a day, access tokens
# match the production session length.
DEFAULT_EXPIRY_MINUTES: dict[TokenPurpose, int] = {
    TokenPurpose.ACTIVATION: 1440,
    TokenPurpose.RESET_PASSWORD: 1440,
    TokenPurpose.ACCESS: 30,
}


@dataclass(frozen=True)
class SigningKeys:
    """The three HMAC secrets, one per token purpose.

    Keys are raw bytes; the issuer UTF-8 encodes string keys before building
    this record. repr=False keeps secrets out of tracebacks and log lines.
    """

    activation: bytes = field(repr=False)
    reset_password: bytes = field(repr=False)
    access: bytes = field(repr=False)

    def key_for(self, purpose: TokenPurpose) -> bytes:
        if purpose is TokenPurpose.ACTIVATION:
            return self.activation
        if purpose is TokenPurpose.RESET_PASSWORD:
            return self.reset_password
        if purpose is TokenPurpose.ACCESS:
            return self.access
        raise ValueError(f"Unknown token purpose: {purpose!r}")
