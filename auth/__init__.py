"""auth/ -- Credential fabrication for the Workware test harness.

Layer rule: auth/ imports only stdlib, third-party libraries, and core/.
It never reads the process environment; keys arrive through TokenIssuer.
main.py imports from auth/, not the other way around.
"""

from auth.entropy import RefreshTokenGenerator
from auth.issuer import TokenIssuer
from auth.stamps import SecurityStampHasher

__all__ = ["RefreshTokenGenerator", "SecurityStampHasher", "TokenIssuer"]
