"""
core/errors.py -- Error hierarchy for credential fabrication.

Every failure is deterministic and fatal for the call that hit it: a missing
key stays missing, a broken entropy source stays broken. Nothing in this
package retries. Callers that want a single catch point use TokenHarnessError.

Layer rule: core/ is the kernel. This module may not import from auth/.
"""


class TokenHarnessError(Exception):
    """Base class for every error raised while issuing test credentials."""


class ConfigurationError(TokenHarnessError):
    """A required signing key is missing or empty. Raised at construction."""


class SigningError(TokenHarnessError):
    """The signing backend rejected the key or the claim set."""


class RandomnessError(TokenHarnessError):
    """The secure random source is unavailable or returned short output."""


class TokenFormatError(TokenHarnessError):
    """A token string could not be split and decoded into header and claims."""
