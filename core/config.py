"""
core/config.py -- Harness configuration via pydantic-settings.

The environment variable reads for the token harness happen here and nowhere
else. auth/ never calls os.getenv(); it receives keys as explicit constructor
arguments (see TokenIssuer.from_settings()).

Design patterns used:
  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_activation_key -> JWT_ACTIVATION_KEY). Type coercion is built in.

  No singleton: load_settings() builds a fresh Settings on every call. Parallel
      test workers that point at different environments each hold their own
      instance and never see another worker's overrides.

  @model_validator(mode="after"): Warns about short keys. It does not reject
      them -- the verifier owns the key policy, and the harness has to mirror
      whatever the target environment is configured with. Empty keys are not
      an error here either; TokenIssuer raises ConfigurationError for those
      so that loading settings for an unrelated concern never fails.

Layer rule: core/ is the kernel. This module may not import from auth/.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("wwtokens.config")

# HMAC-SHA256 verifiers on the service side refuse keys under 256 bits.
_MIN_KEY_LENGTH = 32


class Settings(BaseSettings):
    """Harness settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.

    Environment variable name mapping: field names are uppercased automatically.
    E.g. `jwt_security_key` reads from JWT_SECURITY_KEY.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    test_environment: str = "Local"
    # Base URL of a client site; {client_identifier} is substituted per token.
    client_url_template: str = "http://{client_identifier}.localhost"

    # ------------------------------------------------------------------
    # Signing keys (empty string means "not configured")
    # ------------------------------------------------------------------

    jwt_activation_key: str = ""
    jwt_reset_password_key: str = ""
    # Production names the access-token key "JwtSecurityKey".
    jwt_security_key: str = ""

    @model_validator(mode="after")
    def warn_on_short_keys(self) -> "Settings":
        for name in ("jwt_activation_key", "jwt_reset_password_key", "jwt_security_key"):
            value = getattr(self, name)
            if value and len(value.encode("utf-8")) < _MIN_KEY_LENGTH:
                logger.warning(
                    "%s is shorter than %d bytes; the %s verifier may reject tokens signed with it.",
                    name.upper(),
                    _MIN_KEY_LENGTH,
                    self.test_environment,
                )
        return self

    def client_url(self, client_identifier: str) -> str:
        """Return the site root for a client, e.g. http://ww7client.localhost."""
        return self.client_url_template.format(client_identifier=client_identifier).rstrip("/")


def load_settings(env_file: Optional[str | Path] = None) -> Settings:
    """Build Settings from the environment, optionally from a specific env file.

    Pass env_file to read e.g. `.env.staging` instead of the default `.env`.
    Process environment variables still take precedence over file values.
    """
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()
