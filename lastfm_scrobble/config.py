"""
Environment-driven settings for the command-line entry point.

The library itself never reads the environment; embedding applications pass
keys and credentials programmatically. Settings.from_env() exists for the
``lastfm-scrobble`` command and for apps that want the same variables.

Env:
- LASTFM_API_KEY / LASTFM_API_SECRET (required)
- LASTFM_SESSION_KEY, or LASTFM_USERNAME + LASTFM_PASSWORD, or LASTFM_TOKEN
- LASTFM_API_URL (default https://ws.audioscrobbler.com/2.0/?format=json)
- LASTFM_TIMEOUT (seconds, default 30)
- LOG_LEVEL (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from .client import API_URL
from .errors import (
    ConfigError, IncompleteUserCredentials, InvalidClientCredentials, MissingIdentity,
)
from .transport import DEFAULT_TIMEOUT

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class Settings:
    api_key: str | None = None
    api_secret: str | None = None
    session_key: str | None = None
    username: str | None = None
    password: str | None = None
    token: str | None = None
    api_url: str = API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            api_key=env.get("LASTFM_API_KEY") or None,
            api_secret=env.get("LASTFM_API_SECRET") or None,
            session_key=env.get("LASTFM_SESSION_KEY") or None,
            username=env.get("LASTFM_USERNAME") or None,
            password=env.get("LASTFM_PASSWORD") or None,
            token=env.get("LASTFM_TOKEN") or None,
            api_url=env.get("LASTFM_API_URL") or API_URL,
            timeout=_timeout(env.get("LASTFM_TIMEOUT")),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    def validate(self) -> None:
        """Fail early with a clear error instead of on the first request."""
        if not self.api_key or not self.api_secret:
            raise InvalidClientCredentials("LASTFM_API_KEY and LASTFM_API_SECRET are required")
        if self.session_key or self.token or (self.username and self.password):
            return
        if self.username or self.password:
            raise IncompleteUserCredentials("LASTFM_USERNAME and LASTFM_PASSWORD must both be set")
        raise MissingIdentity(
            "Provide LASTFM_SESSION_KEY, LASTFM_USERNAME + LASTFM_PASSWORD, or LASTFM_TOKEN")


def _timeout(value: str | None) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigError(f"LASTFM_TIMEOUT must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigError(f"LASTFM_TIMEOUT must be positive, got {value!r}")
    return timeout


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,  # ensure our config is used even if libs pre-configure logging
    )
