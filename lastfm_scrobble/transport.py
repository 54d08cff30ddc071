"""
HTTP transport: one form-encoded POST in, status + body out.

The dispatcher only depends on the Transport protocol, so tests (or callers
with their own HTTP stack) can pass anything with a matching ``post``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

import requests

from .errors import TransportError

log = logging.getLogger("lastfm.transport")

DEFAULT_TIMEOUT = 30
USER_AGENT = "lastfm-scrobble/0.1"


@dataclass
class TransportResponse:
    status: int
    read_body: Callable[[], str]

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    def post(self, url: str, data: Mapping[str, str]) -> TransportResponse: ...


class RequestsTransport:
    """Transport backed by a requests.Session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None,
                 user_agent: str = USER_AGENT):
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = user_agent
        self.session = session

    def post(self, url: str, data: Mapping[str, str]) -> TransportResponse:
        try:
            resp = self.session.post(url, data=dict(data), timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(str(e)) from e
        log.debug("POST %s -> %s", url, resp.status_code)
        return TransportResponse(status=resp.status_code, read_body=lambda: resp.text)

    def close(self) -> None:
        self.session.close()
