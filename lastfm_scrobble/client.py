from __future__ import annotations

import logging
from typing import Mapping

from .credentials import Credentials
from .errors import BodyReadError, NonSuccessStatus, NotAuthenticated
from .operations import Operation
from .responses import parse_error_body
from .transport import RequestsTransport, Transport

log = logging.getLogger("lastfm.client")

API_URL = "https://ws.audioscrobbler.com/2.0/?format=json"


class LastFmClient:
    """Signs and sends Last.fm API requests; returns raw response bodies.

    Each call is one POST: no caching, no retries. JSON decoding is left to
    the caller (see ``responses``).
    """

    def __init__(self, api_key: str, api_secret: str, *, transport: Transport | None = None,
                 api_url: str = API_URL):
        self.credentials = Credentials(api_key, api_secret)
        self.transport = transport or RequestsTransport()
        self.api_url = api_url

    def request_session(self, operation: Operation) -> str:
        """Send an auth.* request built from the stored user identity."""
        params = self.credentials.get_auth_request_params()
        return self.send_request(operation, params)

    def send_authenticated_request(self, operation: Operation, params: Mapping[str, str]) -> str:
        if not self.credentials.is_authenticated():
            raise NotAuthenticated()
        merged = self.credentials.get_request_params()
        merged.update(params)
        return self.send_request(operation, merged)

    def send_request(self, operation: Operation, params: Mapping[str, str]) -> str:
        body = self.build_body(operation, params)
        log.debug("Sending %s (%d params)", operation.method_name, len(body))

        resp = self.transport.post(self.api_url, body)
        if not resp.ok:
            code, message = self._error_details(resp.read_body)
            raise NonSuccessStatus(resp.status, code, message)

        try:
            text = resp.read_body()
        except Exception as e:
            raise BodyReadError(f"Could not read response body: {e}") from e
        log.debug("%s -> HTTP %s", operation.method_name, resp.status)
        return text

    def build_body(self, operation: Operation, params: Mapping[str, str]) -> dict[str, str]:
        """Form body for ``operation``: params plus ``method`` and ``api_sig``."""
        body = dict(params)
        signature = self.credentials.get_signature(operation.method_name, body)
        body["method"] = operation.method_name
        body["api_sig"] = signature
        return body

    @staticmethod
    def _error_details(read_body) -> tuple[int | None, str | None]:
        # Body of an error response is informational only; the status decides
        try:
            text = read_body()
        except Exception as e:
            log.debug("Could not read error response body: %s", e)
            return None, None
        return parse_error_body(text)
