from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from .client import API_URL, LastFmClient
from .errors import (
    AuthenticationError, BatchTooLarge, DispatchError, EmptyBatch,
    NotAuthenticated, ResponseError, ScrobbleError, SubmissionError,
)
from .models import MAX_BATCH_SIZE, Scrobble, ScrobbleBatch
from .operations import Operation
from .responses import BatchScrobbleResponse, NowPlayingResponse, ScrobbleResponse, SessionResponse
from .transport import RequestsTransport, Transport

if TYPE_CHECKING:
    from .config import Settings

log = logging.getLogger("lastfm.scrobbler")


class Scrobbler:
    """Authenticate against Last.fm, then submit now-playing and scrobbles.

    Starts unauthenticated. Any of the ``authenticate_with_*`` methods moves
    it to authenticated; setting a new identity (which every password/token
    authentication does first) drops the previous session key.
    """

    def __init__(self, api_key: str, api_secret: str, *, transport: Transport | None = None,
                 api_url: str = API_URL, clock: Callable[[], float] = time.time):
        self.client = LastFmClient(api_key, api_secret, transport=transport, api_url=api_url)
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings", transport: Transport | None = None) -> "Scrobbler":
        """Build a scrobbler from Settings and authenticate with what it carries.

        Preference order: saved session key, then username/password, then token.
        """
        settings.validate()
        if transport is None:
            transport = RequestsTransport(timeout=settings.timeout)
        scrobbler = cls(settings.api_key, settings.api_secret,
                        transport=transport, api_url=settings.api_url)
        if settings.session_key:
            scrobbler.authenticate_with_session_key(settings.session_key)
        elif settings.username and settings.password:
            scrobbler.authenticate_with_password(settings.username, settings.password)
        else:
            scrobbler.authenticate_with_token(settings.token)
        return scrobbler

    # -------- session lifecycle --------
    def authenticate_with_password(self, username: str, password: str) -> SessionResponse:
        self.client.credentials.set_user_credentials(username, password)
        return self._authenticate(Operation.AUTH_MOBILE_SESSION)

    def authenticate_with_token(self, token: str) -> SessionResponse:
        self.client.credentials.set_user_token(token)
        return self._authenticate(Operation.AUTH_WEB_SESSION)

    def authenticate_with_session_key(self, key: str) -> None:
        # Not validated here; a stale key shows up as an error on the next call
        self.client.credentials.set_session_key(key)
        log.info("Using saved Last.fm session key")

    def _authenticate(self, operation: Operation) -> SessionResponse:
        try:
            body = self.client.request_session(operation)
            session = SessionResponse.from_body(body)
        except ScrobbleError as e:
            raise AuthenticationError(e) from e
        self.client.credentials.set_session_key(session.key)
        log.info("Authenticated with Last.fm as %s", session.name or "<unknown>")
        return session

    def session_key(self) -> str | None:
        return self.client.credentials.session_key

    def is_authenticated(self) -> bool:
        return self.client.credentials.is_authenticated()

    # -------- track submissions --------
    def now_playing(self, scrobble: Scrobble) -> NowPlayingResponse:
        body = self._submit("Now playing", Operation.NOW_PLAYING, scrobble.as_map())
        return self._decode("Now playing", NowPlayingResponse.from_body, body)

    def scrobble(self, scrobble: Scrobble) -> ScrobbleResponse:
        body = self._submit("Scrobble", Operation.SCROBBLE, self._timestamped(scrobble))
        return self._decode("Scrobble", ScrobbleResponse.from_body, body)

    def scrobble_batch(self, scrobbles: ScrobbleBatch) -> BatchScrobbleResponse:
        body = self._submit("Batch scrobble", Operation.SCROBBLE, self.batch_params(scrobbles))
        return self._decode("Batch scrobble", BatchScrobbleResponse.from_body, body)

    def batch_params(self, scrobbles: ScrobbleBatch) -> dict[str, str]:
        """Index-suffixed parameters (``artist[0]``, ...) for one batch request."""
        scrobbles = list(scrobbles)
        if len(scrobbles) == 0:
            raise EmptyBatch()
        if len(scrobbles) > MAX_BATCH_SIZE:
            raise BatchTooLarge(len(scrobbles), MAX_BATCH_SIZE)

        params: dict[str, str] = {}
        for i, scrobble in enumerate(scrobbles):
            for key, value in self._timestamped(scrobble).items():
                params[f"{key}[{i}]"] = value
        return params

    def _timestamped(self, scrobble: Scrobble) -> dict[str, str]:
        params = scrobble.as_map()
        params.setdefault("timestamp", str(int(self.clock())))
        return params

    def _submit(self, label: str, operation: Operation, params: dict[str, str]) -> str:
        try:
            return self.client.send_authenticated_request(operation, params)
        except NotAuthenticated:
            raise
        except DispatchError as e:
            raise SubmissionError(label, e) from e

    @staticmethod
    def _decode(label: str, decoder, body: str):
        try:
            return decoder(body)
        except ResponseError as e:
            raise SubmissionError(label, e) from e
