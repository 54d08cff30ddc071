"""Test configuration and fixtures"""

import json

import pytest

from lastfm_scrobble.scrobbler import Scrobbler
from lastfm_scrobble.transport import TransportResponse

SESSION_BODY = json.dumps({"session": {"name": "u", "key": "sk-123", "subscriber": 0}})

NOW_PLAYING_BODY = json.dumps({
    "nowplaying": {
        "artist": {"corrected": "0", "#text": "Los Campesinos!"},
        "track": {"corrected": "0", "#text": "As Lucerne / The Low"},
        "album": {"corrected": "0", "#text": "No Blues"},
        "albumArtist": {"corrected": "0", "#text": ""},
        "ignoredMessage": {"code": "0", "#text": ""},
    }
})

SCROBBLE_BODY = json.dumps({
    "scrobbles": {
        "scrobble": {
            "artist": {"corrected": "0", "#text": "Los Campesinos!"},
            "track": {"corrected": "1", "#text": "The Time Before the Last"},
            "album": {"corrected": "0", "#text": "No Blues"},
            "albumArtist": {"corrected": "0", "#text": ""},
            "timestamp": "1500000000",
        },
        "@attr": {"accepted": 1, "ignored": 0},
    }
})


class FakeTransport:
    """Records every POST and answers from a queue of (status, body) pairs."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, status, body):
        self.responses.append((status, body))

    def post(self, url, data):
        self.calls.append((url, dict(data)))
        status, body = self.responses.pop(0)
        if isinstance(body, Exception):
            def read_body():
                raise body
        else:
            def read_body():
                return body
        return TransportResponse(status=status, read_body=read_body)

    @property
    def last_body(self):
        return self.calls[-1][1]


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def scrobbler(transport):
    return Scrobbler("key", "secret", transport=transport, clock=lambda: 1700000000.5)


@pytest.fixture
def authed_scrobbler(scrobbler):
    scrobbler.authenticate_with_session_key("sk-123")
    return scrobbler
