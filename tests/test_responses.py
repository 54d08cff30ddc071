"""Tests for response decoding."""

import json

import pytest

from lastfm_scrobble.errors import ApiError, ResponseDecodeError
from lastfm_scrobble.responses import (
    BatchScrobbleResponse, CorrectableString, NowPlayingResponse,
    ScrobbleResponse, SessionResponse, decode_json, parse_error_body,
)

from .conftest import NOW_PLAYING_BODY, SCROBBLE_BODY, SESSION_BODY


class TestDecodeJson:
    def test_invalid_json(self):
        with pytest.raises(ResponseDecodeError):
            decode_json("not json")

    def test_non_object(self):
        with pytest.raises(ResponseDecodeError):
            decode_json("[1, 2]")

    def test_error_document(self):
        with pytest.raises(ApiError) as exc:
            decode_json(json.dumps({"error": 29, "message": "Rate limit exceeded"}))
        assert exc.value.code == 29
        assert exc.value.is_rate_limited is True

    def test_parse_error_body(self):
        assert parse_error_body('{"error": 9, "message": "Invalid session key"}') == (9, "Invalid session key")
        assert parse_error_body("<html>") == (None, None)
        assert parse_error_body('{"session": {}}') == (None, None)


class TestSessionResponse:
    def test_decode(self):
        session = SessionResponse.from_body(SESSION_BODY)
        assert session == SessionResponse(key="sk-123", name="u", subscriber=0)

    def test_empty_key_rejected(self):
        with pytest.raises(ResponseDecodeError):
            SessionResponse.from_body(json.dumps({"session": {"key": ""}}))

    def test_missing_session(self):
        with pytest.raises(ResponseDecodeError):
            SessionResponse.from_body("{}")


class TestCorrectableString:
    def test_flags(self):
        assert CorrectableString.from_json({"corrected": "1", "#text": "x"}).corrected is True
        assert CorrectableString.from_json({"corrected": "0", "#text": "x"}).corrected is False

    def test_unexpected_flag(self):
        with pytest.raises(ResponseDecodeError):
            CorrectableString.from_json({"corrected": "maybe", "#text": "x"})

    def test_missing_text_defaults_empty(self):
        assert str(CorrectableString.from_json({"corrected": "0"})) == ""


class TestTrackResponses:
    def test_now_playing(self):
        resp = NowPlayingResponse.from_body(NOW_PLAYING_BODY)
        assert str(resp.artist) == "Los Campesinos!"
        assert str(resp.album) == "No Blues"
        assert str(resp.album_artist) == ""

    def test_scrobble(self):
        resp = ScrobbleResponse.from_body(SCROBBLE_BODY)
        assert str(resp.track) == "The Time Before the Last"
        assert resp.track.corrected is True

    def test_batch_of_one_is_an_object(self):
        resp = BatchScrobbleResponse.from_body(SCROBBLE_BODY)
        assert len(resp.scrobbles) == 1
        assert resp.accepted == 1
        assert resp.ignored == 0

    def test_batch_without_attr(self):
        resp = BatchScrobbleResponse.from_body(json.dumps({"scrobbles": {"scrobble": []}}))
        assert resp.scrobbles == []
        assert resp.accepted == 0

    def test_batch_with_malformed_attr(self):
        with pytest.raises(ResponseDecodeError, match="@attr"):
            BatchScrobbleResponse.from_body(json.dumps({"scrobbles": {"scrobble": [], "@attr": "x"}}))
