"""
Decoding of Last.fm JSON response bodies into small dataclasses.

Only the fields this client uses are kept. Anything structurally wrong raises
ResponseDecodeError; an ``{"error": N, "message": ...}`` document raises ApiError.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import ApiError, ResponseDecodeError


def parse_error_body(text: str) -> tuple[int | None, str | None]:
    """Extract (code, message) from an error document, or (None, None)."""
    try:
        data = json.loads(text)
    except ValueError:
        return None, None
    if not isinstance(data, dict) or "error" not in data:
        return None, None
    return _to_int(data.get("error")), data.get("message")


def decode_json(body: str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ResponseDecodeError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"Expected a JSON object, got {type(data).__name__}")
    if "error" in data:
        raise ApiError(_to_int(data.get("error")), str(data.get("message", "")))
    return data


def _to_int(v) -> int | None:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ResponseDecodeError(f"Missing or malformed '{key}' object in response")
    return value


# -------------------------
# Auth
# -------------------------
@dataclass(frozen=True)
class SessionResponse:
    key: str
    name: str = ""
    subscriber: int = 0

    @classmethod
    def from_body(cls, body: str) -> "SessionResponse":
        session = _object(decode_json(body), "session")
        key = session.get("key")
        if not isinstance(key, str) or not key:
            raise ResponseDecodeError("Session response has no session key")
        return cls(
            key=key,
            name=str(session.get("name", "")),
            subscriber=_to_int(session.get("subscriber")) or 0,
        )


# -------------------------
# Track submissions
# -------------------------
@dataclass(frozen=True)
class CorrectableString:
    """A field the service may have auto-corrected (e.g. artist spelling)."""

    text: str
    corrected: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "CorrectableString":
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Expected a correctable field, got {data!r}")
        flag = data.get("corrected", "0")
        if flag in ("1", 1):
            corrected = True
        elif flag in ("0", 0):
            corrected = False
        else:
            raise ResponseDecodeError(f"Unexpected 'corrected' value: {flag!r}")
        return cls(text=str(data.get("#text", "")), corrected=corrected)

    def __str__(self) -> str:
        return self.text


def _correctable(data: dict[str, Any], key: str) -> CorrectableString:
    # Absent fields (e.g. no album sent) come back as empty text
    if key not in data:
        return CorrectableString("")
    return CorrectableString.from_json(data[key])


@dataclass(frozen=True)
class NowPlayingResponse:
    artist: CorrectableString
    album: CorrectableString
    album_artist: CorrectableString
    track: CorrectableString

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "NowPlayingResponse":
        return cls(
            artist=_correctable(data, "artist"),
            album=_correctable(data, "album"),
            album_artist=_correctable(data, "albumArtist"),
            track=_correctable(data, "track"),
        )

    @classmethod
    def from_body(cls, body: str) -> "NowPlayingResponse":
        return cls.from_json(_object(decode_json(body), "nowplaying"))


@dataclass(frozen=True)
class ScrobbleResponse:
    artist: CorrectableString
    album: CorrectableString
    album_artist: CorrectableString
    track: CorrectableString
    timestamp: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ScrobbleResponse":
        if not isinstance(data, dict):
            raise ResponseDecodeError(f"Expected a scrobble object, got {data!r}")
        return cls(
            artist=_correctable(data, "artist"),
            album=_correctable(data, "album"),
            album_artist=_correctable(data, "albumArtist"),
            track=_correctable(data, "track"),
            timestamp=str(data.get("timestamp", "")),
        )

    @classmethod
    def from_body(cls, body: str) -> "ScrobbleResponse":
        scrobbles = _object(decode_json(body), "scrobbles")
        entry = scrobbles.get("scrobble")
        if isinstance(entry, list):
            if len(entry) != 1:
                raise ResponseDecodeError(f"Expected one scrobble in response, got {len(entry)}")
            entry = entry[0]
        return cls.from_json(entry)


@dataclass(frozen=True)
class BatchScrobbleResponse:
    scrobbles: list[ScrobbleResponse] = field(default_factory=list)
    accepted: int = 0
    ignored: int = 0

    @classmethod
    def from_body(cls, body: str) -> "BatchScrobbleResponse":
        scrobbles = _object(decode_json(body), "scrobbles")
        entries = scrobbles.get("scrobble", [])
        # A batch of one comes back as a bare object rather than a list
        if isinstance(entries, dict):
            entries = [entries]
        if not isinstance(entries, list):
            raise ResponseDecodeError("Malformed 'scrobble' list in batch response")
        attr = scrobbles.get("@attr") or {}
        if not isinstance(attr, dict):
            raise ResponseDecodeError("Malformed '@attr' object in batch response")
        return cls(
            scrobbles=[ScrobbleResponse.from_json(e) for e in entries],
            accepted=_to_int(attr.get("accepted")) or 0,
            ignored=_to_int(attr.get("ignored")) or 0,
        )
