from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# track.scrobble accepts at most 50 tracks per request
MAX_BATCH_SIZE = 50


@dataclass
class Scrobble:
    """A single track play: what was played and (optionally) when it started."""

    artist: str
    track: str
    album: str = ""
    timestamp: int | None = None  # unix seconds

    def with_timestamp(self, timestamp: int) -> "Scrobble":
        self.timestamp = int(timestamp)
        return self

    def as_map(self) -> dict[str, str]:
        params = {"artist": self.artist, "track": self.track, "album": self.album}
        if self.timestamp is not None:
            params["timestamp"] = str(self.timestamp)
        return params


ScrobbleBatch = Iterable[Scrobble]
