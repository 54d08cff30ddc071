from enum import Enum


class Operation(str, Enum):
    """Remote API methods the client knows how to call. Value is the wire name."""

    AUTH_WEB_SESSION = "auth.getSession"
    AUTH_MOBILE_SESSION = "auth.getMobileSession"
    NOW_PLAYING = "track.updateNowPlaying"
    SCROBBLE = "track.scrobble"

    @property
    def method_name(self) -> str:
        return self.value
