"""
lastfm-scrobble: authenticate from environment variables, then print the
session key or submit a single now-playing / scrobble.

    LASTFM_API_KEY=... LASTFM_API_SECRET=... LASTFM_USERNAME=... LASTFM_PASSWORD=... \
        lastfm-scrobble session
    lastfm-scrobble scrobble "Los Campesinos!" "The Time Before the Last" --album "No Blues"
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Mapping, Sequence

from .config import Settings, configure_logging
from .errors import ScrobbleError
from .models import Scrobble
from .scrobbler import Scrobbler
from .transport import Transport

log = logging.getLogger("lastfm-scrobble")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lastfm-scrobble", description="Last.fm scrobble client")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("session", help="authenticate and print the session key")

    for name, help_text in (("now-playing", "send a now-playing update"),
                            ("scrobble", "scrobble a track")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("artist")
        p.add_argument("track")
        p.add_argument("--album", default="")
        if name == "scrobble":
            p.add_argument("--timestamp", type=int, default=None,
                           help="unix start time (default: now)")
    return parser


def main(argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None,
         transport: Transport | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env(env)
        configure_logging(settings.log_level)
        scrobbler = Scrobbler.from_settings(settings, transport=transport)

        if args.command == "session":
            print(scrobbler.session_key())
            return 0

        track = Scrobble(artist=args.artist, track=args.track, album=args.album)
        if args.command == "now-playing":
            scrobbler.now_playing(track)
            log.info("Now playing: %s - %s", track.artist, track.track)
        else:
            if args.timestamp is not None:
                track.with_timestamp(args.timestamp)
            scrobbler.scrobble(track)
            log.info("Scrobbled: %s - %s%s", track.artist, track.track,
                     f" [{track.album}]" if track.album else "")
    except ScrobbleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
