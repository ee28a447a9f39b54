#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from fractions import Fraction

from config.settings import LOG_LEVEL
from playlist.dispatcher import open_playlist


def _format_offset(value: Fraction | None) -> str:
    if value is None:
        return "--:--.---"
    total_ms = round(value * 1000)
    minutes, rest_ms = divmod(total_ms, 60_000)
    return f"{minutes:02d}:{rest_ms // 1000:02d}.{rest_ms % 1000:03d}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="List the tracks of a file's embedded cue sheet.")
    parser.add_argument("path", help="Audio file carrying a CUESHEET tag")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    path = os.path.abspath(args.path)
    playlist = open_playlist(path)
    if playlist is None:
        print(f"No embedded cue sheet found in {path}", file=sys.stderr)
        return 1

    with playlist:
        for song in playlist:
            tag = song.tag
            artist = tag.artist or "Unknown Artist"
            title = tag.title or "Unknown Title"
            print(
                f"{tag.track or '?':>3} | {_format_offset(song.start)} | "
                f"{_format_offset(song.end)} | {artist} - {title}"
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
