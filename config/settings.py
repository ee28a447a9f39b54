"""Application settings constants."""

from __future__ import annotations

import os

# Protocol name the embedded cue playlist plugin registers under.
EMBCUE_PLUGIN_NAME = "cue"

# A few codecs known to carry CUESHEET tags; there are probably many more.
EMBCUE_SUFFIXES = (
    "flac",
    "mp3",
    "mp2",
    "mp4",
    "mp4a",
    "m4b",
    "ape",
    "wv",
    "ogg",
    "oga",
)

# Tag field holding the embedded cue sheet (compared case-insensitively).
CUESHEET_TAG_NAME = "cuesheet"

# Red Book audio frames per second used by cue sheet timestamps.
CUE_FRAMES_PER_SECOND = 75

ALL_TAG_TYPES = (
    "title",
    "artist",
    "album",
    "album_artist",
    "composer",
    "performer",
    "track",
    "genre",
    "date",
    "comment",
    "isrc",
)


def _parse_tag_types(raw: str | None) -> frozenset[str]:
    text = (raw or "").strip()
    if not text:
        return frozenset(ALL_TAG_TYPES)
    requested = {part.strip().lower() for part in text.split(",") if part.strip()}
    return frozenset(name for name in ALL_TAG_TYPES if name in requested)


ENABLED_TAG_TYPES = _parse_tag_types(os.environ.get("EMBCUE_METADATA_TO_USE"))

LOG_LEVEL = (os.environ.get("EMBCUE_LOG_LEVEL") or "INFO").strip().upper()


def is_tag_enabled(tag_type: str) -> bool:
    return str(tag_type).lower() in ENABLED_TAG_TYPES
