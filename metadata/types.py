"""Structured track and tag types for playlist output."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from fractions import Fraction
from typing import Any, Mapping

from config.settings import is_tag_enabled


@dataclass(frozen=True)
class Tag:
    """Metadata bundle attached to one playlist track."""

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    album_artist: str | None = None
    composer: str | None = None
    performer: str | None = None
    track: str | None = None
    genre: str | None = None
    date: str | None = None
    comment: str | None = None
    isrc: str | None = None

    @classmethod
    def from_fields(cls, values: Mapping[str, Any]) -> "Tag":
        """Build a tag from loose field values.

        Unknown keys, empty values and tag types disabled through
        ``EMBCUE_METADATA_TO_USE`` are dropped.
        """
        kwargs: dict[str, str] = {}
        for tag_field in fields(cls):
            name = tag_field.name
            if not is_tag_enabled(name):
                continue
            value = _optional_str(values.get(name))
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def track_number(self) -> int | None:
        """Numeric value of the verbatim ``track`` token, if it has one."""
        if not self.track:
            return None
        head = self.track.split("/", 1)[0].strip()
        try:
            return int(head)
        except ValueError:
            return None

    def is_empty(self) -> bool:
        return all(getattr(self, tag_field.name) is None for tag_field in fields(self))


@dataclass(frozen=True)
class Song:
    """One logical track: a URI, its tag and its offsets within that URI.

    Offsets are exact seconds (``Fraction``) since cue sheet frames are
    1/75 s and do not round-trip through floats.
    """

    uri: str
    tag: Tag = field(default_factory=Tag)
    start: Fraction = Fraction(0)
    end: Fraction | None = None

    def replace_uri(self, uri: str) -> "Song":
        return replace(self, uri=uri)

    @property
    def start_ms(self) -> int:
        return round(self.start * 1000)

    @property
    def end_ms(self) -> int | None:
        if self.end is None:
            return None
        return round(self.end * 1000)

    @property
    def duration(self) -> Fraction | None:
        if self.end is None:
            return None
        return self.end - self.start


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


__all__ = ["Song", "Tag"]
