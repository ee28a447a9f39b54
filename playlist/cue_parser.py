"""Incremental cue sheet parser.

The parser is fed one line at a time and hands out completed tracks as
``Song`` objects. A track is complete once its end offset is known, which is
when the following track's ``INDEX 01`` arrives, when the following track is
closed without one, or when input ends. The caller must drain ``get()`` after
every ``feed()`` and after ``finish()``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Callable

from config.settings import CUE_FRAMES_PER_SECOND
from metadata.types import Song, Tag

_LOG = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^(\S+)\s*(.*)$")
_TIME_RE = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})$")

# FILE types that never carry audio
_NON_AUDIO_FILE_TYPES = frozenset({"BINARY", "MOTOROLA"})
_REM_FIELDS = {"GENRE": "genre", "DATE": "date", "COMMENT": "comment"}
_IGNORED_DIRECTIVES = frozenset({"CATALOG", "CDTEXTFILE", "FLAGS", "PREGAP", "POSTGAP"})


class CueSyntaxError(ValueError):
    """Raised for a cue sheet directive that cannot be interpreted."""


class ParserState(Enum):
    HEADER = "header"
    WAVE = "wave"
    TRACK = "track"
    IGNORE_TRACK = "ignore_track"
    IGNORE_FILE = "ignore_file"
    FINISHED = "finished"


@dataclass
class _TrackDraft:
    fields: dict[str, str] = field(default_factory=dict)
    start: Fraction = Fraction(0)
    end: Fraction | None = None


def parse_cue_time(text: str) -> Fraction:
    """Convert a ``mm:ss:ff`` position into exact seconds.

    Raises:
        CueSyntaxError: If ``text`` is not a valid position.
    """
    match = _TIME_RE.match(text.strip())
    if match is None:
        raise CueSyntaxError(f"malformed cue position: {text!r}")
    minutes, seconds, frames = (int(group) for group in match.groups())
    if seconds >= 60 or frames >= CUE_FRAMES_PER_SECOND:
        raise CueSyntaxError(f"cue position out of range: {text!r}")
    total_frames = (minutes * 60 + seconds) * CUE_FRAMES_PER_SECOND + frames
    return Fraction(total_frames, CUE_FRAMES_PER_SECOND)


def _unquote(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith('"'):
        return _split_value(stripped)[0]
    if not stripped:
        raise CueSyntaxError("missing value")
    # a bare value runs to the end of the line
    return stripped


def _split_value(text: str) -> tuple[str, str]:
    """Split the leading (possibly quoted) value off ``text``."""
    stripped = text.strip()
    if not stripped:
        raise CueSyntaxError("missing value")
    if stripped.startswith('"'):
        closing = stripped.find('"', 1)
        if closing < 0:
            return stripped[1:], ""
        return stripped[1:closing], stripped[closing + 1:].strip()
    head, _, rest = stripped.partition(" ")
    return head, rest.strip()


class CueParser:
    def __init__(self) -> None:
        self._state = ParserState.HEADER
        self._header: dict[str, str] = {}
        self._filename = ""
        self._current: _TrackDraft | None = None
        self._previous: _TrackDraft | None = None
        self._pending: Song | None = None
        self._seen_track = False
        self._handlers: dict[str, Callable[[str], None]] = {
            "PERFORMER": self._on_performer,
            "TITLE": self._on_title,
            "SONGWRITER": self._on_songwriter,
            "REM": self._on_rem,
            "ISRC": self._on_isrc,
            "FILE": self._on_file,
            "TRACK": self._on_track,
            "INDEX": self._on_index,
        }

    @property
    def state(self) -> ParserState:
        return self._state

    def feed(self, line: str) -> None:
        """Parse one cue sheet line; malformed and unknown lines are skipped."""
        if self._state is ParserState.FINISHED:
            return
        match = _DIRECTIVE_RE.match(line.strip())
        if match is None:
            return
        keyword = match.group(1).upper()
        args = match.group(2)

        handler = self._handlers.get(keyword)
        if handler is None:
            if keyword not in _IGNORED_DIRECTIVES:
                _LOG.debug("cue_line_skipped reason=unknown_directive line=%r", line)
            return
        try:
            handler(args)
        except CueSyntaxError as exc:
            _LOG.debug("cue_line_skipped reason=%s line=%r", exc, line)

    def get(self) -> Song | None:
        """Return the next completed track, if one is waiting."""
        song = self._pending
        if song is not None:
            self._pending = None
            return song
        if self._state is ParserState.FINISHED and self._previous is not None:
            draft = self._previous
            self._previous = None
            return self._build_song(draft)
        return None

    def finish(self) -> None:
        """Signal end of input; the open track is closed as if a new one began."""
        if self._state is ParserState.FINISHED:
            return
        self._close_current()
        self._state = ParserState.FINISHED

    def _commit(self, draft: _TrackDraft) -> None:
        if self._pending is not None:
            _LOG.warning("cue_track_dropped track=%s reason=pending_not_drained", self._pending.tag.track)
        self._pending = self._build_song(draft)

    def _close_current(self) -> None:
        draft = self._current
        self._current = None
        if draft is None or self._state is ParserState.IGNORE_TRACK:
            return
        if self._previous is not None:
            # it never saw a following INDEX 01; its end stays as is
            self._commit(self._previous)
        self._previous = draft

    def _build_song(self, draft: _TrackDraft) -> Song:
        values = dict(self._header)
        values.update(draft.fields)
        return Song(
            uri=self._filename,
            tag=Tag.from_fields(values),
            start=draft.start,
            end=draft.end,
        )

    def _target(self) -> dict[str, str] | None:
        """Field map that sheet/track metadata directives currently write to."""
        if self._state is ParserState.HEADER:
            return self._header
        if self._state is ParserState.TRACK and self._current is not None:
            return self._current.fields
        return None

    def _on_performer(self, args: str) -> None:
        value = _unquote(args)
        if self._state is ParserState.HEADER:
            self._header["album_artist"] = value
            self._header["artist"] = value
            return
        target = self._target()
        if target is not None:
            target["artist"] = value
            target["performer"] = value

    def _on_title(self, args: str) -> None:
        value = _unquote(args)
        if self._state is ParserState.HEADER:
            self._header["album"] = value
            return
        target = self._target()
        if target is not None:
            target["title"] = value

    def _on_songwriter(self, args: str) -> None:
        target = self._target()
        if target is not None:
            target["composer"] = _unquote(args)

    def _on_rem(self, args: str) -> None:
        kind, rest = _split_value(args)
        field_name = _REM_FIELDS.get(kind.upper())
        target = self._target()
        if field_name is None or target is None or not rest:
            return
        target[field_name] = _unquote(rest)

    def _on_isrc(self, args: str) -> None:
        if self._state is ParserState.TRACK and self._current is not None:
            self._current.fields["isrc"] = _unquote(args)

    def _on_file(self, args: str) -> None:
        name, file_type = _split_value(args)
        self._close_current()
        self._filename = name
        if file_type.upper() in _NON_AUDIO_FILE_TYPES:
            self._state = ParserState.IGNORE_FILE
        elif self._seen_track:
            self._state = ParserState.WAVE
        else:
            # sheet-level fields may still follow the FILE line
            self._state = ParserState.HEADER

    def _on_track(self, args: str) -> None:
        parts = args.split()
        if not parts:
            raise CueSyntaxError("TRACK without a number")
        if self._state is ParserState.IGNORE_FILE:
            return
        number = parts[0]
        track_type = parts[1].upper() if len(parts) > 1 else "AUDIO"

        self._close_current()
        self._seen_track = True
        self._current = _TrackDraft(fields={"track": number})
        if track_type == "AUDIO":
            self._state = ParserState.TRACK
        else:
            self._state = ParserState.IGNORE_TRACK

    def _on_index(self, args: str) -> None:
        if self._state is not ParserState.TRACK or self._current is None:
            return
        parts = args.split()
        if len(parts) < 2:
            raise CueSyntaxError("INDEX needs a number and a position")
        try:
            index_number = int(parts[0])
        except ValueError as exc:
            raise CueSyntaxError(f"bad INDEX number: {parts[0]!r}") from exc

        try:
            position = parse_cue_time(parts[1])
        except CueSyntaxError:
            _LOG.warning(
                "cue_index_malformed track=%s position=%r fallback=0",
                self._current.fields.get("track"),
                parts[1],
            )
            position = Fraction(0)

        previous = self._previous
        if index_number == 0:
            # pregap of this track ends the previous one
            if previous is not None and position > previous.start:
                previous.end = position
        elif index_number == 1:
            self._current.start = position
            if previous is not None:
                if previous.end is None and position > previous.start:
                    previous.end = position
                self._previous = None
                self._commit(previous)
