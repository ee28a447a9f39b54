"""Playlist plugin reading cue sheets embedded in a file's ``CUESHEET`` tag."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from config.settings import EMBCUE_PLUGIN_NAME, EMBCUE_SUFFIXES
from media.tag_probe import probe_cue_sheet
from media.tag_readers import TagReader
from metadata.types import Song
from playlist.cue_lines import CueLineCursor
from playlist.cue_parser import CueParser
from playlist.providers import PlaylistPlugin, PlaylistProvider

_LOG = logging.getLogger(__name__)


class EmbeddedCuePlaylist(PlaylistProvider):
    """Tracks of one file, described by the cue sheet stored inside it.

    ``filename`` overrides every cue ``FILE`` reference: an embedded sheet
    always points to the file it is contained in.
    """

    def __init__(self, filename: str, cuesheet: str) -> None:
        self.filename: str | None = filename
        self._lines: CueLineCursor | None = CueLineCursor(cuesheet)
        self._parser: CueParser | None = CueParser()

    @property
    def closed(self) -> bool:
        return self._parser is None

    def read(self) -> Song | None:
        parser = self._parser
        lines = self._lines
        if parser is None or lines is None:
            return None

        song = parser.get()
        if song is not None:
            return song.replace_uri(self.filename)

        line = lines.next_line()
        while line is not None:
            parser.feed(line)
            song = parser.get()
            if song is not None:
                return song.replace_uri(self.filename)
            line = lines.next_line()

        parser.finish()
        song = parser.get()
        if song is not None:
            return song.replace_uri(self.filename)
        return None

    def close(self) -> None:
        self._parser = None
        self._lines = None
        self.filename = None


class EmbeddedCuePlaylistPlugin(PlaylistPlugin):
    NAME = EMBCUE_PLUGIN_NAME
    SUFFIXES = EMBCUE_SUFFIXES

    def __init__(self, readers: Sequence[TagReader] | None = None) -> None:
        self._readers = readers

    def open_uri(self, uri: str) -> EmbeddedCuePlaylist | None:
        if not os.path.isabs(uri):
            # only local files supported
            _LOG.debug("embcue_open uri=%r result=declined reason=not_local", uri)
            return None

        cuesheet = probe_cue_sheet(uri, self._readers)
        if cuesheet is None:
            _LOG.debug("embcue_open uri=%s result=declined reason=no_cuesheet", uri)
            return None

        _LOG.info("embcue_open uri=%s result=opened", uri)
        return EmbeddedCuePlaylist(os.path.basename(uri), cuesheet)
