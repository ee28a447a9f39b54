"""Line cursor over an in-memory cue sheet."""

from __future__ import annotations

import re
from typing import Iterator

_EOL_RE = re.compile(r"[\r\n]+")
_BOM = "\ufeff"


class CueLineCursor:
    """Forward-only line reader over cue sheet text.

    Any CR or LF ends a line. Runs of terminators (CRLF, blank lines) are
    coalesced, so no empty lines are produced for them. Once the end of the
    text is reached ``next_line`` keeps returning ``None``.
    """

    def __init__(self, text: str) -> None:
        if text.startswith(_BOM):
            text = text[len(_BOM):]
        self._text = text
        self._pos = 0

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._text)

    def next_line(self) -> str | None:
        text = self._text
        leading = _EOL_RE.match(text, self._pos)
        if leading is not None:
            self._pos = leading.end()
        if self._pos >= len(text):
            self._pos = len(text)
            return None

        eol = _EOL_RE.search(text, self._pos)
        if eol is None:
            # last line has no terminator
            line = text[self._pos:]
            self._pos = len(text)
            return line
        line = text[self._pos:eol.start()]
        self._pos = eol.end()
        return line

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
