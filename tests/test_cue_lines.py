from __future__ import annotations

import pytest

from playlist.cue_lines import CueLineCursor

_DIRECTIVES = ['TITLE "Album"', "TRACK 01 AUDIO", "INDEX 01 00:00:00"]


def _drain(cursor: CueLineCursor) -> list[str]:
    lines = []
    while True:
        line = cursor.next_line()
        if line is None:
            return lines
        lines.append(line)


@pytest.mark.parametrize("terminator", ["\n", "\r", "\r\n"])
def test_next_line_splits_on_any_terminator(terminator: str) -> None:
    text = terminator.join(_DIRECTIVES) + terminator

    lines = _drain(CueLineCursor(text))

    assert lines == _DIRECTIVES
    assert "\n".join(lines) == "\n".join(_DIRECTIVES)


def test_next_line_returns_undelimited_last_line() -> None:
    cursor = CueLineCursor("TRACK 01 AUDIO\nINDEX 01 00:00:00")

    assert cursor.next_line() == "TRACK 01 AUDIO"
    assert cursor.exhausted is False
    assert cursor.next_line() == "INDEX 01 00:00:00"
    assert cursor.exhausted is True


def test_blank_lines_and_mixed_terminators_do_not_produce_empty_lines() -> None:
    cursor = CueLineCursor("\r\n\r\nTRACK 01 AUDIO\r\n\r\n\nTITLE \"A\"\r\n")

    assert _drain(cursor) == ["TRACK 01 AUDIO", 'TITLE "A"']


def test_next_line_after_exhaustion_keeps_returning_none() -> None:
    cursor = CueLineCursor("REM COMMENT x")

    assert cursor.next_line() == "REM COMMENT x"
    for _ in range(3):
        assert cursor.next_line() is None
    assert cursor.exhausted is True


def test_empty_text_is_immediately_exhausted() -> None:
    cursor = CueLineCursor("")

    assert cursor.exhausted is True
    assert cursor.next_line() is None


def test_leading_byte_order_mark_is_dropped() -> None:
    cursor = CueLineCursor("\ufeffPERFORMER \"Band\"\n")

    assert list(cursor) == ['PERFORMER "Band"']
