from __future__ import annotations

from pathlib import Path

import pytest

from media.tag_probe import is_local_file, probe_cue_sheet
from media.tag_readers import TagReader


class FakeReader(TagReader):
    def __init__(self, name: str, pairs: list[tuple[str, str]]) -> None:
        self.NAME = name
        self.pairs = pairs
        self.calls: list[str] = []

    def scan(self, path: str, on_pair) -> None:
        self.calls.append(path)
        for name, value in self.pairs:
            on_pair(name, value)


@pytest.fixture
def audio_path(audio_file: Path) -> str:
    return str(audio_file)


def test_first_reader_hit_short_circuits_the_rest(audio_path: str) -> None:
    native = FakeReader("file", [("TITLE", "x"), ("CUESHEET", "TRACK 01 AUDIO")])
    ape = FakeReader("ape", [("CUESHEET", "from ape")])
    id3 = FakeReader("id3", [("CUESHEET", "from id3")])

    result = probe_cue_sheet(audio_path, [native, ape, id3])

    assert result == "TRACK 01 AUDIO"
    assert native.calls == [audio_path]
    assert ape.calls == []
    assert id3.calls == []


def test_ape_value_is_used_when_native_reader_has_none(audio_path: str) -> None:
    native = FakeReader("file", [("ARTIST", "Band")])
    ape = FakeReader("ape", [("Cuesheet", "TRACK 01 AUDIO")])
    id3 = FakeReader("id3", [("CUESHEET", "from id3")])

    result = probe_cue_sheet(audio_path, [native, ape, id3])

    assert result == "TRACK 01 AUDIO"
    assert native.calls == [audio_path]
    assert ape.calls == [audio_path]
    assert id3.calls == []


def test_first_match_within_a_reader_wins(audio_path: str) -> None:
    native = FakeReader("file", [("cuesheet", "first"), ("CUESHEET", "second")])

    assert probe_cue_sheet(audio_path, [native]) == "first"


def test_empty_values_are_not_a_hit(audio_path: str) -> None:
    native = FakeReader("file", [("CUESHEET", ""), ("CUESHEET", "  \n")])
    id3 = FakeReader("id3", [("CUESHEET", "from id3")])

    assert probe_cue_sheet(audio_path, [native, id3]) == "from id3"


def test_no_reader_yields_a_value(audio_path: str) -> None:
    readers = [FakeReader("file", []), FakeReader("ape", [("CUE", "nope")]), FakeReader("id3", [])]

    assert probe_cue_sheet(audio_path, readers) is None
    assert all(reader.calls == [audio_path] for reader in readers)


@pytest.mark.parametrize(
    "uri",
    ["relative/album.flac", "http://example.com/album.flac", "", "/definitely/missing/album.flac"],
)
def test_non_local_paths_are_rejected_before_any_reader(uri: str) -> None:
    reader = FakeReader("file", [("CUESHEET", "TRACK 01 AUDIO")])

    assert probe_cue_sheet(uri, [reader]) is None
    assert reader.calls == []


def test_is_local_file_rejects_directories(tmp_path: Path) -> None:
    assert is_local_file(str(tmp_path)) is False
