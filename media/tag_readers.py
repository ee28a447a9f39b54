"""Tag container readers reporting ``(name, value)`` pairs through a callback."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.apev2 import APEv2, APETextValue
from mutagen.id3 import COMM, ID3, TXXX, TextFrame
from mutagen.mp4 import MP4FreeForm, MP4Tags

_LOG = logging.getLogger(__name__)

TagPairHandler = Callable[[str, str], None]


class TagReader(ABC):
    NAME = "base"

    @abstractmethod
    def scan(self, path: str, on_pair: TagPairHandler) -> None:
        """Invoke ``on_pair(name, value)`` once per text field found in ``path``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FileTagReader(TagReader):
    """Reads the container-native tag block detected by ``mutagen.File``."""

    NAME = "file"

    def scan(self, path: str, on_pair: TagPairHandler) -> None:
        try:
            audio = MutagenFile(path)
        except (MutagenError, OSError) as exc:
            _LOG.debug("tag_scan reader=%s path=%s result=error error=%s", self.NAME, path, exc)
            return
        if audio is None or audio.tags is None:
            _LOG.debug("tag_scan reader=%s path=%s result=no_tags", self.NAME, path)
            return

        tags = audio.tags
        if isinstance(tags, ID3):
            _report_id3(tags, on_pair)
        elif isinstance(tags, APEv2):
            _report_ape(tags, on_pair)
        elif isinstance(tags, MP4Tags):
            _report_mp4(tags, on_pair)
        else:
            _report_mapping(tags, on_pair)


class ApeTagReader(TagReader):
    """Reads an APEv2 tag block, wherever in the file it is stored."""

    NAME = "ape"

    def scan(self, path: str, on_pair: TagPairHandler) -> None:
        try:
            tags = APEv2(path)
        except (MutagenError, OSError) as exc:
            _LOG.debug("tag_scan reader=%s path=%s result=error error=%s", self.NAME, path, exc)
            return
        _report_ape(tags, on_pair)


class Id3TagReader(TagReader):
    NAME = "id3"

    def scan(self, path: str, on_pair: TagPairHandler) -> None:
        try:
            tags = ID3(path)
        except (MutagenError, OSError) as exc:
            _LOG.debug("tag_scan reader=%s path=%s result=error error=%s", self.NAME, path, exc)
            return
        _report_id3(tags, on_pair)


def _report_id3(tags: ID3, on_pair: TagPairHandler) -> None:
    for frame in tags.values():
        # TXXX and COMM are text frames too, keyed by their description.
        if isinstance(frame, (TXXX, COMM)):
            name = frame.desc
        elif isinstance(frame, TextFrame):
            name = frame.FrameID
        else:
            continue
        if name:
            on_pair(name, "\n".join(str(text) for text in frame.text))


def _report_ape(tags: APEv2, on_pair: TagPairHandler) -> None:
    for key, value in tags.items():
        # binary and external (link) items are skipped
        if isinstance(value, APETextValue):
            on_pair(key, "\n".join(value))


def _report_mp4(tags: MP4Tags, on_pair: TagPairHandler) -> None:
    for key, values in tags.items():
        name = key
        if key.startswith("----:"):
            # ----:com.apple.iTunes:NAME
            name = key.rsplit(":", 1)[-1]
        for value in values:
            if isinstance(value, MP4FreeForm):
                on_pair(name, bytes(value).decode("utf-8", errors="replace"))
            elif isinstance(value, str):
                on_pair(name, value)


def _report_mapping(tags: Any, on_pair: TagPairHandler) -> None:
    # Vorbis comments and other dict-like containers: key -> list of values
    for key, values in tags.items():
        if not isinstance(values, (list, tuple)):
            values = [values]
        for value in values:
            if isinstance(value, str):
                on_pair(str(key), value)


DEFAULT_TAG_READERS: tuple[TagReader, ...] = (FileTagReader(), ApeTagReader(), Id3TagReader())
