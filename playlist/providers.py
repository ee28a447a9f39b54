from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Iterator

from metadata.types import Song


class PlaylistProvider(ABC):
    """An open playlist handing out songs one at a time."""

    @abstractmethod
    def read(self) -> Song | None:
        """Return the next song, or None once the playlist is exhausted."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Song]:
        while True:
            song = self.read()
            if song is None:
                return
            yield song

    def __enter__(self) -> "PlaylistProvider":
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()


class PlaylistPlugin(ABC):
    NAME = "base"
    SUFFIXES: tuple[str, ...] = ()

    @abstractmethod
    def open_uri(self, uri: str) -> PlaylistProvider | None:
        """Open ``uri``, or return None when this plugin does not handle it."""
        raise NotImplementedError

    def supports_suffix(self, uri: str) -> bool:
        suffix = os.path.splitext(str(uri or ""))[1].lstrip(".").lower()
        return bool(suffix) and suffix in self.SUFFIXES
