"""Locate an embedded cue sheet by probing a file's tag containers."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from config.settings import CUESHEET_TAG_NAME
from media.tag_readers import DEFAULT_TAG_READERS, TagReader

_LOG = logging.getLogger(__name__)


class _CueSheetCollector:
    """Tag pair callback keeping the first non-empty ``CUESHEET`` value."""

    def __init__(self) -> None:
        self.value: str | None = None

    def __call__(self, name: str, value: str) -> None:
        if self.value is not None:
            return
        if str(name).lower() != CUESHEET_TAG_NAME:
            return
        if value and value.strip():
            self.value = value


def is_local_file(path: str) -> bool:
    """Return True for an absolute path naming a readable regular file."""
    if not path or not os.path.isabs(path):
        return False
    return os.path.isfile(path) and os.access(path, os.R_OK)


def probe_cue_sheet(path: str, readers: Sequence[TagReader] | None = None) -> str | None:
    """Return the first non-empty ``CUESHEET`` tag value found in ``path``.

    Readers are consulted in order (native container, APE, ID3 by default)
    and probing stops at the first reader that yields a value. Returns
    ``None`` for non-local paths and files without an embedded cue sheet.
    """
    if not is_local_file(path):
        _LOG.debug("cuesheet_probe path=%r result=rejected_non_local", path)
        return None

    collector = _CueSheetCollector()
    for reader in readers if readers is not None else DEFAULT_TAG_READERS:
        reader.scan(path, collector)
        if collector.value is not None:
            _LOG.debug("cuesheet_probe path=%s reader=%s result=found", path, reader.NAME)
            return collector.value
        _LOG.debug("cuesheet_probe path=%s reader=%s result=missing", path, reader.NAME)
    return None
