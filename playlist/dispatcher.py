from __future__ import annotations

import logging
from typing import Sequence

from playlist.embedded_cue import EmbeddedCuePlaylistPlugin
from playlist.providers import PlaylistPlugin, PlaylistProvider

_LOG = logging.getLogger(__name__)

PLAYLIST_PLUGINS: tuple[PlaylistPlugin, ...] = (EmbeddedCuePlaylistPlugin(),)


def find_plugin(name: str, plugins: Sequence[PlaylistPlugin] | None = None) -> PlaylistPlugin | None:
    lower_name = str(name or "").strip().lower()
    for plugin in plugins if plugins is not None else PLAYLIST_PLUGINS:
        if plugin.NAME == lower_name:
            return plugin
    return None


def open_playlist(uri: str, plugins: Sequence[PlaylistPlugin] | None = None) -> PlaylistProvider | None:
    """Open ``uri`` with the first plugin that accepts it.

    Plugins whose suffix list matches the URI are tried first; the suffix is
    only a hint, so every other plugin still gets a chance afterwards.
    """
    candidates = list(plugins if plugins is not None else PLAYLIST_PLUGINS)
    ordered = [plugin for plugin in candidates if plugin.supports_suffix(uri)]
    ordered += [plugin for plugin in candidates if plugin not in ordered]

    for plugin in ordered:
        provider = plugin.open_uri(uri)
        if provider is not None:
            _LOG.debug("playlist_open uri=%s plugin=%s", uri, plugin.NAME)
            return provider
    _LOG.debug("playlist_open uri=%s plugin=none", uri)
    return None
