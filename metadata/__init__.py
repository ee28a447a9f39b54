from .types import Song, Tag

__all__ = ["Song", "Tag"]
