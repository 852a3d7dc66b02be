"""Cache of resolved scenes keyed by absolute file path."""

from typing import Dict, Iterator, Optional

from scenetree.model import SceneResult


class SceneCache:
    """
    Stores the resolved result of every scene scraped so far.

    Entries are never invalidated: a scene edited after it was first resolved
    keeps returning the old tree until the cache is discarded.
    """

    def __init__(self):
        self._scenes: Dict[str, SceneResult] = {}

    def get(self, path: str) -> Optional[SceneResult]:
        """Return the cached result for `path`, or None."""
        return self._scenes.get(path)

    def put(self, path: str, result: SceneResult) -> None:
        """Store the resolved result for `path`."""
        self._scenes[path] = result

    def paths(self) -> Iterator[str]:
        """Iterate over cached scene paths in insertion order."""
        return iter(list(self._scenes))

    def clear(self) -> None:
        """Drop every cached scene."""
        self._scenes.clear()

    def __len__(self) -> int:
        return len(self._scenes)

    def __contains__(self, path: str) -> bool:
        return path in self._scenes

    def __repr__(self) -> str:
        return f"SceneCache(scenes={len(self._scenes)})"
