"""Path resolution utilities for mapping resource references to scene files."""

import logging
from pathlib import Path
from typing import Optional, Union

from .cache import SceneCache
from .errors import ProjectRootNotFoundError

logger = logging.getLogger(__name__)


PROJECT_MARKER = "project.godot"


def normalize_path(path: Union[str, Path]) -> str:
    """
    Normalize a file path into the form used as a cache key.

    Backslashes become forward slashes and the path is made absolute.
    """
    return Path(str(path).replace("\\", "/")).resolve().as_posix()


def find_project_root(start: Union[str, Path], marker: str = PROJECT_MARKER) -> Path:
    """
    Find the nearest directory at or above `start` containing the marker file.

    Args:
        start: A file or directory inside the project.
        marker: Name of the file that identifies the project root.

    Returns:
        The project root directory.

    Raises:
        ProjectRootNotFoundError: If no ancestor contains the marker.
    """
    start = Path(start)
    folder = start if start.is_dir() else start.parent

    for candidate in (folder, *folder.parents):
        if (candidate / marker).is_file():
            return candidate

    raise ProjectRootNotFoundError(marker, folder.as_posix())


class PathResolver:
    """
    Turns `res://` resource paths into absolute file paths.

    The project root (the anchor) is computed once and reused for every scene
    that lives under it. It is recomputed when a scene outside the current
    anchor is resolved.
    """

    def __init__(self, cache: SceneCache, marker: str = PROJECT_MARKER):
        self.cache = cache
        self.marker = marker
        self._anchor: Optional[str] = None

    @property
    def anchor(self) -> Optional[str]:
        """The cached project root, or None if not computed yet."""
        return self._anchor

    def resolve(self, resource_path: str, context_file: str) -> str:
        """
        Resolve a resource path referenced from `context_file`.

        Args:
            resource_path: Project-relative path starting with "/".
            context_file: Absolute path of the scene holding the reference.

        Returns:
            Absolute path of the referenced file.
        """
        if self._anchor is None or not context_file.startswith(self._anchor):
            self._anchor = self._anchor_from_cache(resource_path) or self._anchor_from_filesystem(context_file)
            logger.debug(f"Project root: {self._anchor or '/'}")

        return self._anchor + resource_path

    def _anchor_from_cache(self, resource_path: str) -> Optional[str]:
        # A scene already resolved through the same resource path reveals the root
        for path in self.cache.paths():
            if path.endswith(resource_path):
                return path[: -len(resource_path)]
        return None

    def _anchor_from_filesystem(self, context_file: str) -> str:
        root = find_project_root(Path(context_file).parent, self.marker)
        return root.as_posix().rstrip("/")
