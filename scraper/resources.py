"""Per-file table of external resources referenced by id."""

import logging
from typing import Dict

from .errors import UnknownResourceError
from .parser import TRACKED_KINDS

logger = logging.getLogger(__name__)


class ResourceTable:
    """
    Maps a scene file's local resource ids to resource paths.

    Only scripts and packed scenes are kept; the paths are the part of the
    `res://` reference after `res:/`, so they start with a slash.
    """

    def __init__(self, scene_file: str):
        self.scene_file = scene_file
        self._paths: Dict[str, str] = {}

    def register(self, resource_id: str, path: str, kind: str) -> bool:
        """
        Record a resource declaration.

        Args:
            resource_id: Local id used by `ExtResource( <id> )` references.
            path: Resource path relative to the project root.
            kind: Declared resource type.

        Returns:
            True if the resource was stored, False if its kind is not tracked.
        """
        if kind not in TRACKED_KINDS:
            return False
        self._paths[resource_id] = path
        return True

    def resolve(self, resource_id: str) -> str:
        """Return the path declared for `resource_id`."""
        try:
            return self._paths[resource_id]
        except KeyError:
            raise UnknownResourceError(resource_id, self.scene_file) from None

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, resource_id: str) -> bool:
        return resource_id in self._paths

    def __repr__(self) -> str:
        return f"ResourceTable(scene_file={self.scene_file!r}, resources={len(self._paths)})"
