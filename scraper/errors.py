"""Exceptions raised while scraping scene files."""

from typing import Sequence


class ScrapeError(Exception):
    """Base class for all scene scraping failures."""


class ProjectRootNotFoundError(ScrapeError):
    """No ancestor directory of a scene contains the project marker file."""

    def __init__(self, marker: str, start_dir: str):
        self.marker = marker
        self.start_dir = start_dir
        super().__init__(f"Could not find {marker} in path {start_dir}")


class UnknownResourceError(ScrapeError, KeyError):
    """A node or property line references an undeclared resource id."""

    def __init__(self, resource_id: str, scene_file: str):
        self.resource_id = resource_id
        self.scene_file = scene_file
        super().__init__(f"Resource id {resource_id!r} is not declared in {scene_file}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownNodePathError(ScrapeError, KeyError):
    """A line references a node path that is not in the tree."""

    def __init__(self, node_path: str, scene_file: str):
        self.node_path = node_path
        self.scene_file = scene_file
        super().__init__(f"Node path {node_path!r} not found in {scene_file}")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateNodeError(ScrapeError):
    """A node path was inserted twice into the same tree."""

    def __init__(self, node_path: str, scene_file: str):
        self.node_path = node_path
        self.scene_file = scene_file
        super().__init__(f"Node path {node_path!r} declared twice in {scene_file}")


class SceneCycleError(ScrapeError):
    """A scene inherits or instances itself, directly or transitively."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__("Scene reference cycle: " + " -> ".join(self.chain))


class EmptySceneError(ScrapeError):
    """A scene file declares no nodes."""

    def __init__(self, scene_file: str):
        self.scene_file = scene_file
        super().__init__(f"No nodes declared in {scene_file}")


class TypeMapError(ScrapeError):
    """A type map file could not be read or has the wrong shape."""


class SceneDecodeError(ScrapeError):
    """A scene file is not valid UTF-8 text."""

    def __init__(self, scene_file: str, reason: str):
        self.scene_file = scene_file
        super().__init__(f"Cannot decode {scene_file}: {reason}")
