"""Scene scraper that orchestrates line scanning and tree construction."""

import itertools
import logging
import threading
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Optional, Union

from scenetree.model import ROOT_KEY, SceneNode, SceneResult, Tree, TreeNode
from .cache import SceneCache
from .errors import (
    DuplicateNodeError,
    EmptySceneError,
    SceneCycleError,
    SceneDecodeError,
    UnknownNodePathError,
)
from .nodes import resolve_node
from .parser import (
    is_node_line,
    is_unique_name,
    parse_editable,
    parse_node_header,
    parse_resource,
    parse_script,
)
from .resolver import PROJECT_MARKER, PathResolver, normalize_path
from .resources import ResourceTable
from .types import TypeResolver, default_type_resolver

logger = logging.getLogger(__name__)


# Lines before the first section (`[gd_scene ...]` and a blank line)
HEADER_LINES = 2


class Phase(Enum):
    """What kind of line the scanner currently expects."""

    RESOURCE_SCAN = "resource"
    NODE_SCAN = "node"
    PROPERTY_SCAN = "property"
    EDITABLE_SCAN = "editable"


class SceneScan:
    """
    The state of one scene file while it is being scanned.

    Holds the current phase, the node that property lines apply to, the
    file's resource table, the path -> position lookup and the unique nodes
    found so far. Each phase has its own handler method.
    """

    def __init__(self, scraper: "SceneScraper", scene_file: str, expand_instances: bool):
        self.scraper = scraper
        self.scene_file = scene_file
        self.expand_instances = expand_instances

        self.phase = Phase.RESOURCE_SCAN
        self.current: Optional[SceneNode] = None
        self.resources = ResourceTable(scene_file)
        self.lookup: Dict[str, TreeNode] = {}
        self.unique_nodes: List[SceneNode] = []
        self.tree: Optional[Tree] = None

        self._first = True
        self._handlers: Dict[Phase, Callable[[str], None]] = {
            Phase.RESOURCE_SCAN: self.resource_scan,
            Phase.NODE_SCAN: self.node_scan,
            Phase.PROPERTY_SCAN: self.property_scan,
            Phase.EDITABLE_SCAN: self.editable_scan,
        }

    def run(self) -> SceneResult:
        """Scan the whole file and return its resolved tree."""
        try:
            with open(self.scene_file, encoding="utf-8") as handle:
                for line in itertools.islice(handle, HEADER_LINES, None):
                    self.feed(line.rstrip("\r\n"))
        except UnicodeDecodeError as e:
            raise SceneDecodeError(self.scene_file, str(e)) from e

        if self.tree is None:
            raise EmptySceneError(self.scene_file)

        return SceneResult(self.tree, self.unique_nodes)

    def feed(self, line: str) -> None:
        """Route one line to the handler of the current phase."""
        logger.debug(f"Line: {line}")

        if self._first:
            self._first = False
            if is_node_line(line):
                self.phase = Phase.NODE_SCAN
        elif line == "":
            self.phase = Phase.NODE_SCAN
            return

        self._handlers[self.phase](line)

    def resource_scan(self, line: str) -> None:
        resource = parse_resource(line)
        if resource is None:
            return
        if self.resources.register(resource.id, resource.path, resource.kind):
            logger.debug(f"Matched Resource: {resource}")
        else:
            logger.debug(f"Skipped {resource.kind} resource {resource.id}")

    def node_scan(self, line: str) -> None:
        header = parse_node_header(line)
        if header is not None:
            logger.debug(f"Matched Node: {header}")
            self.current = resolve_node(self, header)
            self.phase = Phase.PROPERTY_SCAN
        elif self.editable_scan(line):
            self.phase = Phase.EDITABLE_SCAN

    def property_scan(self, line: str) -> None:
        resource_id = parse_script(line)
        if resource_id is not None:
            resource = self.resources.resolve(resource_id)
            name = PurePosixPath(resource).stem
            self.current.type = self.scraper.type_resolver(name, resource)
            logger.debug(f"Matched Script: {self.current}")
            return

        if is_unique_name(line):
            logger.debug(f"Matched UniqueName: {self.current}")
            self.unique_nodes.append(self.current)

    def editable_scan(self, line: str) -> bool:
        """Mark the node named by an editable line visible; False if no match."""
        path = parse_editable(line)
        if path is None:
            return False

        node = self.position(path).value
        node.visible = True
        logger.debug(f"Matched Editable: {node}")
        return True

    def attach(self, node: SceneNode, parent_key: Optional[str]) -> TreeNode:
        """
        Insert `node` into the tree.

        The first node inserted becomes the root; every later node is added
        under the position registered for `parent_key`.
        """
        if self.tree is None:
            self.tree = Tree(node)
            self.lookup[ROOT_KEY] = self.tree.root
            return self.tree.root

        if node.path in self.lookup:
            raise DuplicateNodeError(node.path, self.scene_file)

        position = self.position(parent_key).add(node)
        self.lookup[node.path] = position
        return position

    def position(self, path: Optional[str]) -> TreeNode:
        """Return the tree position registered under `path`."""
        try:
            return self.lookup[path]
        except KeyError:
            raise UnknownNodePathError(path, self.scene_file) from None

    def load_scene(self, resource_id: str) -> SceneResult:
        """Resolve the packed scene declared under `resource_id`."""
        resource = self.resources.resolve(resource_id)
        scene_file = self.scraper.resolver.resolve(resource, self.scene_file)
        logger.debug(f" - Referenced scene: {scene_file}")

        result = self.scraper.scrape(scene_file, self.expand_instances)
        logger.debug(f"<<< {self.scene_file}")
        return result


class SceneScraper:
    """
    Resolves scene files into trees.

    Owns the scene cache and the project root anchor, so every scene scraped
    through one instance shares them. Calls on the same instance from several
    threads are serialized.
    """

    def __init__(
        self,
        type_resolver: Optional[TypeResolver] = None,
        cache: Optional[SceneCache] = None,
        marker: str = PROJECT_MARKER,
    ):
        self.cache = cache if cache is not None else SceneCache()
        self.resolver = PathResolver(self.cache, marker)
        self.type_resolver = type_resolver or default_type_resolver
        self._lock = threading.RLock()
        self._active: List[str] = []

    def scrape(self, file_path: Union[str, Path], expand_instances: bool = False) -> SceneResult:
        """
        Resolve a scene file, reusing the cached result when there is one.

        Args:
            file_path: Path to the `.tscn` file.
            expand_instances: Mark nodes inside instanced scenes visible.

        Returns:
            SceneResult with the tree and the unique nodes in declaration order.
        """
        scene_file = normalize_path(file_path)

        with self._lock:
            cached = self.cache.get(scene_file)
            if cached is not None:
                logger.debug(f"Cache hit: {scene_file}")
                return cached

            if scene_file in self._active:
                chain = self._active[self._active.index(scene_file):]
                raise SceneCycleError(chain + [scene_file])

            logger.info(f"Scraping {scene_file} [CacheCount: {len(self.cache)}]")
            self._active.append(scene_file)
            try:
                result = SceneScan(self, scene_file, expand_instances).run()
            finally:
                self._active.pop()

            self.cache.put(scene_file, result)
            return result
