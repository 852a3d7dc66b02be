"""Tree data model for storing resolved scene hierarchies."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional


ROOT_KEY = "."  # lookup key reserved for the root node (its path is "")


@dataclass
class SceneNode:
    """
    One node of a resolved scene hierarchy.

    Attributes:
        name: Identifier, unique among siblings.
        type: Fully qualified type name (e.g. "Godot.Control").
        path: Slash-separated address from the tree root ("" for the root).
        visible: True when the node is exposed by an editable override, or
                 when it was cloned from an expanded instanced scene.
    """

    name: str
    type: str
    path: str
    visible: bool = False

    def __str__(self) -> str:
        flag = " [editable]" if self.visible else ""
        return f"{self.name} ({self.type}) @ '{self.path}'{flag}"


@dataclass(eq=False)
class TreeNode:
    """A position in a Tree: wraps a value and links to parent and children."""

    value: SceneNode
    parent: Optional["TreeNode"] = None
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def add(self, value: SceneNode) -> "TreeNode":
        """Append a child holding `value` and return it."""
        child = TreeNode(value, parent=self)
        self.children.append(child)
        return child

    def walk(self) -> Iterator["TreeNode"]:
        """Iterate over this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


class Tree:
    """
    An ordered n-ary tree of SceneNode values.

    The tree has exactly one root. Children are kept in insertion order so
    traversal is deterministic.
    """

    def __init__(self, root: SceneNode):
        self._root = TreeNode(root)

    @property
    def root(self) -> TreeNode:
        """Return the root position of the tree."""
        return self._root

    def walk(self) -> Iterator[TreeNode]:
        """Iterate over all positions in pre-order."""
        return self._root.walk()

    def traverse(self, visit: Callable[[TreeNode], None]) -> None:
        """
        Call `visit` for each position in pre-order.

        The callback sees the node value, `is_root`, and `parent` (None for
        the root) through the TreeNode it is given.
        """
        for node in self.walk():
            visit(node)

    def values(self) -> List[SceneNode]:
        """Return all scene nodes in pre-order."""
        return [node.value for node in self.walk()]

    def find(self, path: str) -> Optional[TreeNode]:
        """Return the position whose value has the given path, if any."""
        for node in self.walk():
            if node.value.path == path:
                return node
        return None

    def index(self) -> Dict[str, TreeNode]:
        """Return a path -> position lookup, with the root under ROOT_KEY."""
        lookup: Dict[str, TreeNode] = {}
        for node in self.walk():
            key = ROOT_KEY if node.is_root else node.value.path
            lookup[key] = node
        return lookup

    def depth(self) -> int:
        """Return the number of levels in the tree."""
        def _depth(node: TreeNode) -> int:
            if not node.children:
                return 1
            return 1 + max(_depth(child) for child in node.children)

        return _depth(self._root)

    def __len__(self) -> int:
        """Return the number of nodes in the tree."""
        return sum(1 for _ in self.walk())

    def __contains__(self, path: str) -> bool:
        """Check if a node with the given path is in the tree."""
        return self.find(path) is not None

    def __repr__(self) -> str:
        return f"Tree(root={self._root.value.name!r}, nodes={len(self)}, depth={self.depth()})"


class SceneResult(NamedTuple):
    """A resolved scene: its tree and the unique-flagged nodes in order."""

    tree: Tree
    unique_nodes: List[SceneNode]
