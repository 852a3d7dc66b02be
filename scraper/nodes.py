"""Resolution of node declarations into tree insertions."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from scenetree.model import ROOT_KEY, SceneNode, Tree
from .parser import NodeHeader
from .types import engine_type

if TYPE_CHECKING:
    from .builder import SceneScan

logger = logging.getLogger(__name__)


PLACEHOLDER_TYPE = "InstancePlaceholder"


class NodeCase(Enum):
    """The structural cases a node declaration can fall into."""

    NEW_NODE = "new"
    INHERITED_ROOT = "inherited"
    INSTANCED_SUBTREE = "instanced"
    EXISTING_REFERENCE = "existing"


def classify_node(is_root: bool, has_resource: bool, has_empty_type: bool) -> NodeCase:
    """
    Decide how a node declaration changes the tree.

    Args:
        is_root: The declaration has no parent path.
        has_resource: The declaration instances a packed scene.
        has_empty_type: The declaration carries no type.

    Returns:
        The matching NodeCase. Cases are checked in order: inherited root,
        instanced subtree, existing reference, new node.
    """
    if is_root and has_resource:
        return NodeCase.INHERITED_ROOT
    if has_resource:
        return NodeCase.INSTANCED_SUBTREE
    if not is_root and has_empty_type:
        return NodeCase.EXISTING_REFERENCE
    return NodeCase.NEW_NODE


def clone_into(
    source: Tree,
    attach: Callable[[SceneNode, Optional[str]], None],
    make_root: Callable[[SceneNode], SceneNode],
    root_parent: Optional[str],
    root_key: str,
    remap_path: Callable[[str], str],
    visible: bool = False,
) -> SceneNode:
    """
    Copy every node of `source` into another tree.

    Args:
        source: The resolved tree to copy.
        attach: Inserts a node under the parent with the given lookup key.
        make_root: Builds the node that replaces the source root.
        root_parent: Lookup key of the parent of the new root (None when the
                     copy becomes the target tree's root).
        root_key: Lookup key under which the new root is reachable.
        remap_path: Maps a source-relative path to a target path.
        visible: Value of the `visible` flag on copied descendants.

    Returns:
        The node created for the source root.
    """
    new_root = make_root(source.root.value)

    for position in source.walk():
        if position.is_root:
            attach(new_root, root_parent)
            continue

        value = position.value
        parent = position.parent
        parent_key = root_key if parent.is_root else remap_path(parent.value.path)
        attach(SceneNode(value.name, value.type, remap_path(value.path), visible), parent_key)

    return new_root


def resolve_node(scan: "SceneScan", header: NodeHeader) -> SceneNode:
    """
    Apply one node declaration to the scan's tree.

    Args:
        scan: The state of the scene being scraped.
        header: The parsed node declaration.

    Returns:
        The node that following property lines apply to.
    """
    name = header.safe_name
    node_path = header.node_path
    declared_type = header.type

    if header.has_placeholder:
        declared_type = PLACEHOLDER_TYPE

    case = classify_node(header.is_root, header.has_resource, declared_type == "")

    if case is NodeCase.INHERITED_ROOT:
        base = scan.load_scene(header.resource_id).tree
        node = clone_into(
            base,
            scan.attach,
            make_root=lambda root: SceneNode(name, root.type, root.path),
            root_parent=None,
            root_key=ROOT_KEY,
            remap_path=lambda path: path,
        )
        logger.debug(f" - InheritedScene root: {node}")

    elif case is NodeCase.INSTANCED_SUBTREE:
        scene = scan.load_scene(header.resource_id).tree
        node = clone_into(
            scene,
            scan.attach,
            make_root=lambda root: SceneNode(name, root.type, node_path),
            root_parent=header.parent,
            root_key=node_path,
            remap_path=lambda path: f"{node_path}/{path}",
            visible=scan.expand_instances,
        )
        logger.debug(f" - InstancedScene: {node}")

    elif case is NodeCase.EXISTING_REFERENCE:
        node = scan.position(node_path).value
        logger.debug(f" - Child Node (inherited/instanced): {node}")

    else:
        node = SceneNode(name, engine_type(declared_type), node_path)
        scan.attach(node, header.parent)
        logger.debug(f" - Node: {node}")

    return node
