"""JSON exporter for resolved scenes (machine-friendly format)."""

import json
from typing import Any, Dict, Optional

from scenetree.model import SceneResult, TreeNode


def to_json(
    result: SceneResult,
    indent: Optional[int] = 2,
    scene: Optional[str] = None,
) -> str:
    """
    Convert a resolved scene to JSON format.

    Args:
        result: The resolved scene to export.
        indent: JSON indentation level.
        scene: Optional scene path recorded in the output.

    Returns:
        JSON string with a nested `root` object and the list of unique
        node paths.
    """
    return json.dumps(to_dict(result, scene), indent=indent)


def to_dict(result: SceneResult, scene: Optional[str] = None) -> Dict[str, Any]:
    """Build the JSON-ready structure for a resolved scene."""
    data: Dict[str, Any] = {}
    if scene is not None:
        data["scene"] = scene
    data["root"] = _node_to_dict(result.tree.root)
    data["unique"] = [node.path for node in result.unique_nodes]
    return data


def _node_to_dict(node: TreeNode) -> Dict[str, Any]:
    value = node.value
    return {
        "name": value.name,
        "type": value.type,
        "path": value.path,
        "visible": value.visible,
        "children": [_node_to_dict(child) for child in node.children],
    }
