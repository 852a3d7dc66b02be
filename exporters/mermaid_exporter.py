"""Mermaid flowchart exporter for resolved scenes."""

import re
from typing import Dict, List

from scenetree.model import SceneResult


def to_mermaid(
    result: SceneResult,
    orientation: str = "TD",
    show_types: bool = True,
) -> str:
    """
    Convert a resolved scene to Mermaid flowchart syntax.

    Args:
        result: The resolved scene to export.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        show_types: If True, include node types in labels.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    # Build node ID mapping
    node_ids: Dict[int, str] = {}
    used: Dict[str, int] = {}
    for node in result.tree.values():
        node_ids[id(node)] = _unique_id(_sanitize_id(node.path), used)

    # Add node definitions with labels
    for node in result.tree.values():
        label = f"{node.name}<br/>{node.type}" if show_types else node.name
        lines.append(f'    {node_ids[id(node)]}["{label}"]')

    # Add edges
    edges: List[str] = []
    for position in result.tree.walk():
        for child in position.children:
            edges.append(f"    {node_ids[id(position.value)]} --> {node_ids[id(child.value)]}")
    if edges:
        lines.append("")
        lines.extend(edges)

    # Style unique and editable nodes
    styles: List[str] = []
    for node in result.unique_nodes:
        styles.append(f"    style {node_ids[id(node)]} stroke:#cc6600,stroke-width:2px")
    for node in result.tree.values():
        if node.visible:
            styles.append(f"    style {node_ids[id(node)]} stroke:#0066cc,stroke-dasharray: 5 5")
    if styles:
        lines.append("")
        lines.extend(styles)

    return "\n".join(lines)


def _sanitize_id(path: str) -> str:
    """
    Convert a node path to a valid Mermaid node ID.

    Mermaid IDs can only contain letters, digits, and underscores.
    """
    if path == "":
        return "root"
    sanitized = re.sub(r"[/\\.\-]", "_", path)
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return "n_" + sanitized if sanitized == "root" else (sanitized or "unknown")


def _unique_id(candidate: str, used: Dict[str, int]) -> str:
    """Suffix `candidate` with a counter if it was already handed out."""
    count = used.get(candidate, 0)
    used[candidate] = count + 1
    return candidate if count == 0 else f"{candidate}_{count}"
