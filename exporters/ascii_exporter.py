"""ASCII tree-style exporter for resolved scenes."""

from typing import List, Set, Tuple

from scenetree.model import SceneNode, SceneResult, TreeNode


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "

UNIQUE_MARKER = " %"
EDITABLE_MARKER = " [editable]"


def to_ascii(
    result: SceneResult,
    style: str = "tree",
    show_types: bool = True,
) -> str:
    """
    Convert a resolved scene to ASCII tree representation.

    Args:
        result: The resolved scene to export.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        show_types: If True, print each node's type after its name.

    Returns:
        ASCII tree string. Unique nodes are marked with `%`, visible nodes
        with `[editable]`.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    unique = {id(node) for node in result.unique_nodes}
    lines: List[str] = []

    _render_node(
        node=result.tree.root,
        prefix="",
        is_last=True,
        chars=chars,
        unique=unique,
        lines=lines,
        show_types=show_types,
    )

    return "\n".join(lines)


def _render_node(
    node: TreeNode,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    unique: Set[int],
    lines: List[str],
    show_types: bool,
) -> None:
    """
    Recursively render a node and its children.

    Args:
        node: Current position to render.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        unique: Ids of the unique scene nodes.
        lines: Output lines list (modified in place).
        show_types: Whether to print node types.
    """
    branch, last, vertical, space = chars
    label = _get_label(node.value, unique, show_types)

    if node.is_root:
        lines.append(label)
        child_prefix = ""
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{label}")
        child_prefix = prefix + (space if is_last else vertical)

    for i, child in enumerate(node.children):
        _render_node(
            node=child,
            prefix=child_prefix,
            is_last=(i == len(node.children) - 1),
            chars=chars,
            unique=unique,
            lines=lines,
            show_types=show_types,
        )


def _get_label(node: SceneNode, unique: Set[int], show_types: bool) -> str:
    """Get the display label for a node."""
    label = node.name
    if show_types:
        label += f" ({node.type})"
    if id(node) in unique:
        label += UNIQUE_MARKER
    if node.visible:
        label += EDITABLE_MARKER
    return label
