"""Line patterns for the Godot text scene (.tscn) format."""

import re
from dataclasses import dataclass
from typing import Optional


# Resource kinds the scraper keeps track of
SCRIPT = "Script"
PACKED_SCENE = "PackedScene"
TRACKED_KINDS = {SCRIPT, PACKED_SCENE}

NODE_PATTERN = re.compile(
    r'^\[node name="(?P<name>.*?)"'
    r'( type="(?P<type>.*?)")?'
    r'( parent="(?P<parent>.*?)")?'
    r'( index="(?P<index>.*?)")?'
    r'( instance=ExtResource\( (?P<id>\d*))?'
    r'( instance_placeholder="res:/(?P<placeholder>.*)")?'
)
SCRIPT_PATTERN = re.compile(r"^script = ExtResource\( (?P<id>\d*)")
UNIQUE_NAME_PATTERN = re.compile(r"^unique_name_in_owner = true")
RESOURCE_PATTERN = re.compile(
    r'^\[ext_resource path="res:/(?P<path>.*)" type="(?P<kind>.*)" id=(?P<id>\d*)'
)
EDITABLE_PATTERN = re.compile(r'^\[editable path="(?P<path>.*)"')


@dataclass
class NodeHeader:
    """
    A parsed `[node ...]` declaration.

    Optional attributes that are absent from the line are empty strings.
    """

    name: str
    type: str = ""
    parent: str = ""
    index: str = ""
    resource_id: str = ""
    placeholder: str = ""

    @property
    def is_root(self) -> bool:
        return self.parent == ""

    @property
    def is_child_of_root(self) -> bool:
        return self.parent == "."

    @property
    def has_resource(self) -> bool:
        return self.resource_id != ""

    @property
    def has_placeholder(self) -> bool:
        return self.placeholder != ""

    @property
    def safe_name(self) -> str:
        """The declared name with hyphens replaced, usable as an identifier."""
        return self.name.replace("-", "_")

    @property
    def node_path(self) -> str:
        """Address of this node from the scene root."""
        if self.is_root:
            return ""
        if self.is_child_of_root:
            return self.name
        return f"{self.parent}/{self.name}"


@dataclass
class ResourceDecl:
    """A parsed `[ext_resource ...]` declaration."""

    path: str
    kind: str
    id: str


def parse_node_header(line: str) -> Optional[NodeHeader]:
    """
    Parse a node declaration line.

    Args:
        line: A line from a scene file.

    Returns:
        NodeHeader if the line declares a node, None otherwise.
    """
    match = NODE_PATTERN.match(line)
    if not match:
        return None
    groups = {key: value or "" for key, value in match.groupdict().items()}
    return NodeHeader(
        name=groups["name"],
        type=groups["type"],
        parent=groups["parent"],
        index=groups["index"],
        resource_id=groups["id"],
        placeholder=groups["placeholder"],
    )


def parse_resource(line: str) -> Optional[ResourceDecl]:
    """Parse an external resource declaration line."""
    match = RESOURCE_PATTERN.match(line)
    if not match:
        return None
    return ResourceDecl(path=match.group("path"), kind=match.group("kind"), id=match.group("id"))


def parse_script(line: str) -> Optional[str]:
    """Return the resource id of a `script = ExtResource( <id> )` line."""
    match = SCRIPT_PATTERN.match(line)
    return match.group("id") if match else None


def is_unique_name(line: str) -> bool:
    """Check if a line flags the current node as unique in its owner."""
    return UNIQUE_NAME_PATTERN.match(line) is not None


def parse_editable(line: str) -> Optional[str]:
    """Return the node path of an `[editable path="..."]` line."""
    match = EDITABLE_PATTERN.match(line)
    return match.group("path") if match else None


def is_node_line(line: str) -> bool:
    """Check if a line starts a node declaration."""
    return line.startswith("[node")
