"""Resolution of attached scripts to fully qualified type names."""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .errors import TypeMapError

logger = logging.getLogger(__name__)


# Namespace prefix of built-in engine types
TYPE_NAMESPACE = "Godot"

# (script base name, project-relative script path) -> type name
TypeResolver = Callable[[str, str], str]


def engine_type(declared_type: str) -> str:
    """Return the qualified name of a built-in engine type."""
    return f"{TYPE_NAMESPACE}.{declared_type}"


def default_type_resolver(name: str, resource_path: str) -> str:
    """Use the script's base name as its type name."""
    return name


def _normalize_resource(path: str) -> str:
    """Strip the `res:/` scheme so keys match resource table paths."""
    path = path.replace("\\", "/")
    if path.startswith("res:/"):
        path = path[len("res:/"):]
    if not path.startswith("/"):
        path = "/" + path
    return path


class TypeMap:
    """
    A type resolver backed by an explicit mapping.

    Keys are either script resource paths (`res://ui/Hud.cs` or `/ui/Hud.cs`)
    or script base names (`Hud`). Values are fully qualified type names.
    """

    def __init__(self, types: Optional[Mapping[str, str]] = None, namespace: Optional[str] = None):
        self.namespace = namespace
        self._by_path: Dict[str, str] = {}
        self._by_name: Dict[str, str] = {}
        for key, value in (types or {}).items():
            if "/" in key or "." in Path(key).name:
                self._by_path[_normalize_resource(key)] = value
            else:
                self._by_name[key] = value

    def __call__(self, name: str, resource_path: str) -> str:
        """
        Resolve a script to its type name.

        Lookup order: resource path, base name, then the base name qualified
        with the default namespace (if one is set).
        """
        resolved = self._by_path.get(_normalize_resource(resource_path))
        if resolved is None:
            resolved = self._by_name.get(name)
        if resolved is None:
            resolved = f"{self.namespace}.{name}" if self.namespace else name
        logger.debug(f"Type of {resource_path}: {resolved}")
        return resolved

    def __len__(self) -> int:
        return len(self._by_path) + len(self._by_name)

    def __repr__(self) -> str:
        return f"TypeMap(entries={len(self)}, namespace={self.namespace!r})"


def _parse_content(file_path: Path, content: str) -> Any:
    suffix = file_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(content)
    if suffix == ".toml":
        return tomllib.loads(content)
    return json.loads(content)


def load_type_map(file_path: Path, namespace: Optional[str] = None) -> TypeMap:
    """
    Load a type map from a YAML, TOML or JSON file.

    The file holds a mapping of script path or name to type name, either at
    the top level or under a `types` key. A `namespace` key, if present, is
    used when the `namespace` argument is not given.

    Args:
        file_path: Path to the type map file.
        namespace: Default namespace for scripts missing from the map.

    Returns:
        The loaded TypeMap.

    Raises:
        TypeMapError: If the file cannot be read or parsed.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TypeMapError(f"Cannot read type map {file_path}: {e}") from e

    try:
        data = _parse_content(file_path, content)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise TypeMapError(f"Cannot parse type map {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TypeMapError(f"Type map {file_path} must contain a mapping")

    if namespace is None:
        namespace = data.get("namespace")
    types = data.get("types", {k: v for k, v in data.items() if k != "namespace"})
    if not isinstance(types, dict):
        raise TypeMapError(f"'types' in {file_path} must be a mapping")

    logger.info(f"Loaded {len(types)} type(s) from {file_path}")
    return TypeMap({str(k): str(v) for k, v in types.items()}, namespace=namespace)
