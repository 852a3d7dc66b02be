"""Scraper module for resolving Godot scene files into node trees."""

from .builder import SceneScraper, Phase
from .cache import SceneCache
from .discovery import iter_scenes
from .errors import ScrapeError
from .nodes import NodeCase, classify_node
from .resolver import PathResolver, find_project_root
from .types import TypeMap, load_type_map

__all__ = [
    "SceneScraper",
    "Phase",
    "SceneCache",
    "iter_scenes",
    "ScrapeError",
    "NodeCase",
    "classify_node",
    "PathResolver",
    "find_project_root",
    "TypeMap",
    "load_type_map",
]
