#!/usr/bin/env python3
"""
Scene Mapper CLI

A tool for resolving Godot text scenes (including inherited and instanced
scenes) into node trees and printing them in various formats.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set, Tuple

from scenetree.model import SceneResult
from scraper.builder import SceneScraper
from scraper.discovery import DEFAULT_EXCLUDE_DIRS, get_relative_path, iter_scenes
from scraper.errors import ScrapeError
from scraper.types import TypeMap, TypeResolver, load_type_map
from exporters import to_mermaid, to_ascii, to_json
from exporters.json_exporter import to_dict


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="scenemap",
        description="Resolve Godot scenes into node trees, following inherited and instanced scenes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scenemap scenes/Main.tscn               # ASCII tree of one scene
  scenemap . -f json -o scenes.json       # Every scene in the project as JSON
  scenemap Main.tscn -f mermaid --orientation LR
  scenemap Main.tscn --expand-instances   # Expose nodes of instanced scenes
  scenemap Main.tscn --type-map types.yaml --namespace MyGame
        """,
    )

    # Positional arguments
    parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Scene file or directory to scan for scenes (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "mermaid", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    # Mermaid-specific options
    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="TD",
        help="Mermaid flowchart orientation (default: TD)",
    )

    # ASCII-specific options
    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--hide-types",
        action="store_true",
        help="Print node names only",
    )

    # Resolution options
    parser.add_argument(
        "--expand-instances",
        action="store_true",
        help="Mark nodes inside instanced scenes as visible",
    )

    parser.add_argument(
        "--type-map",
        type=str,
        default=None,
        help="YAML, TOML or JSON file mapping script paths or names to type names",
    )

    parser.add_argument(
        "--namespace",
        type=str,
        default=None,
        help="Namespace for scripts that are not in the type map",
    )

    # Scanning options
    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to exclude when scanning a directory",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )

    # Logging options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (every matched line)",
    )

    return parser.parse_args(args)


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for the CLI."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("scenemap")


def render(result: SceneResult, parsed) -> str:
    """Render one resolved scene in the requested format."""
    if parsed.format == "mermaid":
        return to_mermaid(result, orientation=parsed.orientation, show_types=not parsed.hide_types)
    if parsed.format == "json":
        return to_json(result)
    return to_ascii(result, style=parsed.ascii_style, show_types=not parsed.hide_types)


def render_many(results: List[Tuple[str, SceneResult]], parsed) -> str:
    """Render several resolved scenes, each labelled with its path."""
    if parsed.format == "json":
        return json.dumps({"scenes": [to_dict(result, scene) for scene, result in results]}, indent=2)

    comment = "%%" if parsed.format == "mermaid" else "#"
    blocks = [f"{comment} {scene}\n{render(result, parsed)}" for scene, result in results]
    return "\n\n".join(blocks)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    logger = setup_logging(parsed.verbose, parsed.debug)

    target = Path(parsed.target).resolve()
    if not target.exists():
        print(f"Error: '{parsed.target}' does not exist", file=sys.stderr)
        return 1

    type_resolver: Optional[TypeResolver] = None
    try:
        if parsed.type_map:
            type_resolver = load_type_map(Path(parsed.type_map), namespace=parsed.namespace)
        elif parsed.namespace:
            type_resolver = TypeMap(namespace=parsed.namespace)
    except ScrapeError as e:
        print(f"Error loading type map: {e}", file=sys.stderr)
        return 1

    exclude_dirs: Optional[Set[str]] = None
    if parsed.exclude_dir:
        exclude_dirs = set(parsed.exclude_dir) | DEFAULT_EXCLUDE_DIRS

    scraper = SceneScraper(type_resolver=type_resolver)

    # Resolve the scenes
    try:
        if target.is_dir():
            results = []
            for scene in iter_scenes(target, exclude_dirs=exclude_dirs, max_depth=parsed.max_depth):
                result = scraper.scrape(scene, parsed.expand_instances)
                results.append((get_relative_path(scene, target).as_posix(), result))
            logger.info(f"Resolved {len(results)} scene(s) under {target}")
            output = render_many(results, parsed)
        else:
            output = render(scraper.scrape(target, parsed.expand_instances), parsed)
    except (ScrapeError, OSError) as e:
        print(f"Error scanning scene: {e}", file=sys.stderr)
        return 1

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
