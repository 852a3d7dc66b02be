"""Finding the scene files of a Godot project."""

import os
from pathlib import Path
from typing import Iterator, Optional, Set


SCENE_EXTENSION = ".tscn"

# Version control, editor caches and C# build output
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    ".godot", ".import", ".mono",
    "__pycache__", "bin", "obj",
    ".idea", ".vscode",
}


def iter_scenes(
    root: Path,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over the `.tscn` files below `root`.

    Args:
        root: Project directory to scan.
        exclude_dirs: Directory names never descended into.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Deepest directory level whose scenes are yielded
                   (0 is `root` itself). None means unlimited.

    Yields:
        Scene paths. A directory's scenes come before its subdirectories',
        each group in sorted order.
    """
    skipped = DEFAULT_EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs
    root = root.resolve()

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts)

        # Prune in place so os.walk skips these subtrees
        if max_depth is not None and depth >= max_depth:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d not in skipped)

        for filename in sorted(filenames):
            if filename.lower().endswith(SCENE_EXTENSION):
                yield current / filename


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Return `file_path` relative to `root`, or unchanged if it lies outside."""
    try:
        return file_path.resolve().relative_to(root.resolve())
    except ValueError:
        return file_path
