"""Discover note files under a root directory."""

import os
from collections.abc import Iterator
from pathlib import Path


def discover_notes(
    root: str | Path,
    extensions: list[str] | tuple[str, ...] = (".md",),
    skip_hidden: bool = True,
) -> Iterator[Path]:
    """Yield matching files under root in sorted order.

    A root that is itself a file is yielded as-is when its suffix matches.
    """
    root = Path(root)
    wanted = {ext.lower() for ext in extensions}

    if root.is_file():
        if root.suffix.lower() in wanted:
            yield root
        return

    for dirpath, dirnames, filenames in os.walk(root):
        if skip_hidden:
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        dirnames.sort()
        for name in sorted(filenames):
            if skip_hidden and name.startswith("."):
                continue
            if Path(name).suffix.lower() in wanted:
                yield Path(dirpath) / name
