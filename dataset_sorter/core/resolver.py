"""Locate the image an annotation refers to.

Annotations record the image path of the machine they were made on, often a
Windows path.  Only the base name is trusted: it is searched for in the
primary image root, then in the fallback root.
"""

from __future__ import annotations

import os
from pathlib import Path

from dataset_sorter.utils.logger import SorterLogger

_log = SorterLogger("Resolver")


def recorded_basename(recorded_path: str) -> str:
    """Base name of a recorded path, whichever separator it uses."""
    return recorded_path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def find_file(root: Path, name: str) -> Path | None:
    """Walk *root* and return the first regular file called *name*."""
    if not root.is_dir():
        return None
    for dirpath, _dirnames, filenames in os.walk(root):
        if name in filenames:
            return Path(dirpath) / name
    return None


class ImageResolver:
    """Base-name lookup across a primary and a fallback image root."""

    def __init__(self, primary_root: str | Path, fallback_root: str | Path) -> None:
        self.primary_root = Path(primary_root)
        self.fallback_root = Path(fallback_root)

    def resolve(self, recorded_path: str) -> Path | None:
        name = recorded_basename(recorded_path)
        if not name:
            return None

        found = find_file(self.primary_root, name)
        if found is None:
            found = find_file(self.fallback_root, name)
            if found is not None:
                _log.status(f"{name} found in fallback root {self.fallback_root}")
        return found
