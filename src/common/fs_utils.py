"""Filesystem lookups shared by lock file and manifest discovery."""

from __future__ import annotations

import os
from typing import List, Optional, Sequence


def find_up(name: str, directory: Optional[str] = None) -> Optional[str]:
    """Find ``name`` in ``directory`` or the closest parent holding it.

    Args:
        name: File name to look for.
        directory: Starting point; defaults to the current working directory.
            A file path is accepted, lookup then starts next to it.

    Returns:
        Absolute path of the first match, or None when the filesystem root is
        reached without one.
    """
    found = find_up_multiple([name], directory)
    return found[0] if found else None


def find_up_multiple(names: Sequence[str], directory: Optional[str] = None) -> List[str]:
    """Find any of ``names`` walking up from ``directory``.

    Only regular files match. All names are checked at a level before moving
    to the parent. The walk stops at the first level with at least one hit and
    returns every hit from that level, in the order of ``names``.

    Args:
        names: Candidate file names.
        directory: Starting point; defaults to the current working directory.

    Returns:
        Absolute paths found at the nearest level, or an empty list.
    """
    current = os.path.abspath(directory if directory is not None else os.getcwd())
    while True:
        found = [
            os.path.join(current, name)
            for name in names
            if os.path.isfile(os.path.join(current, name))
        ]
        if found:
            return found

        parent = os.path.dirname(current)
        if parent == current:
            return []
        current = parent
