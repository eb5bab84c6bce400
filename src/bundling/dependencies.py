"""Resolve declared versions for the modules installed next to the bundle.

Versions are read from package.json exactly as declared; nothing is resolved
against the lock file or the registry.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List

from common.fs_utils import find_up
from constants import Constants
from bundling.errors import (
    InvalidOptionError,
    MalformedManifestError,
    ManifestNotFoundError,
    UnresolvedDependencyError,
)

logger = logging.getLogger(__name__)

# First section declaring a module wins.
DEPENDENCY_SECTIONS = ["dependencies", "peerDependencies", "devDependencies"]


def find_package_json(start: str) -> str:
    """Return the package.json closest to ``start`` (a file or directory).

    Raises:
        ManifestNotFoundError: when no package.json exists up to the root.
    """
    found = find_up(Constants.PACKAGE_JSON_FILE, start)
    if not found:
        raise ManifestNotFoundError(start)
    return found


def load_manifest(manifest_path: str) -> Dict[str, Any]:
    """Parse a package.json file.

    Raises:
        ManifestNotFoundError: the file vanished or cannot be opened.
        MalformedManifestError: unreadable, invalid JSON or not a JSON object.
    """
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestNotFoundError(manifest_path) from e
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedManifestError(manifest_path, str(e)) from e

    if not isinstance(data, dict):
        raise MalformedManifestError(manifest_path, "top level is not a JSON object")
    return data


def extract_dependencies(manifest_path: str, modules: Iterable[str]) -> Dict[str, str]:
    """Extract the declared versions of ``modules``.

    Args:
        manifest_path: package.json, or any path under the project; the
            closest package.json at or above it is used.
        modules: Module names to resolve.

    Returns:
        Mapping of every requested module to its declared version string.

    Raises:
        InvalidOptionError: a requested name is empty.
        ManifestNotFoundError, MalformedManifestError: manifest problems.
        UnresolvedDependencyError: lists every module missing from all sections.
    """
    names = list(modules)
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise InvalidOptionError("node_modules", name, "module names must be non-empty strings")

    if os.path.basename(manifest_path) == Constants.PACKAGE_JSON_FILE and os.path.isfile(manifest_path):
        pkg_path = manifest_path
    else:
        pkg_path = find_package_json(manifest_path)

    manifest = load_manifest(pkg_path)

    dependencies: Dict[str, str] = {}
    missing: List[str] = []
    for name in names:
        for section in DEPENDENCY_SECTIONS:
            declared = manifest.get(section) or {}
            if isinstance(declared, dict) and name in declared:
                dependencies[name] = declared[name]
                break
        else:
            missing.append(name)

    if missing:
        raise UnresolvedDependencyError(missing, pkg_path)

    logger.debug("Resolved %d module version(s) from %s", len(dependencies), pkg_path)
    return dependencies
