"""Lock file discovery and validation.

Exactly one lock file governs a bundle. It is either given explicitly or
discovered by walking up from the working directory; discovery stops at the
first directory holding any known lock file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.fs_utils import find_up_multiple
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from bundling.errors import (
    AmbiguousLockFileError,
    InvalidTargetError,
    NoLockFileError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class LockFile(Enum):
    """Known lock files; the value is the canonical file name."""
    PNPM = Constants.PNPM_LOCK_FILE
    YARN = Constants.YARN_LOCK_FILE
    NPM = Constants.PACKAGE_LOCK_FILE

    @classmethod
    def from_path(cls, path: str) -> "LockFile":
        """Infer the kind from a lock file path. Unknown names are treated as npm."""
        name = os.path.basename(path)
        for kind in cls:
            if kind.value == name:
                return kind
        return cls.NPM


# Discovery checks every name at a level in this order.
DISCOVERY_ORDER = [LockFile.PNPM, LockFile.YARN, LockFile.NPM]


@dataclass(frozen=True)
class ResolvedLockFile:
    """Absolute path to the governing lock file and its kind."""
    path: str
    kind: LockFile


def resolve_lock_file(
    explicit_path: Optional[str] = None,
    directory: Optional[str] = None,
) -> ResolvedLockFile:
    """Check the given lock file or search for one.

    Args:
        explicit_path: Lock file chosen by the caller. Must exist and be a file.
        directory: Where discovery starts when no explicit path is given;
            defaults to the current working directory.

    Returns:
        ResolvedLockFile with an absolute path.

    Raises:
        NotFoundError: explicit path does not exist.
        InvalidTargetError: explicit path is not a regular file.
        NoLockFileError: nothing found up to the filesystem root.
        AmbiguousLockFileError: several lock files at the nearest level.
    """
    if explicit_path:
        if not os.path.exists(explicit_path):
            raise NotFoundError(explicit_path)
        if not os.path.isfile(explicit_path):
            raise InvalidTargetError(explicit_path)
        resolved = os.path.abspath(explicit_path)
        logger.debug("Using explicit lock file %s", resolved)
        return ResolvedLockFile(path=resolved, kind=LockFile.from_path(resolved))

    start = os.path.abspath(directory if directory is not None else os.getcwd())
    names = [kind.value for kind in DISCOVERY_ORDER]
    candidates = find_up_multiple(names, start)

    if is_debug_enabled(logger):
        logger.debug(
            "Lock file discovery finished",
            extra=extra_context(
                event="discovery",
                component="lockfile",
                start=start,
                count=len(candidates),
            ),
        )

    if not candidates:
        raise NoLockFileError(start, names)
    if len(candidates) > 1:
        raise AmbiguousLockFileError(candidates)

    found = candidates[0]
    logger.info("Using lock file %s", found)
    return ResolvedLockFile(path=found, kind=LockFile.from_path(found))
