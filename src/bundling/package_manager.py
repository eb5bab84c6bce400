"""Install semantics per package manager, selected from the lock file name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from constants import LogLevel
from bundling.errors import InvalidOptionError
from bundling.lockfile import LockFile, ResolvedLockFile

# npm has its own level names.
_NPM_LOG_LEVELS: Dict[LogLevel, str] = {
    LogLevel.VERBOSE: "verbose",
    LogLevel.DEBUG: "verbose",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warn",
    LogLevel.ERROR: "error",
    LogLevel.SILENT: "silent",
}

_PNPM_LINKER_FLAGS = [
    "--config.node-linker=hoisted",
    "--config.package-import-method=clone-or-copy",
]


def _coerce_log_level(log_level: Union[LogLevel, str, None]) -> Optional[LogLevel]:
    if log_level is None or isinstance(log_level, LogLevel):
        return log_level
    try:
        return LogLevel(str(log_level).lower())
    except ValueError as e:
        raise InvalidOptionError(
            "log_level", log_level, "expected one of " + ", ".join(level.value for level in LogLevel)
        ) from e


@dataclass(frozen=True)
class PackageManager:
    """A package manager as seen by the bundler."""
    lock_file: str
    install_command: Tuple[str, ...]

    @classmethod
    def from_lock_file(
        cls,
        lock_file: Union[str, ResolvedLockFile],
        log_level: Union[LogLevel, str, None] = None,
    ) -> "PackageManager":
        """Pick the package manager governing ``lock_file``.

        Args:
            lock_file: Lock file path or an already resolved lock file.
            log_level: Bundler log level. Anything other than INFO makes the
                install quieter; it never changes the chosen manager.

        Returns:
            PackageManager for the lock file kind (npm when the name is unknown).
        """
        if isinstance(lock_file, ResolvedLockFile):
            kind = lock_file.kind
        else:
            kind = LockFile.from_path(lock_file)

        level = _coerce_log_level(log_level)
        quiet = level is not None and level != LogLevel.INFO

        if kind == LockFile.YARN:
            install = ["yarn", "install", "--no-immutable"]
            if quiet:
                install.append("--silent")
            return cls(
                lock_file=LockFile.YARN.value,
                install_command=tuple(install),
            )

        if kind == LockFile.PNPM:
            install = ["pnpm", "install"]
            if quiet:
                install.extend(["--reporter", "silent"])
            install.extend(_PNPM_LINKER_FLAGS)
            return cls(
                lock_file=LockFile.PNPM.value,
                install_command=tuple(install),
            )

        install = ["npm", "ci"]
        if quiet:
            install.extend(["--loglevel", _NPM_LOG_LEVELS[level]])
        return cls(
            lock_file=LockFile.NPM.value,
            install_command=tuple(install),
        )

