"""Exceptions raised while preparing or running a bundling operation.

Every error aborts the whole operation. Messages always name the paths or
dependency names involved.
"""

from __future__ import annotations

from typing import Optional, Sequence


class BundlingError(Exception):
    """Base class for all bundler failures."""


class LockFileError(BundlingError):
    """Lock file could not be located or validated."""


class NotFoundError(LockFileError):
    """An explicit lock file path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Lock file at {path} doesn't exist")


class InvalidTargetError(LockFileError):
    """An explicit lock file path exists but is not a regular file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Lock file path {path} should point to a file")


class NoLockFileError(LockFileError):
    """No lock file found in the directory or any of its parents."""

    def __init__(self, directory: str, names: Sequence[str]):
        self.directory = directory
        self.names = list(names)
        quoted = ", ".join(f"`{n}`" for n in self.names)
        super().__init__(
            f"Cannot find a package lock file ({quoted}) in {directory} or any parent "
            "directory. Please specify it with `deps_lock_file_path`."
        )


class AmbiguousLockFileError(LockFileError):
    """Several lock files found at the same directory level."""

    def __init__(self, candidates: Sequence[str]):
        self.candidates = list(candidates)
        super().__init__(
            f"Multiple package lock files found: {', '.join(self.candidates)}. "
            "Please specify the desired one with `deps_lock_file_path`."
        )


class ManifestError(BundlingError):
    """package.json could not be located or read."""


class ManifestNotFoundError(ManifestError):
    """No package.json at or above the starting path."""

    def __init__(self, start: str):
        self.start = start
        super().__init__(
            f"Cannot find a `package.json` at or above {start}. "
            "Using `node_modules` requires a `package.json`."
        )


class MalformedManifestError(ManifestError):
    """package.json cannot be read as a JSON object."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path}: {reason}")


class UnresolvedDependencyError(BundlingError):
    """One or more requested modules are not declared in package.json."""

    def __init__(self, missing: Sequence[str], manifest_path: str):
        self.missing = list(missing)
        self.manifest_path = manifest_path
        names = ", ".join(f"'{m}'" for m in self.missing)
        super().__init__(
            f"Cannot extract version for module(s) {names}. "
            f"Check that they are referenced in {manifest_path}."
        )


class ExecutionError(BundlingError):
    """The bundling command exited with a non-zero status."""

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: int,
        cwd: Optional[str] = None,
        stdout: Optional[str] = None,
        stderr: Optional[str] = None,
    ):
        self.command = command
        self.command_args = list(args)
        self.returncode = returncode
        self.cwd = cwd
        self.stdout = stdout
        self.stderr = stderr
        if stdout or stderr:
            message = (
                f"[Status {returncode}] stdout: {(stdout or '').strip()}\n\n\n"
                f"stderr: {(stderr or '').strip()}"
            )
        else:
            where = f" run in directory {cwd}" if cwd else ""
            message = f"{command} {' '.join(self.command_args)}{where} exited with status {returncode}"
        super().__init__(message)


class UnsupportedRuntimeError(BundlingError):
    """The function runtime is not a Node.js runtime."""

    def __init__(self, runtime: str):
        self.runtime = runtime
        super().__init__(f"Only `NODEJS` runtimes are supported, got {runtime!r}.")


class InvalidOptionError(BundlingError, ValueError):
    """An option value is outside its accepted set."""

    def __init__(self, option: str, value: object, reason: str):
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid `{option}` value {value!r}: {reason}")


class ConfigError(BundlingError):
    """A configuration file is missing, unreadable or not a mapping."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration file {path}: {reason}")
