"""Nest application bundling for Node.js Lambda functions.

Locates the governing lock file, picks the package manager, resolves versions
of the modules to ship and builds the chained shell command producing the
deployment directory.
"""

from .errors import (
    AmbiguousLockFileError,
    BundlingError,
    ConfigError,
    ExecutionError,
    InvalidOptionError,
    InvalidTargetError,
    LockFileError,
    MalformedManifestError,
    ManifestError,
    ManifestNotFoundError,
    NoLockFileError,
    NotFoundError,
    UnresolvedDependencyError,
    UnsupportedRuntimeError,
)
from .lockfile import LockFile, ResolvedLockFile, resolve_lock_file
from .package_manager import PackageManager
from .dependencies import extract_dependencies, find_package_json, load_manifest
from .os_command import OsCommand, chain, os_path_join
from .orchestrator import Bundling, BundlingCommandOptions, BundlingProps
from .function import FunctionConfig, FunctionProps, resolve_function_props

__all__ = [
    "AmbiguousLockFileError",
    "BundlingError",
    "ConfigError",
    "ExecutionError",
    "InvalidOptionError",
    "InvalidTargetError",
    "LockFileError",
    "MalformedManifestError",
    "ManifestError",
    "ManifestNotFoundError",
    "NoLockFileError",
    "NotFoundError",
    "UnresolvedDependencyError",
    "UnsupportedRuntimeError",
    "LockFile",
    "ResolvedLockFile",
    "resolve_lock_file",
    "PackageManager",
    "extract_dependencies",
    "find_package_json",
    "load_manifest",
    "OsCommand",
    "chain",
    "os_path_join",
    "Bundling",
    "BundlingCommandOptions",
    "BundlingProps",
    "FunctionConfig",
    "FunctionProps",
    "resolve_function_props",
]
