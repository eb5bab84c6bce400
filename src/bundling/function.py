"""Defaults for a Nest application deployed as a Node.js Lambda function."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from constants import Constants, LogLevel
from bundling.errors import InvalidOptionError, UnsupportedRuntimeError
from bundling.lockfile import resolve_lock_file
from bundling.orchestrator import BundlingProps


@dataclass
class FunctionProps:
    """User facing function properties; every field is optional."""
    project: Optional[str] = None
    entry: Optional[str] = None
    project_root: Optional[str] = None
    deps_lock_file_path: Optional[str] = None
    handler: Optional[str] = None
    runtime: Optional[str] = None
    architecture: Optional[str] = None
    node_modules: Optional[Sequence[str]] = None
    log_level: Optional[str] = None
    aws_sdk_connection_reuse: bool = True
    environment: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FunctionConfig:
    """Resolved function settings handed to the deployment layer."""
    handler: str
    runtime: str
    architecture: str
    environment: Dict[str, str]
    bundling: BundlingProps


def resolve_function_props(props: FunctionProps, cwd: Optional[str] = None) -> FunctionConfig:
    """Fill in defaults and locate the lock file.

    Args:
        props: Function properties.
        cwd: Where lock file discovery starts; defaults to the working directory.

    Raises:
        UnsupportedRuntimeError: the runtime is not a Node.js runtime.
        InvalidOptionError: an empty module name or an unknown log level.
        LockFileError: see ``resolve_lock_file``.
    """
    if props.runtime and not props.runtime.startswith(Constants.NODEJS_RUNTIME_PREFIX):
        raise UnsupportedRuntimeError(props.runtime)
    for name in props.node_modules or ():
        if not isinstance(name, str) or not name.strip():
            raise InvalidOptionError("node_modules", name, "module names must be non-empty strings")
    if props.log_level and props.log_level.lower() not in [level.value for level in LogLevel]:
        raise InvalidOptionError("log_level", props.log_level, "unknown package manager log level")

    handler = props.handler or Constants.DEFAULT_HANDLER
    runtime = props.runtime or Constants.DEFAULT_RUNTIME
    architecture = props.architecture or Constants.DEFAULT_ARCHITECTURE
    lock_file = resolve_lock_file(props.deps_lock_file_path, cwd)
    project_root = os.path.abspath(props.project_root or os.path.dirname(lock_file.path))

    if props.entry:
        entry = os.path.abspath(props.entry)
    else:
        entry = os.path.abspath(os.path.join(
            project_root,
            Constants.DEFAULT_ENTRY_TEMPLATE.format(project=props.project),
        ))

    environment = dict(props.environment)
    if props.aws_sdk_connection_reuse:
        environment[Constants.CONNECTION_REUSE_ENV] = "1"

    return FunctionConfig(
        handler=f"{Constants.ENTRY_MODULE}.{handler}",
        runtime=runtime,
        architecture=architecture,
        environment=environment,
        bundling=BundlingProps(
            entry=entry,
            project_root=project_root,
            deps_lock_file_path=lock_file.path,
            runtime=runtime,
            architecture=architecture,
            project=props.project,
            node_modules=tuple(props.node_modules) if props.node_modules else None,
            log_level=props.log_level or Constants.DEFAULT_LOG_LEVEL,
        ),
    )
