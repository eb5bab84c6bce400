"""Build a Nest monorepo app and assemble its deployment directory.

The bundle is produced by one chained shell command:

1. ``npx nest build [project] --webpack``
2. copy the compiled output (the entry's directory) into the output directory
3. optionally write a trimmed package.json, copy the lock file next to it,
   ``cd`` into the output directory and run the package manager install.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from common.logging_utils import Timer, extra_context, is_debug_enabled
from common import process
from constants import Constants
from bundling.dependencies import extract_dependencies, find_package_json
from bundling.errors import ExecutionError
from bundling.os_command import OsCommand, chain, is_windows, os_path_join
from bundling.package_manager import PackageManager

logger = logging.getLogger(__name__)

Executor = Callable[..., object]


def _output_text(value: object) -> Optional[str]:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class BundlingProps:
    """Inputs of one bundling operation."""
    entry: str
    project_root: str
    deps_lock_file_path: str
    runtime: str = Constants.DEFAULT_RUNTIME
    architecture: str = Constants.DEFAULT_ARCHITECTURE
    project: Optional[str] = None
    node_modules: Optional[Tuple[str, ...]] = None
    log_level: str = Constants.DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class BundlingCommandOptions:
    input_dir: str
    output_dir: str
    os_platform: str


class Bundling:
    """Bundling of a Nest application for a Node.js Lambda function."""

    def __init__(
        self,
        props: BundlingProps,
        executor: Optional[Executor] = None,
        host_platform: Optional[str] = None,
    ):
        self.props = props
        self.project_root = props.project_root
        self.relative_deps_lock_file_path = os.path.relpath(
            os.path.abspath(props.deps_lock_file_path), self.project_root
        )
        self.package_manager = PackageManager.from_lock_file(
            props.deps_lock_file_path, props.log_level
        )
        self.host_platform = host_platform if host_platform is not None else sys.platform
        self._executor = executor if executor is not None else process.exec_command

    @classmethod
    def bundle(cls, props: BundlingProps, output_dir: str, **kwargs) -> bool:
        """Build and package ``props`` into ``output_dir``."""
        return cls(props, **kwargs).try_bundle(output_dir)

    def build_command(self) -> str:
        parts = list(Constants.NEST_BUILD_COMMAND)
        if self.props.project:
            parts.append(self.props.project)
        parts.append(Constants.NEST_BUILD_MODE_FLAG)
        return " ".join(parts)

    def create_bundling_command(self, options: BundlingCommandOptions) -> str:
        """Compose the full bundling command for ``options.os_platform``."""
        path_join = os_path_join(options.os_platform, self.host_platform)
        os_command = OsCommand(options.os_platform)

        deps_command = ""
        if self.props.node_modules:
            # versions come from the package.json closest to the entry
            pkg_path = find_package_json(self.props.entry)
            dependencies = extract_dependencies(pkg_path, self.props.node_modules)

            lock_file_path = path_join(options.input_dir, self.relative_deps_lock_file_path)

            deps_command = chain([
                os_command.write_json(
                    path_join(options.output_dir, Constants.PACKAGE_JSON_FILE),
                    {"dependencies": dependencies},
                ),
                os_command.copy(
                    lock_file_path,
                    path_join(options.output_dir, self.package_manager.lock_file),
                ),
                os_command.change_directory(options.output_dir),
                " ".join(self.package_manager.install_command),
            ])

        build_output_dir = path_join(os.path.dirname(self.props.entry))
        return chain([
            self.build_command(),
            os_command.copy_dir_contents(build_output_dir, options.output_dir),
            deps_command,
        ])

    def shell_invocation(self, command: str, os_platform: Optional[str] = None) -> Tuple[str, Sequence[str]]:
        """Shell and arguments running ``command`` on ``os_platform``."""
        platform = os_platform if os_platform is not None else self.host_platform
        if is_windows(platform):
            return "cmd", ["/c", command]
        return "bash", ["-c", command]

    def execute(self, command: str, cwd: Optional[str] = None, os_platform: Optional[str] = None) -> bool:
        """Run ``command`` through the platform shell.

        The executor either raises ExecutionError itself or returns a result;
        ``False`` or a non-zero ``returncode`` on that result is a failure too.

        Raises:
            ExecutionError: the command failed.
        """
        platform = os_platform if os_platform is not None else self.host_platform
        shell, args = self.shell_invocation(command, platform)
        run_dir = cwd if cwd is not None else self.project_root
        result = self._executor(shell, args, cwd=run_dir, verbatim=is_windows(platform))

        if result is False:
            raise ExecutionError(shell, args, 1, cwd=run_dir)
        returncode = getattr(result, "returncode", 0)
        if isinstance(returncode, int) and returncode != 0:
            raise ExecutionError(
                shell,
                args,
                returncode,
                cwd=run_dir,
                stdout=_output_text(getattr(result, "stdout", None)),
                stderr=_output_text(getattr(result, "stderr", None)),
            )
        return True

    def try_bundle(self, output_dir: str, os_platform: Optional[str] = None) -> bool:
        """Run the bundling command locally.

        Args:
            output_dir: Directory receiving the bundle.
            os_platform: Target platform; defaults to the host platform.

        Returns:
            True once the command succeeded.

        Raises:
            ExecutionError: the command exited with a non-zero status.
        """
        platform = os_platform if os_platform is not None else self.host_platform
        command = self.create_bundling_command(BundlingCommandOptions(
            input_dir=self.project_root,
            output_dir=output_dir,
            os_platform=platform,
        ))
        logger.info("%s", command)

        with Timer() as t:
            self.execute(command, cwd=self.project_root, os_platform=platform)

        if is_debug_enabled(logger):
            logger.debug(
                "Bundling finished",
                extra=extra_context(
                    event="bundle",
                    component="orchestrator",
                    outcome="success",
                    output_dir=output_dir,
                    duration_ms=t.duration_ms(),
                ),
            )
        return True
