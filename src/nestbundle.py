"""nestbundle - Build a NestJS monorepo app and package it for a Node.js Lambda function

    Raises:
        SystemExit: always, with one of ``constants.ExitCodes``.
"""
import logging
import os
import sys

from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, Constants
from args import parse_args
from cli_config import build_function_props, default_config_path, load_config
from bundling import (
    Bundling,
    BundlingCommandOptions,
    BundlingError,
    ConfigError,
    ExecutionError,
    InvalidOptionError,
    LockFileError,
    ManifestError,
    UnresolvedDependencyError,
    UnsupportedRuntimeError,
    resolve_function_props,
)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    if getattr(args, "QUIET", False):
        logging.getLogger().setLevel(logging.ERROR)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
        logging.getLogger().addHandler(file_handler)
        logging.info("Logging to file: %s", log_file)


def _exit_code_for(error):
    if isinstance(error, (LockFileError, ManifestError, ConfigError)):
        return ExitCodes.FILE_ERROR
    if isinstance(error, UnresolvedDependencyError):
        return ExitCodes.DEPENDENCY_ERROR
    if isinstance(error, ExecutionError):
        return ExitCodes.EXECUTION_ERROR
    if isinstance(error, (UnsupportedRuntimeError, InvalidOptionError)):
        return ExitCodes.USAGE_ERROR
    return ExitCodes.FILE_ERROR


def run(args):
    """Run one bundling operation described by parsed ``args``.

    Returns:
        ExitCodes: SUCCESS when the bundle was produced or printed.

    Raises:
        BundlingError: any bundling failure, unchanged.
    """
    logger = logging.getLogger(__name__)

    config_path = args.CONFIG or default_config_path()
    config = {}
    if config_path:
        config = load_config(config_path)
        logger.info("Loaded configuration from: %s", config_path)

    props = build_function_props(args, config)
    function = resolve_function_props(props)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved function properties",
            extra=extra_context(
                event="decision",
                component="cli",
                action="resolve_function_props",
                handler=function.handler,
                runtime=function.runtime,
                architecture=function.architecture,
            ),
        )

    bundling = Bundling(function.bundling)
    output_dir = os.path.abspath(args.OUTPUT_DIR)

    if args.DRY_RUN:
        command = bundling.create_bundling_command(BundlingCommandOptions(
            input_dir=function.bundling.project_root,
            output_dir=output_dir,
            os_platform=args.PLATFORM,
        ))
        print(command)
        return ExitCodes.SUCCESS

    os.makedirs(output_dir, exist_ok=True)
    bundling.try_bundle(output_dir, os_platform=args.PLATFORM)
    logger.info("Bundle written to %s (handler %s)", output_dir, function.handler)
    return ExitCodes.SUCCESS


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    logging.info("Arguments parsed.")

    try:
        code = run(args)
    except BundlingError as e:
        logging.error("%s", e)
        sys.exit(_exit_code_for(e).value)
    sys.exit(code.value)


if __name__ == "__main__":
    main()
