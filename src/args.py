"""Argument parsing functionality for nestbundle."""

import argparse
import sys

from constants import Constants, LogLevel


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="nestbundle",
        description=(
            "nestbundle - Build a NestJS monorepo app and package it for a Node.js Lambda function"
        ),
        add_help=True,
    )

    parser.add_argument("-o", "--output-dir",
                        dest="OUTPUT_DIR",
                        help="Directory receiving the bundle",
                        action="store",
                        type=str,
                        required=True)
    parser.add_argument("-p", "--project",
                        dest="PROJECT",
                        help="Nest monorepo project to build",
                        action="store",
                        type=str)
    parser.add_argument("-e", "--entry",
                        dest="ENTRY",
                        help="Compiled entry file (default: <project-root>/dist/apps/<project>/main.js)",
                        action="store",
                        type=str)
    parser.add_argument("--project-root",
                        dest="PROJECT_ROOT",
                        help="Project root (default: directory of the lock file)",
                        action="store",
                        type=str)
    parser.add_argument("--lockfile",
                        dest="LOCK_FILE",
                        help="Path to the dependency lock file (pnpm-lock.yaml, yarn.lock or package-lock.json)",
                        action="store",
                        type=str)
    parser.add_argument("-m", "--node-module",
                        dest="NODE_MODULES",
                        help="Module to install next to the bundle (can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--handler",
                        dest="HANDLER",
                        help="Exported handler function (default: handler)",
                        action="store",
                        type=str)
    parser.add_argument("--runtime",
                        dest="RUNTIME",
                        help=f"Node.js Lambda runtime (default: {Constants.DEFAULT_RUNTIME})",
                        action="store",
                        type=str)
    parser.add_argument("--architecture",
                        dest="ARCHITECTURE",
                        help=f"Lambda architecture (default: {Constants.DEFAULT_ARCHITECTURE})",
                        action="store",
                        type=str)
    parser.add_argument("--package-log-level",
                        dest="PACKAGE_LOG_LEVEL",
                        help="Log level propagated to the package manager install",
                        action="store",
                        type=str.lower,
                        choices=[level.value for level in LogLevel])
    parser.add_argument("--no-connection-reuse",
                        dest="NO_CONNECTION_REUSE",
                        help="Do not set AWS_NODEJS_CONNECTION_REUSE_ENABLED",
                        action="store_true")
    parser.add_argument("--platform",
                        dest="PLATFORM",
                        help="Target platform of the command (default: this host, e.g. linux, darwin, win32)",
                        action="store",
                        type=str,
                        default=sys.platform)
    parser.add_argument("--dry-run",
                        dest="DRY_RUN",
                        help="Print the bundling command instead of running it",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default="INFO")
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors to the console.",
                        action="store_true")

    return parser.parse_args(argv)
