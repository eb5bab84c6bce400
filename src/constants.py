"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    DEPENDENCY_ERROR = 3
    EXECUTION_ERROR = 4


class LogLevel(Enum):
    """Log levels understood by the bundler and propagated to the package manager.

    Args:
        Enum (string): Log level names.
    """

    VERBOSE = "verbose"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SILENT = "silent"


class Architecture(Enum):
    """Lambda architectures. Passed through untouched."""

    X86_64 = "x86_64"
    ARM_64 = "arm64"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    PACKAGE_LOCK_FILE = "package-lock.json"
    YARN_LOCK_FILE = "yarn.lock"
    PNPM_LOCK_FILE = "pnpm-lock.yaml"

    WIN32_PLATFORM = "win32"

    NEST_BUILD_COMMAND = ["npx", "nest", "build"]
    NEST_BUILD_MODE_FLAG = "--webpack"
    DEFAULT_ENTRY_TEMPLATE = "dist/apps/{project}/main.js"
    ENTRY_MODULE = "main"

    DEFAULT_HANDLER = "handler"
    DEFAULT_RUNTIME = "nodejs14.x"
    NODEJS_RUNTIME_PREFIX = "nodejs"
    DEFAULT_ARCHITECTURE = Architecture.X86_64.value
    DEFAULT_LOG_LEVEL = LogLevel.WARNING.value
    CONNECTION_REUSE_ENV = "AWS_NODEJS_CONNECTION_REUSE_ENABLED"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_LOG_LEVEL = "NESTBUNDLE_LOG_LEVEL"
    ENV_CONFIG = "NESTBUNDLE_CONFIG"
    DEFAULT_CONFIG_FILES = ["nestbundle.yml", "nestbundle.yaml", ".nestbundle.yml"]
