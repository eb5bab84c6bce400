"""Configuration file loading and CLI override merging.

Precedence, highest first: CLI arguments, configuration file, built-in
defaults. Configuration files are YAML (``.yml``/``.yaml``) or JSON.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from bundling.errors import ConfigError
from bundling.function import FunctionProps
from constants import Constants, LogLevel

logger = logging.getLogger(__name__)

PACKAGE_LOG_LEVELS = [level.value for level in LogLevel]

# Keys accepted at the top level of a configuration file.
FUNCTION_KEYS = [
    "project",
    "entry",
    "project_root",
    "deps_lock_file_path",
    "handler",
    "runtime",
    "architecture",
    "node_modules",
    "log_level",
    "aws_sdk_connection_reuse",
    "environment",
]

# CLI dest -> FunctionProps field
CLI_OVERRIDES = {
    "PROJECT": "project",
    "ENTRY": "entry",
    "PROJECT_ROOT": "project_root",
    "LOCK_FILE": "deps_lock_file_path",
    "HANDLER": "handler",
    "RUNTIME": "runtime",
    "ARCHITECTURE": "architecture",
    "NODE_MODULES": "node_modules",
    "PACKAGE_LOG_LEVEL": "log_level",
}


def default_config_path(cwd: Optional[str] = None) -> Optional[str]:
    """Return the configuration file used when none is given explicitly.

    ``NESTBUNDLE_CONFIG`` wins, then the first existing default file name in
    ``cwd``.
    """
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path and env_path.strip():
        return env_path.strip()

    base = cwd if cwd is not None else os.getcwd()
    for name in Constants.DEFAULT_CONFIG_FILES:
        candidate = os.path.join(base, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file.

    Raises:
        ConfigError: the file is missing, unparsable or not a mapping.
    """
    if not os.path.isfile(path):
        raise ConfigError(path, "file not found")

    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(path, str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(path, "top level must be a mapping")
    return _flatten(data, path)


def _flatten(data: Dict[str, Any], path: str) -> Dict[str, Any]:
    """Lift the optional ``bundling`` section and drop unknown keys."""
    cfg = {k: v for k, v in data.items() if k in FUNCTION_KEYS}

    bundling = data.get("bundling")
    if bundling is not None:
        if not isinstance(bundling, dict):
            raise ConfigError(path, "`bundling` must be a mapping")
        for key in ("node_modules", "log_level"):
            if key in bundling and key not in cfg:
                cfg[key] = bundling[key]

    unknown = sorted(set(data) - set(FUNCTION_KEYS) - {"bundling"})
    if unknown:
        logger.warning("Ignoring unknown configuration keys in %s: %s", path, ", ".join(unknown))

    node_modules = cfg.get("node_modules")
    if node_modules is not None:
        if not isinstance(node_modules, list):
            raise ConfigError(path, "`node_modules` must be a list of module names")
        if any(not isinstance(m, str) or not m.strip() for m in node_modules):
            raise ConfigError(path, "`node_modules` entries must be non-empty strings")
    log_level = cfg.get("log_level")
    if log_level is not None and str(log_level).lower() not in PACKAGE_LOG_LEVELS:
        raise ConfigError(
            path, f"`log_level` must be one of {', '.join(PACKAGE_LOG_LEVELS)}, got {log_level!r}"
        )
    environment = cfg.get("environment")
    if environment is not None and not isinstance(environment, dict):
        raise ConfigError(path, "`environment` must be a mapping")
    return cfg


def build_function_props(args: Any, config: Optional[Dict[str, Any]] = None) -> FunctionProps:
    """Merge configuration values and CLI arguments into FunctionProps."""
    merged: Dict[str, Any] = dict(config or {})

    for dest, key in CLI_OVERRIDES.items():
        value = getattr(args, dest, None)
        if value is None or value == []:
            continue
        merged[key] = value

    if getattr(args, "NO_CONNECTION_REUSE", False):
        merged["aws_sdk_connection_reuse"] = False

    environment = {str(k): str(v) for k, v in (merged.get("environment") or {}).items()}
    node_modules: Optional[List[str]] = merged.get("node_modules")

    return FunctionProps(
        project=merged.get("project"),
        entry=merged.get("entry"),
        project_root=merged.get("project_root"),
        deps_lock_file_path=merged.get("deps_lock_file_path"),
        handler=merged.get("handler"),
        runtime=merged.get("runtime"),
        architecture=merged.get("architecture"),
        node_modules=[str(m) for m in node_modules] if node_modules else None,
        log_level=str(merged["log_level"]).lower() if merged.get("log_level") else None,
        aws_sdk_connection_reuse=bool(merged.get("aws_sdk_connection_reuse", True)),
        environment=environment,
    )
