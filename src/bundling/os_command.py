"""OS aware command line fragments.

Everything here is a pure string transform: commands can be built, logged and
tested for any target platform without touching the filesystem. Platforms are
``sys.platform`` style tags; ``win32`` is Windows, anything else is POSIX.
"""

from __future__ import annotations

import json
import ntpath
import posixpath
import sys
from typing import Any, Callable, Iterable, Optional

from constants import Constants


def is_windows(os_platform: str) -> bool:
    return os_platform == Constants.WIN32_PLATFORM


class OsCommand:
    """OS agnostic command builder bound to a target platform."""

    def __init__(self, os_platform: str):
        self.os_platform = os_platform

    def write_json(self, file_path: str, data: Any) -> str:
        """Write ``data`` as compact JSON to ``file_path``."""
        stringified = json.dumps(data, separators=(",", ":"))
        if is_windows(self.os_platform):
            return f'echo ^{stringified}^ > "{file_path}"'
        return f"echo '{stringified}' > \"{file_path}\""

    def copy(self, src: str, dest: str) -> str:
        if is_windows(self.os_platform):
            return f'copy "{src}" "{dest}"'
        return f'cp "{src}" "{dest}"'

    def copy_dir_contents(self, src_dir: str, dest: str) -> str:
        """Recursively copy everything inside ``src_dir`` into ``dest``."""
        if is_windows(self.os_platform):
            return f'xcopy "{src_dir}" "{dest}" /E /I /Y /Q'
        # glob must stay outside the quotes
        return f'cp -r "{src_dir}"/* "{dest}"'

    def change_directory(self, directory: str) -> str:
        return f'cd "{directory}"'


def chain(commands: Iterable[Optional[str]]) -> str:
    """Chain commands with ``&&``, dropping empty entries."""
    return " && ".join(c for c in commands if c)


def os_path_join(os_platform: str, host_platform: Optional[str] = None) -> Callable[..., str]:
    """Platform specific path join.

    Paths are joined with the host's native rules. When the host is Windows
    but the target expects POSIX paths, backslashes become forward slashes.
    POSIX paths are never rewritten to backslashes.

    Args:
        os_platform: Platform the command will run on.
        host_platform: Platform building the command; defaults to ``sys.platform``.
    """
    host = host_platform if host_platform is not None else sys.platform
    native = ntpath if is_windows(host) else posixpath

    def join(*paths: str) -> str:
        joined = native.normpath(native.join(*paths))
        if is_windows(host) and not is_windows(os_platform):
            return joined.replace("\\", "/")
        return joined

    return join
