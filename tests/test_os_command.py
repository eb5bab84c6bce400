"""Tests for OS aware command fragments."""

import pytest

from bundling.os_command import OsCommand, chain, os_path_join


class TestChain:
    def test_empty(self):
        assert chain([]) == ""

    def test_drops_empty_entries(self):
        assert chain(["a", "", "b"]) == "a && b"

    def test_all_empty(self):
        assert chain(["", None, ""]) == ""

    def test_single(self):
        assert chain(["npx nest build --webpack"]) == "npx nest build --webpack"


class TestOsCommandPosix:
    def setup_method(self):
        self.cmd = OsCommand("linux")

    def test_write_json_compact_single_quoted(self):
        result = self.cmd.write_json("/out/package.json", {"dependencies": {"axios": "^1.2.0"}})
        assert result == "echo '{\"dependencies\":{\"axios\":\"^1.2.0\"}}' > \"/out/package.json\""

    def test_copy(self):
        assert self.cmd.copy("/a/yarn.lock", "/out/yarn.lock") == 'cp "/a/yarn.lock" "/out/yarn.lock"'

    def test_copy_dir_contents_glob_outside_quotes(self):
        assert self.cmd.copy_dir_contents("/p/dist/apps/api", "/out") == 'cp -r "/p/dist/apps/api"/* "/out"'

    def test_change_directory(self):
        assert self.cmd.change_directory("/out dir") == 'cd "/out dir"'

    def test_darwin_is_posix(self):
        assert OsCommand("darwin").copy("a", "b") == 'cp "a" "b"'


class TestOsCommandWindows:
    def setup_method(self):
        self.cmd = OsCommand("win32")

    def test_write_json_caret_escaped(self):
        result = self.cmd.write_json("C:\\out\\package.json", {"dependencies": {"axios": "^1.2.0"}})
        assert result == 'echo ^{"dependencies":{"axios":"^1.2.0"}}^ > "C:\\out\\package.json"'

    def test_copy(self):
        assert self.cmd.copy("C:\\a\\yarn.lock", "C:\\out\\yarn.lock") == 'copy "C:\\a\\yarn.lock" "C:\\out\\yarn.lock"'

    def test_copy_dir_contents(self):
        assert self.cmd.copy_dir_contents("C:\\p\\dist", "C:\\out") == 'xcopy "C:\\p\\dist" "C:\\out" /E /I /Y /Q'

    def test_change_directory(self):
        assert self.cmd.change_directory("C:\\out") == 'cd "C:\\out"'


class TestOsPathJoin:
    def test_posix_host_posix_target(self):
        join = os_path_join("linux", host_platform="linux")
        assert join("/project", "dist", "apps") == "/project/dist/apps"

    def test_posix_host_never_rewrites_separators(self):
        join = os_path_join("win32", host_platform="linux")
        assert join("/project", "a\\b") == "/project/a\\b"

    def test_windows_host_posix_target_converts_backslashes(self):
        join = os_path_join("linux", host_platform="win32")
        assert join("C:\\project", "dist\\apps", "main.js") == "C:/project/dist/apps/main.js"

    def test_windows_host_windows_target_keeps_backslashes(self):
        join = os_path_join("win32", host_platform="win32")
        assert join("C:\\project", "dist") == "C:\\project\\dist"

    @pytest.mark.parametrize("target", ["linux", "darwin", "freebsd"])
    def test_every_non_windows_target_is_posix(self, target):
        join = os_path_join(target, host_platform="win32")
        assert "\\" not in join("C:\\x", "y")

    def test_normalizes(self):
        join = os_path_join("linux", host_platform="linux")
        assert join("/project/dist/", "../package-lock.json") == "/project/package-lock.json"
