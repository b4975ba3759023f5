"""
Unit tests for the search command executor.
"""

import os
import shutil
import subprocess
import sys
from unittest.mock import patch, MagicMock

import pytest

from smartfind.models.config import ToolsConfig
from smartfind.models.search_command import SearchCommand
from smartfind.tools.executor import CommandExecutor, CommandExecutionError


def completed(stdout="", returncode=0):
    return MagicMock(stdout=stdout, returncode=returncode)


class TestCommandExecutor:
    """Test cases for CommandExecutor."""

    def test_alias_and_working_directory(self, tmp_path):
        tools = ToolsConfig(aliases={"fd": "fdfind"}, working_directory=str(tmp_path))
        executor = CommandExecutor(tools, timeout_seconds=7)

        with patch("smartfind.tools.executor.subprocess.run", return_value=completed("a.py\n")) as run:
            result = executor.execute(SearchCommand(argv=["fd", "-e", "py"]))

        assert result.stdout == "a.py\n"
        assert result.succeeded
        assert run.call_args.args[0] == ["fdfind", "-e", "py"]
        assert run.call_args.kwargs["cwd"] == str(tmp_path)
        assert run.call_args.kwargs["timeout"] == 7

    def test_nonzero_exit_is_not_an_error(self):
        executor = CommandExecutor()
        with patch("smartfind.tools.executor.subprocess.run", return_value=completed("", returncode=1)):
            result = executor.execute(SearchCommand(argv=["rg", "-l", "nothing"]))

        assert result.exit_status == 1
        assert not result.succeeded

    def test_missing_tool_raises(self):
        executor = CommandExecutor()
        with patch("smartfind.tools.executor.subprocess.run", side_effect=FileNotFoundError("rg")):
            with pytest.raises(CommandExecutionError, match="Search tool not found: rg"):
                executor.execute(SearchCommand(argv=["rg", "-l", "x"]))

    def test_timeout_raises(self):
        executor = CommandExecutor(timeout_seconds=1)
        error = subprocess.TimeoutExpired(cmd="fd", timeout=1)
        with patch("smartfind.tools.executor.subprocess.run", side_effect=error):
            with pytest.raises(CommandExecutionError, match="timed out"):
                executor.execute(SearchCommand(argv=["fd"]))

    def test_collect_parses_output(self):
        executor = CommandExecutor()
        with patch("smartfind.tools.executor.subprocess.run", return_value=completed("b.py\na.py\nb.py\n")):
            results = executor.collect(SearchCommand(argv=["fd"]))

        assert results.paths == ["b.py", "a.py"]

    def test_collect_degrades_to_empty(self):
        executor = CommandExecutor()
        with patch("smartfind.tools.executor.subprocess.run", side_effect=FileNotFoundError("fd")):
            results = executor.collect(SearchCommand(argv=["fd"]))

        assert results.is_empty()

    def test_collect_with_limit(self):
        executor = CommandExecutor()
        output = "\n".join(f"f{i}" for i in range(10))
        with patch("smartfind.tools.executor.subprocess.run", return_value=completed(output)):
            results = executor.collect(SearchCommand(argv=["fd"]), limit=3)

        assert results.paths == ["f0", "f1", "f2"]

    @pytest.mark.skipif(shutil.which("find") is None, reason="find not installed")
    def test_runs_real_command(self, tmp_path):
        (tmp_path / "notes.md").write_text("hello")
        executor = CommandExecutor(ToolsConfig(working_directory=str(tmp_path)))

        results = executor.collect(SearchCommand(argv=["find", ".", "-type", "f", "-name", "*.md"]))

        assert results.paths == ["./notes.md"]

    def test_collect_records_failure(self):
        executor = CommandExecutor()
        errors = []
        with patch("smartfind.tools.executor.subprocess.run", side_effect=FileNotFoundError("rg")):
            results = executor.collect(SearchCommand(argv=["rg", "-l", "x"]), errors=errors)

        assert results.is_empty()
        assert errors == ["Search command failed: Search tool not found: rg"]

    def test_output_decoding_keeps_raw_bytes(self):
        executor = CommandExecutor()
        with patch("smartfind.tools.executor.subprocess.run", return_value=completed("a.py\n")) as run:
            executor.execute(SearchCommand(argv=["fd"]))

        assert run.call_args.kwargs["encoding"] == "utf-8"
        assert run.call_args.kwargs["errors"] == "surrogateescape"

    @pytest.mark.skipif(
        sys.platform != "linux" or shutil.which("find") is None,
        reason="needs find and a filesystem that accepts non-UTF-8 names",
    )
    def test_non_utf8_filename_round_trips(self, tmp_path):
        name = os.fsdecode(b"caf\xe9.md")
        (tmp_path / name).write_text("menu")
        executor = CommandExecutor(ToolsConfig(working_directory=str(tmp_path)))

        results = executor.collect(SearchCommand(argv=["find", ".", "-type", "f"]))

        assert results.paths == [f"./{name}"]
        assert (tmp_path / results.paths[0]).exists()
