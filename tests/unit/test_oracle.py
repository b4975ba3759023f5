"""
Unit tests for the oracle client.
"""

import subprocess
from unittest.mock import patch, MagicMock

from smartfind.models.config import OracleConfig
from smartfind.tools.oracle import OracleClient


def completed(stdout="", returncode=0):
    return MagicMock(stdout=stdout, returncode=returncode)


class TestOracleClient:
    """Test cases for OracleClient."""

    def setup_method(self):
        self.config = OracleConfig(command=["llm", "-m", "fast"], timeout_seconds=5)
        self.client = OracleClient(self.config)

    def test_prompt_is_last_argument(self):
        with patch("smartfind.tools.oracle.subprocess.run", return_value=completed("src/a.py\n")) as run:
            response = self.client.ask("pick files")

        assert response == "src/a.py\n"
        argv = run.call_args.args[0]
        assert argv == ["llm", "-m", "fast", "pick files"]
        assert run.call_args.kwargs["timeout"] == 5
        assert run.call_args.kwargs["stderr"] == subprocess.DEVNULL

    def test_missing_program_returns_empty(self):
        with patch("smartfind.tools.oracle.subprocess.run", side_effect=FileNotFoundError("llm")):
            assert self.client.ask("prompt") == ""

    def test_timeout_returns_empty(self):
        error = subprocess.TimeoutExpired(cmd="llm", timeout=5)
        with patch("smartfind.tools.oracle.subprocess.run", side_effect=error):
            assert self.client.ask("prompt") == ""

    def test_nonzero_exit_returns_empty(self):
        with patch("smartfind.tools.oracle.subprocess.run", return_value=completed("partial", returncode=1)):
            assert self.client.ask("prompt") == ""

    def test_blank_output_returns_empty(self):
        with patch("smartfind.tools.oracle.subprocess.run", return_value=completed("  \n\n")):
            assert self.client.ask("prompt") == ""

    def test_os_error_returns_empty(self):
        with patch("smartfind.tools.oracle.subprocess.run", side_effect=PermissionError("denied")):
            assert self.client.ask("prompt") == ""

    def test_calls_are_independent(self):
        with patch("smartfind.tools.oracle.subprocess.run", return_value=completed("x")) as run:
            self.client.ask("first")
            self.client.ask("second")

        assert run.call_count == 2
        assert run.call_args_list[0].args[0][-1] == "first"
        assert run.call_args_list[1].args[0][-1] == "second"

    def test_default_command(self):
        assert OracleClient().config.command == ["gemini", "-m", "gemini-3-flash-preview"]
