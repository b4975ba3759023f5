"""
Search command executor for smart-find.

Runs a SearchCommand as an argv list (never through a shell) in the working
directory and returns its stdout. Stderr is discarded: only the paths on
stdout are part of the contract.
"""

import subprocess
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..models.config import ToolsConfig
from ..models.search_command import SearchCommand
from ..models.search_results import ResultSet


logger = logging.getLogger(__name__)


class CommandExecutionError(Exception):
    """Raised when a search tool is missing, times out or cannot be started."""
    pass


@dataclass
class ExecutionResult:
    """
    Output of a single search tool run.

    Attributes:
        stdout: Newline-separated paths printed by the tool
        exit_status: Process exit code
    """
    stdout: str
    exit_status: int

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


class CommandExecutor:
    """Executes search commands against the filesystem."""

    def __init__(self, tools: Optional[ToolsConfig] = None, timeout_seconds: float = 60.0):
        """
        Initialize the executor.

        Args:
            tools: Program aliases and working directory
            timeout_seconds: Upper bound on a single run
        """
        self.tools = tools or ToolsConfig()
        self.timeout_seconds = timeout_seconds

    def execute(self, command: SearchCommand) -> ExecutionResult:
        """
        Run a search command and capture its stdout.

        A nonzero exit status is not an error: rg exits 1 when nothing matches.

        Raises:
            CommandExecutionError: If the program is missing, times out or cannot start
        """
        argv = [self.tools.resolve(command.program), *command.args]
        logger.debug(f"Executing search command: {command.to_shell()}")

        try:
            completed = subprocess.run(
                argv,
                cwd=self.tools.working_directory,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise CommandExecutionError(f"Search tool not found: {argv[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(
                f"Search command timed out after {self.timeout_seconds}s: {command.to_shell()}"
            ) from e
        except OSError as e:
            raise CommandExecutionError(f"Cannot run {argv[0]}: {e}") from e

        if completed.returncode != 0:
            logger.debug(f"{argv[0]} exited with status {completed.returncode}")

        return ExecutionResult(stdout=completed.stdout or "", exit_status=completed.returncode)

    def collect(
        self, command: SearchCommand, limit: Optional[int] = None, errors: Optional[List[str]] = None
    ) -> ResultSet:
        """
        Run a search command and parse its stdout into a ResultSet.

        Execution failures degrade to an empty ResultSet and, when ``errors``
        is given, a note appended to it.
        """
        try:
            result = self.execute(command)
        except CommandExecutionError as e:
            logger.warning(f"Search command failed: {e}")
            if errors is not None:
                errors.append(f"Search command failed: {e}")
            return ResultSet()

        return ResultSet.from_output(result.stdout, limit=limit)
