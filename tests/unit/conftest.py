"""
Shared test doubles for the smart-find unit tests.
"""

from typing import Callable, Dict, List, Optional, Union

import pytest

from smartfind.models.search_command import SearchCommand
from smartfind.tools.executor import CommandExecutor, CommandExecutionError, ExecutionResult


class FakeOracle:
    """Oracle that records prompts and answers from a string or a callable."""

    def __init__(self, responder: Union[str, Callable[[str], str]] = ""):
        self.responder = responder
        self.prompts: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if callable(self.responder):
            return self.responder(prompt)
        return self.responder


class FakeExecutor(CommandExecutor):
    """Executor that records commands and prints canned output per program."""

    def __init__(self, outputs: Optional[Union[Dict[str, str], Callable[[SearchCommand], str]]] = None,
                 fail: bool = False):
        super().__init__()
        self.outputs = outputs or {}
        self.fail = fail
        self.commands: List[SearchCommand] = []

    def execute(self, command: SearchCommand) -> ExecutionResult:
        self.commands.append(command)
        if self.fail:
            raise CommandExecutionError(f"Search tool not found: {command.program}")
        if callable(self.outputs):
            return ExecutionResult(stdout=self.outputs(command), exit_status=0)
        return ExecutionResult(stdout=self.outputs.get(command.program, ""), exit_status=0)


@pytest.fixture
def fake_oracle():
    return FakeOracle


@pytest.fixture
def fake_executor():
    return FakeExecutor
