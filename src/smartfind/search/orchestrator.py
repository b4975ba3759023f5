"""
Dual-strategy search orchestration for smart-find.

Two independent strategies answer a free-form query:

- semantic listing: the oracle picks the most relevant paths from a listing
  of the working tree;
- programmatic: the oracle writes a search command which is then executed.

Both run on a two-worker thread pool and are joined before returning. The
strategies share no mutable state.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple

from ..models.config import LimitsConfig
from ..models.search_command import SearchCommand, CommandSource
from ..models.search_results import ResultSet
from ..tools.executor import CommandExecutor
from ..tools.fs_walker import FSWalker
from .synthesizer import CommandSynthesizer, Oracle


logger = logging.getLogger(__name__)


SEMANTIC_PROMPT = """You are finding files for: "{query}"

Here are files in the project:
{listing}

Pick up to {max_results} files most likely to match the user's intent.
Think semantically - what would contain "{query}"?
Consider directory names, file names, and common patterns.

Output ONLY file paths, one per line, best matches first:"""


def build_semantic_prompt(query: str, listing: List[str], max_results: int = 15) -> str:
    """Render the semantic-listing prompt."""
    return SEMANTIC_PROMPT.format(query=query, listing="\n".join(listing), max_results=max_results)


@dataclass
class OrchestrationResult:
    """
    Joined output of both strategies.

    Unpacks as ``semantic, programmatic``.

    Attributes:
        semantic: Paths picked by the oracle from the listing, best first
        programmatic: Paths printed by the synthesized command
        command: The synthesized command that was executed, if any
        errors: Non-fatal problems met by either strategy
    """
    semantic: ResultSet = field(default_factory=ResultSet)
    programmatic: ResultSet = field(default_factory=ResultSet)
    command: Optional[SearchCommand] = None
    errors: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[ResultSet]:
        yield self.semantic
        yield self.programmatic


class DualStrategyOrchestrator:
    """Runs the semantic-listing and programmatic strategies."""

    def __init__(
        self,
        oracle: Oracle,
        executor: CommandExecutor,
        synthesizer: Optional[CommandSynthesizer] = None,
        limits: Optional[LimitsConfig] = None,
        lister: Optional[Callable[[int], List[str]]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            oracle: Text-generation oracle
            executor: Runs search commands
            synthesizer: Command synthesizer (built on ``oracle`` if omitted)
            limits: Listing and result caps
            lister: Returns up to N relative paths of the working tree
                (fd when installed, otherwise a directory walk)
        """
        self.oracle = oracle
        self.executor = executor
        self.limits = limits or LimitsConfig()
        self.synthesizer = synthesizer or CommandSynthesizer(
            oracle, max_commands=self.limits.max_synthesized_commands
        )
        self.lister = lister or self._list_files

    def orchestrate(self, query: str, fast: bool = False) -> OrchestrationResult:
        """
        Run both strategies concurrently and wait for both to finish.

        Args:
            query: Raw query text
            fast: Skip the semantic strategy entirely

        Returns:
            OrchestrationResult with both ResultSets and any degradation notes
        """
        if fast:
            errors: List[str] = []
            command, programmatic = self.programmatic(query, errors)
            return OrchestrationResult(programmatic=programmatic, command=command, errors=errors)

        semantic_errors: List[str] = []
        programmatic_errors: List[str] = []
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="smartfind") as pool:
            semantic_future = pool.submit(self.semantic, query, semantic_errors)
            programmatic_future = pool.submit(self.programmatic, query, programmatic_errors)

            semantic = semantic_future.result()
            command, programmatic = programmatic_future.result()

        logger.info(f"Semantic found {len(semantic)} files, programmatic found {len(programmatic)} files")

        return OrchestrationResult(
            semantic=semantic,
            programmatic=programmatic,
            command=command,
            errors=semantic_errors + programmatic_errors,
        )

    def semantic(self, query: str, errors: Optional[List[str]] = None) -> ResultSet:
        """
        Semantic-listing strategy: let the oracle pick paths from a listing.

        Only paths that appear in the listing are kept, so prose in the
        oracle's reply never becomes a result.

        Args:
            query: Raw query text
            errors: Receives a note if the oracle gave nothing usable

        Returns:
            Ordered ResultSet of at most ``semantic_max_results`` listed paths
        """
        listing = self.lister(self.limits.listing_max_files)
        if not listing:
            logger.info("Nothing to list, skipping semantic strategy")
            return ResultSet()

        prompt = build_semantic_prompt(query, listing, self.limits.semantic_max_results)
        response = self.oracle.ask(prompt)
        if not response.strip():
            _note(errors, "Semantic search: oracle returned no response")
            return ResultSet()

        listed = set(listing)
        proposed = ResultSet.from_output(response, path_like=True)
        picked = [path for path in proposed.paths if path in listed]

        if len(picked) < len(proposed):
            logger.debug(f"Dropped {len(proposed) - len(picked)} semantic lines that are not listed files")

        return ResultSet(paths=picked[:self.limits.semantic_max_results])

    def programmatic(
        self, query: str, errors: Optional[List[str]] = None
    ) -> Tuple[Optional[SearchCommand], ResultSet]:
        """
        Programmatic strategy: run the first synthesized command.

        Args:
            query: Raw query text
            errors: Receives a note if no command was synthesized or it failed

        Returns:
            Tuple of (executed command or None, ResultSet of its output)
        """
        commands = self.synthesizer.synthesize(query)
        if not commands:
            _note(errors, "Programmatic search: no usable search command was synthesized")
            return None, ResultSet()

        command = commands[0]
        logger.info(f"Running synthesized command: {command.to_shell()}")
        return command, self.executor.collect(command, errors=errors)

    def _list_files(self, limit: int) -> List[str]:
        tools = self.executor.tools
        if tools.is_available("fd"):
            command = SearchCommand.fd(["-t", "f", "--max-results", str(limit)], source=CommandSource.LISTING)
            return self.executor.collect(command, limit=limit).paths

        logger.info("fd not found, listing files with a directory walk")
        return FSWalker(tools.working_directory).list_files(limit)


def _note(errors: Optional[List[str]], message: str) -> None:
    logger.info(message)
    if errors is not None:
        errors.append(message)
