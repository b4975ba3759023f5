"""
Query dispatcher for smart-find.

Resolves a query with the cheapest stage that can answer it, in strict order:

1. empty query: rejected
2. phrase table / ``*.<ext>`` glob: executed directly
3. keyword rules: executed directly
4. fast mode: synthesized command only
5. otherwise: both AI strategies, then merge and rank

Stages 2 and 3 never consult the oracle.
"""

import time
import logging
from typing import List, Optional, Union

from pydantic import ValidationError

from ..models.config import SmartFindConfig
from ..models.search_command import SearchCommand
from ..models.search_query import SearchQuery, SearchMode
from ..models.search_results import ResultSet, SearchResults, Resolution
from ..tools.executor import CommandExecutor
from ..tools.oracle import OracleClient
from .orchestrator import DualStrategyOrchestrator
from .patterns import classify, apply_rules
from .ranker import MergeRankEngine
from .synthesizer import CommandSynthesizer, Oracle


logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a query cannot be searched (e.g. it is empty)."""
    pass


class Dispatcher:
    """Entry point that turns a query into ranked file paths."""

    def __init__(
        self,
        config: Optional[SmartFindConfig] = None,
        oracle: Optional[Oracle] = None,
        executor: Optional[CommandExecutor] = None,
        orchestrator: Optional[DualStrategyOrchestrator] = None,
        ranker: Optional[MergeRankEngine] = None,
    ):
        """
        Initialize the dispatcher, building any collaborator not supplied.

        Args:
            config: Application configuration (defaults if omitted)
            oracle: Text-generation oracle (OracleClient from config if omitted)
            executor: Search command executor
            orchestrator: Dual-strategy orchestrator
            ranker: Merge-rank engine
        """
        self.config = config or SmartFindConfig()
        limits = self.config.limits

        self.oracle = oracle or OracleClient(self.config.oracle)
        self.executor = executor or CommandExecutor(
            self.config.tools, timeout_seconds=limits.search_timeout_seconds
        )
        self.orchestrator = orchestrator or DualStrategyOrchestrator(
            self.oracle,
            self.executor,
            synthesizer=CommandSynthesizer(self.oracle, max_commands=limits.max_synthesized_commands),
            limits=limits,
        )
        self.ranker = ranker or MergeRankEngine(self.oracle, limits)

    def search(self, query: str, mode: Union[SearchMode, str] = SearchMode.FULL) -> ResultSet:
        """
        Resolve a query to ranked file paths.

        Raises:
            InvalidInputError: If the query is empty
        """
        return self.run(query, mode).results

    def run(self, query: str, mode: Union[SearchMode, str] = SearchMode.FULL) -> SearchResults:
        """
        Resolve a query and report how it was resolved.

        Args:
            query: Raw query text
            mode: FULL or FAST

        Returns:
            SearchResults with the final ResultSet and resolution details

        Raises:
            InvalidInputError: If the query is empty
        """
        search_query = self._parse_query(query, mode)
        started = time.perf_counter()

        outcome = self._resolve(search_query)
        outcome.execution_time = time.perf_counter() - started

        logger.info(f"{outcome}")
        return outcome

    def _parse_query(self, query: str, mode: Union[SearchMode, str]) -> SearchQuery:
        try:
            return SearchQuery(text=query or "", mode=mode)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid search query: {e.errors()[0]['msg']}") from e

    def _resolve(self, query: SearchQuery) -> SearchResults:
        command = classify(query.text)
        if command is not None:
            return self._run_direct(query, command, Resolution.INSTANT)

        command = apply_rules(query.text)
        if command is not None:
            return self._run_direct(query, command, Resolution.RULE)

        if query.is_fast():
            outcome = self.orchestrator.orchestrate(query.text, fast=True)
            return SearchResults(
                query=query,
                resolution=Resolution.FAST,
                command=outcome.command,
                programmatic_count=len(outcome.programmatic),
                results=outcome.programmatic,
                errors=outcome.errors,
            )

        outcome = self.orchestrator.orchestrate(query.text)
        results = self.ranker.merge_rank(query.text, outcome.semantic, outcome.programmatic)

        return SearchResults(
            query=query,
            resolution=Resolution.FULL,
            command=outcome.command,
            semantic_count=len(outcome.semantic),
            programmatic_count=len(outcome.programmatic),
            results=results,
            errors=outcome.errors,
        )

    def _run_direct(self, query: SearchQuery, command: SearchCommand, resolution: Resolution) -> SearchResults:
        logger.info(f"{resolution.value.capitalize()} match: {command.to_shell()}")
        errors: List[str] = []
        results = self.executor.collect(command, errors=errors)
        return SearchResults(
            query=query,
            resolution=resolution,
            command=command,
            programmatic_count=len(results),
            results=results,
            errors=errors,
        )
