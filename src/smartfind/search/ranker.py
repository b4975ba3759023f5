"""
Merge and rank for smart-find.

Semantic picks come first because the oracle chose them by intent; the
programmatic matches follow. Large merged sets are re-ranked by the oracle,
but only paths that really came out of a search can be emitted.
"""

import logging
from typing import Optional

from ..models.config import LimitsConfig
from ..models.search_results import ResultSet
from .synthesizer import Oracle


logger = logging.getLogger(__name__)


RANKING_PROMPT = """Query: "{query}"

Files found:
{candidates}

Pick the TOP {top} most relevant files. Output paths only, best first:"""


def merge(semantic: ResultSet, programmatic: ResultSet) -> ResultSet:
    """Concatenate semantic then programmatic results, keeping first occurrences."""
    merged = ResultSet()
    merged.extend(semantic.paths)
    merged.extend(programmatic.paths)
    return merged


class MergeRankEngine:
    """Deduplicates, orders and optionally re-ranks results with the oracle."""

    def __init__(self, oracle: Oracle, limits: Optional[LimitsConfig] = None):
        self.oracle = oracle
        self.limits = limits or LimitsConfig()

    def merge_rank(self, query: str, semantic: ResultSet, programmatic: ResultSet) -> ResultSet:
        """
        Merge both strategies and re-rank when there are too many results.

        Args:
            query: Raw query text
            semantic: Ordered semantic-listing results
            programmatic: Programmatic results

        Returns:
            Every merged path exactly once; the oracle's ranked prefix first,
            then the rest in merged order
        """
        merged = merge(semantic, programmatic)

        if len(merged) <= self.limits.rank_threshold:
            return merged

        candidates = merged.head(self.limits.rank_candidates)
        prompt = RANKING_PROMPT.format(
            query=query,
            candidates="\n".join(candidates),
            top=self.limits.rank_top,
        )
        logger.info(f"Ranking top results from {len(candidates)} candidates")
        response = self.oracle.ask(prompt)

        proposed = ResultSet.from_output(response, path_like=True)
        candidate_set = set(candidates)
        known = [path for path in proposed.paths if path in candidate_set]

        if len(known) < len(proposed):
            logger.debug(f"Dropped {len(proposed) - len(known)} ranked paths that were not search results")

        result = ResultSet(paths=ResultSet(paths=known).head(self.limits.rank_top))
        result.extend(merged.paths)
        return result
