"""
Search results data models for smart-find.

This module defines the ordered, deduplicated path list that every search
strategy produces (ResultSet) and the outcome record of a whole dispatch
(SearchResults).
"""

import re
from typing import Dict, List, Optional, Any, Iterable
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from .search_query import SearchQuery
from .search_command import SearchCommand


# Lines an oracle writes that could plausibly be a relative path.
PATH_LIKE_PATTERN = re.compile(r'^[a-zA-Z0-9_./-]')


class Resolution(Enum):
    """Which dispatcher stage produced the final results."""
    INSTANT = "instant"
    RULE = "rule"
    FAST = "fast"
    FULL = "full"


def _dedup(paths: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        unique.append(path)
    return unique


class ResultSet(BaseModel):
    """
    Ordered sequence of file paths with duplicates removed.

    Order encodes relevance: earlier entries are more relevant. The first
    occurrence of a path wins when duplicates are added.

    Attributes:
        paths: File paths in rank order
    """

    paths: List[str] = Field(default_factory=list, description="File paths in rank order")

    @field_validator('paths')
    @classmethod
    def validate_paths(cls, v: List[str]) -> List[str]:
        """Strip entries, drop blanks and remove duplicates."""
        return _dedup(p.strip() for p in v if p and p.strip())

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> 'ResultSet':
        return cls(paths=list(paths))

    @classmethod
    def from_output(cls, text: str, limit: Optional[int] = None, path_like: bool = False) -> 'ResultSet':
        """
        Parse newline-separated tool or oracle output.

        Args:
            text: Raw stdout text
            limit: Keep at most this many lines (applied before dedup, like head -n)
            path_like: Only keep lines that start like a relative path

        Returns:
            ResultSet of the parsed lines
        """
        lines = [line.strip() for line in (text or "").splitlines()]
        lines = [line for line in lines if line]
        if path_like:
            lines = [line for line in lines if PATH_LIKE_PATTERN.match(line)]
        if limit is not None:
            lines = lines[:limit]
        return cls(paths=lines)

    def extend(self, paths: Iterable[str]) -> None:
        """Append paths not already present, keeping first-occurrence order."""
        seen = set(self.paths)
        for path in paths:
            path = path.strip()
            if not path or path in seen:
                continue
            seen.add(path)
            self.paths.append(path)

    def head(self, n: int) -> List[str]:
        """Get the first n paths."""
        return self.paths[:n]

    def is_empty(self) -> bool:
        return not self.paths

    def to_lines(self) -> str:
        """Newline-separated paths in rank order, for the presentation layer."""
        return "\n".join(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self.paths


class SearchResults(BaseModel):
    """
    Complete outcome of one dispatch.

    Attributes:
        query: The original search query
        resolution: Which dispatcher stage answered the query
        command: The executed command (instant, rule or synthesized), if any
        semantic_count: Paths picked by the semantic-listing strategy
        programmatic_count: Paths found by the synthesized command
        results: Final ranked results
        execution_time: Time taken to execute the search in seconds
        timestamp: When the search was executed
        errors: Non-fatal problems encountered along the way
    """

    query: SearchQuery = Field(..., description="The original search query")
    resolution: Resolution = Field(..., description="Stage that produced the results")
    command: Optional[SearchCommand] = Field(None, description="Executed search command")
    semantic_count: int = Field(0, ge=0, description="Paths from the semantic-listing strategy")
    programmatic_count: int = Field(0, ge=0, description="Paths from the programmatic strategy")
    results: ResultSet = Field(default_factory=ResultSet, description="Final ranked results")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken to execute the search")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")
    errors: List[str] = Field(default_factory=list, description="Non-fatal errors")

    def get_match_count(self) -> int:
        return len(self.results)

    def has_results(self) -> bool:
        return not self.results.is_empty()

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        return {
            'query': self.query.to_dict(),
            'resolution': self.resolution.value,
            'command': self.command.to_dict() if self.command else None,
            'semantic_count': self.semantic_count,
            'programmatic_count': self.programmatic_count,
            'results': list(self.results.paths),
            'match_count': self.get_match_count(),
            'execution_time': self.execution_time,
            'timestamp': self.timestamp.isoformat(),
            'errors': list(self.errors),
        }

    def __str__(self) -> str:
        """String representation of search results."""
        parts = [f"Found {self.get_match_count()} files"]
        parts.append(f"Resolution: {self.resolution.value}")
        parts.append(f"Took {self.execution_time:.2f}s")

        if self.errors:
            parts.append(f"Errors: {len(self.errors)}")

        return " | ".join(parts)
