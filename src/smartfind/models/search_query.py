"""
Search query data models for smart-find.

This module defines the immutable query that flows through the dispatcher:
the raw natural language text and the requested search mode.
"""

from typing import Dict, Any
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchMode(Enum):
    """How much oracle work a search is allowed to do."""
    FULL = "full"
    FAST = "fast"


class SearchQuery(BaseModel):
    """
    Represents a single natural language search request.

    The query is immutable once created. Text is stripped of surrounding
    whitespace; empty text is rejected at construction time.

    Attributes:
        text: Natural language search query from the user
        mode: FULL runs both AI strategies and merge-rank, FAST runs only
            the synthesized command
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Natural language search query")
    mode: SearchMode = Field(SearchMode.FULL, description="Search mode")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Validate and normalize the search query text."""
        if not v or not v.strip():
            raise ValueError("Search query text cannot be empty")
        return v.strip()

    @field_validator('mode', mode='before')
    @classmethod
    def validate_mode(cls, v) -> SearchMode:
        """Accept mode names as plain strings."""
        if isinstance(v, str):
            try:
                return SearchMode(v.lower())
            except ValueError:
                raise ValueError(f"Invalid search mode: {v}")
        return v

    def is_fast(self) -> bool:
        """Check if this query skips the semantic strategy and ranking."""
        return self.mode == SearchMode.FAST

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search query to a dictionary representation."""
        data = self.model_dump()
        data['mode'] = self.mode.value
        return data

    def __str__(self) -> str:
        """String representation of the search query."""
        return f"Query: '{self.text}' | Mode: {self.mode.value}"
