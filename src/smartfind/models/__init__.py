"""
Data models for smart-find.

This module contains all the core data structures used throughout the system.
"""

from .search_query import SearchQuery, SearchMode
from .search_command import SearchCommand, CommandSource, EXCLUDE_SET
from .search_results import ResultSet, SearchResults, Resolution

__all__ = [
    'SearchQuery',
    'SearchMode',
    'SearchCommand',
    'CommandSource',
    'EXCLUDE_SET',
    'ResultSet',
    'SearchResults',
    'Resolution',
]
