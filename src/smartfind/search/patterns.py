"""
Instant pattern matching for smart-find.

Queries that can be answered without the oracle: a fixed phrase table,
``*.<ext>`` globs and an ordered list of keyword rules. Everything here is
pure and deterministic.
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from ..models.search_command import SearchCommand, CommandSource


def _extensions(*extensions: str) -> SearchCommand:
    return SearchCommand.extension_search(*extensions, source=CommandSource.INSTANT)


INSTANT_PATTERNS: Dict[str, SearchCommand] = {
    # File extensions
    "*.ts": _extensions("ts"),
    "*.tsx": _extensions("tsx"),
    "*.js": _extensions("js"),
    "*.json": _extensions("json"),
    "*.md": _extensions("md"),
    "*.sh": _extensions("sh"),
    "*.lua": _extensions("lua"),
    "*.css": _extensions("css"),
    "*.html": _extensions("html"),
    "*.py": _extensions("py"),
    "*.go": _extensions("go"),
    "*.rs": _extensions("rs"),
    "*.yaml": _extensions("yaml", "yml"),
    "*.toml": _extensions("toml"),

    # Common queries
    "typescript": _extensions("ts", "tsx"),
    "config": _extensions("json", "yaml", "yml", "toml", "ini"),
    "tests": SearchCommand.fd(["-g", "*.test.*", "-g", "*.spec.*", "-t", "f"]),
    "scripts": _extensions("sh"),
    "readme": SearchCommand.fd(["-i", "readme", "-t", "f"]),
}


RuleBuilder = Callable[[re.Match], SearchCommand]


def _containing(match: re.Match) -> SearchCommand:
    return SearchCommand.content_search(match.group(1), source=CommandSource.RULE)


def _extension_files(match: re.Match) -> SearchCommand:
    return SearchCommand.extension_search(match.group(1), source=CommandSource.RULE)


def _recent(match: re.Match) -> SearchCommand:
    # The captured subject is not used to narrow the search.
    return SearchCommand.fd(["-t", "f", "--changed-within", "7d"], source=CommandSource.RULE)


def _large(match: re.Match) -> SearchCommand:
    return SearchCommand.fd(["-t", "f", "-S", "+100k"], source=CommandSource.RULE)


# Evaluated in order; the first matching rule wins.
KEYWORD_RULES: List[Tuple[re.Pattern, RuleBuilder]] = [
    (re.compile(r'^(?:files?\s+)?containing\s+["\']?(\w+)["\']?', re.IGNORECASE), _containing),
    (re.compile(r'^(\w+)\s+files?$', re.IGNORECASE), _extension_files),
    (re.compile(r'recent(?:ly)?(?:\s+(?:modified|edited|changed))?\s+(.+)', re.IGNORECASE), _recent),
    (re.compile(r'large\s+files?', re.IGNORECASE), _large),
]


def classify(query: str) -> Optional[SearchCommand]:
    """
    Map a query to a known search via the phrase table or a ``*.<ext>`` glob.

    Args:
        query: Raw query text

    Returns:
        SearchCommand, or None to defer to the keyword rules
    """
    q = query.strip().lower()

    command = INSTANT_PATTERNS.get(q)
    if command is not None:
        return command

    if q.startswith("*.") and len(q) > 2:
        return _extensions(q[2:])

    return None


def apply_rules(query: str) -> Optional[SearchCommand]:
    """
    Build a search from the shape of the query using the ordered keyword rules.

    Matching is case-insensitive but captured terms keep their original case,
    so ``containing TODO`` searches for ``TODO``.

    Args:
        query: Raw query text

    Returns:
        SearchCommand from the first matching rule, or None
    """
    q = query.strip()

    for pattern, build in KEYWORD_RULES:
        match = pattern.search(q)
        if match:
            return build(match)

    return None
