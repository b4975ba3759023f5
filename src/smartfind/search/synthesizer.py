"""
AI command synthesis for smart-find.

Asks the oracle to translate a free-form query into a single fd, rg or find
command. The oracle's reply is untrusted: only lines that start with a
whitelisted program survive, and each survivor is tokenized and checked for
shell control tokens and command-executing flags before it becomes a
SearchCommand. Accepted commands get the exclude set appended and always
run as argv, never through a shell.
"""

import re
import shlex
import logging
from typing import List, Optional, Protocol

from ..models.search_command import (
    SearchCommand,
    CommandSource,
    fd_excludes,
    find_excludes,
    prompt_excludes,
    rg_excludes,
)


logger = logging.getLogger(__name__)


class Oracle(Protocol):
    def ask(self, prompt: str) -> str: ...


ALLOWED_PROGRAMS = ("fd", "rg", "find")

COMMAND_LINE_PATTERN = re.compile(r'^(?:' + '|'.join(ALLOWED_PROGRAMS) + r') ')

SHELL_PUNCTUATION = frozenset("();<>|&")

SHELL_CONTROL_FRAGMENTS = ("`", "$(")

SHORT_FLAG_BUNDLE = re.compile(r'^-[A-Za-z]{2,}$')

FORBIDDEN_FLAGS = {
    "find": frozenset({"-exec", "-execdir", "-ok", "-okdir", "-delete", "-fprint", "-fprint0", "-fprintf", "-fls"}),
    "fd": frozenset({"-x", "--exec", "-X", "--exec-batch"}),
    "rg": frozenset({"--pre", "--pre-glob", "-z", "--search-zip"}),
}


SYNTHESIS_PROMPT = """You are a semantic file search expert. Find files matching: "{query}"

THINK about what the user REALLY wants:
- Extract the CORE intent (what kind of file? what content?)
- Consider synonyms and related terms
- Be FLEXIBLE - finding something related is better than nothing

SEARCH STRATEGY:
1. For content searches, use: rg -li "pattern1|pattern2|pattern3" --glob "*.ext"
   - Use -i for case insensitive
   - Use | for OR (match ANY term)
   - Pick 2-3 key terms from the query
2. For file names, use: fd -i "pattern" -e ext
3. NEVER chain with xargs - use single rg with OR patterns instead

EXCLUDES (always add): {excludes}

EXAMPLES:
Query: "markdown file with dropbox link to zoom recording"
rg -li "dropbox|zoom|recording" --glob "*.md" -g "!node_modules" -g "!.git"

Query: "config for database connection"
rg -li "database|db|connection|postgres|mysql" --glob "*.{{json,yaml,yml,toml,env}}" -g "!node_modules" -g "!.git"

Query: "test files for authentication"
fd -i "auth" -e test.ts -e spec.ts -E node_modules -E .git

Output ONLY one command, no explanation:"""


def build_synthesis_prompt(query: str) -> str:
    """Render the command synthesis prompt for a query."""
    return SYNTHESIS_PROMPT.format(query=query, excludes=prompt_excludes())


def with_excludes(argv: List[str]) -> List[str]:
    """
    Add the exclude set to a parsed fd, rg or find argv.

    fd and rg flags go before any ``--`` separator. find gets its expression
    grouped so the path tests apply to every alternative.
    """
    program, args = argv[0], argv[1:]

    if program == "find":
        split = 0
        while split < len(args) and not args[split].startswith("-") and args[split] != "!":
            split += 1
        starts, expression = args[:split], args[split:]
        if expression:
            expression = ["(", *expression, ")"]
        return [program, *starts, *expression, *find_excludes()]

    excludes = fd_excludes() if program == "fd" else rg_excludes()
    if "--" in args:
        split = args.index("--")
        return [program, *args[:split], *excludes, *args[split:]]
    return [program, *args, *excludes]


def parse_command_line(line: str) -> Optional[SearchCommand]:
    """
    Turn one whitelisted oracle line into a SearchCommand.

    Returns:
        SearchCommand, or None if the line is unsafe or cannot be tokenized
    """
    if any(fragment in line for fragment in SHELL_CONTROL_FRAGMENTS):
        logger.warning(f"Rejected synthesized command with shell substitution: {line}")
        return None

    lexer = shlex.shlex(line, posix=True, punctuation_chars=True)
    lexer.whitespace_split = True
    try:
        argv = list(lexer)
    except ValueError as e:
        logger.warning(f"Rejected unparseable synthesized command '{line}': {e}")
        return None

    if not argv or argv[0] not in ALLOWED_PROGRAMS:
        return None

    for token in argv[1:]:
        if token and all(ch in SHELL_PUNCTUATION for ch in token):
            logger.warning(f"Rejected synthesized command with shell operator '{token}': {line}")
            return None
        flags = [token.split("=", 1)[0]]
        # fd and rg accept bundled short flags such as -lz
        if argv[0] != "find" and SHORT_FLAG_BUNDLE.match(token):
            flags.extend(f"-{letter}" for letter in token[1:])
        for flag in flags:
            if flag in FORBIDDEN_FLAGS[argv[0]]:
                logger.warning(f"Rejected synthesized command with flag '{flag}': {line}")
                return None

    return SearchCommand(argv=with_excludes(argv), source=CommandSource.SYNTHESIZED)


class CommandSynthesizer:
    """Turns free-form queries into search commands with the oracle's help."""

    def __init__(self, oracle: Oracle, max_commands: int = 1):
        self.oracle = oracle
        self.max_commands = max_commands

    def synthesize(self, query: str) -> List[SearchCommand]:
        """
        Ask the oracle for a search command.

        Args:
            query: Raw query text, embedded literally in the prompt

        Returns:
            Up to ``max_commands`` commands; empty if the oracle produced none
        """
        response = self.oracle.ask(build_synthesis_prompt(query))

        commands = []
        for line in response.splitlines():
            line = line.strip()
            if not COMMAND_LINE_PATTERN.match(line):
                continue
            command = parse_command_line(line)
            if command is not None:
                commands.append(command)
            if len(commands) >= self.max_commands:
                break

        if not commands:
            logger.info(f"Oracle produced no usable search command for '{query}'")

        return commands
