"""
Search command data models for smart-find.

A SearchCommand is an argv list for one of the filesystem search tools
(fd, rg, find). Every command built here carries the fixed exclude set in
the flag syntax of its tool.
"""

import shlex
from typing import Dict, List, Any, Iterable
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


EXCLUDE_SET = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "vendor",
    "__pycache__",
    ".venv",
    ".cache",
    "coverage",
)


class CommandSource(Enum):
    """Where a search command came from."""
    INSTANT = "instant"
    RULE = "rule"
    SYNTHESIZED = "synthesized"
    LISTING = "listing"


def fd_excludes() -> List[str]:
    """Exclude set rendered as fd flags (-E name)."""
    flags = []
    for name in EXCLUDE_SET:
        flags.extend(["-E", name])
    return flags


def rg_excludes() -> List[str]:
    """Exclude set rendered as rg glob flags."""
    return [f"--glob=!{name}" for name in EXCLUDE_SET]


def find_excludes() -> List[str]:
    """Exclude set rendered as find path tests."""
    tests = []
    for name in EXCLUDE_SET:
        tests.extend(["-not", "-path", f"*/{name}/*"])
    return tests


def prompt_excludes() -> str:
    """Exclude set rendered the way the oracle is asked to write it."""
    return " ".join(f'-g "!{name}"' for name in EXCLUDE_SET)


class SearchCommand(BaseModel):
    """
    An executable filesystem search.

    Attributes:
        argv: Program name followed by its arguments
        source: Which stage produced the command
    """

    model_config = ConfigDict(frozen=True)

    argv: List[str] = Field(..., min_length=1, description="Program and arguments")
    source: CommandSource = Field(CommandSource.INSTANT, description="Stage that produced the command")

    @field_validator('argv')
    @classmethod
    def validate_argv(cls, v: List[str]) -> List[str]:
        """Reject commands without a program name."""
        if not v or not v[0].strip():
            raise ValueError("Search command must start with a program name")
        return v

    @property
    def program(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> List[str]:
        return self.argv[1:]

    def to_shell(self) -> str:
        """Render as a copy-pasteable shell string."""
        return shlex.join(self.argv)

    @classmethod
    def fd(cls, args: Iterable[str], source: CommandSource = CommandSource.INSTANT) -> 'SearchCommand':
        """Build an fd command with the exclude set appended."""
        return cls(argv=["fd", *args, *fd_excludes()], source=source)

    @classmethod
    def extension_search(cls, *extensions: str, source: CommandSource = CommandSource.INSTANT) -> 'SearchCommand':
        """Find files with any of the given extensions."""
        args = []
        for ext in extensions:
            args.extend(["-e", ext.lstrip('.')])
        args.extend(["-t", "f"])
        return cls.fd(args, source=source)

    @classmethod
    def content_search(cls, term: str, source: CommandSource = CommandSource.RULE) -> 'SearchCommand':
        """List files whose content contains the literal term."""
        return cls(argv=["rg", "-l", term, *rg_excludes()], source=source)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'argv': list(self.argv),
            'source': self.source.value,
            'shell': self.to_shell(),
        }

    def __str__(self) -> str:
        return self.to_shell()
