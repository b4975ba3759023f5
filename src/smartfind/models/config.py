"""
Configuration data models for smart-find.

This module defines the core data structures for managing application configuration,
including the oracle command, search tool aliases, pipeline limits and the
presentation layer.
"""

import shutil
from typing import Dict, List, Optional, Any
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OracleConfig(BaseModel):
    """
    Configuration for the text-generation oracle.

    The oracle is invoked as ``command + [prompt]``; its stdout is the response.

    Attributes:
        command: Oracle program and leading arguments
        timeout_seconds: Upper bound on a single oracle call
    """

    model_config = ConfigDict(extra='forbid')

    command: List[str] = Field(
        default_factory=lambda: ["gemini", "-m", "gemini-3-flash-preview"],
        min_length=1,
        description="Oracle program and leading arguments"
    )
    timeout_seconds: float = Field(120.0, gt=0, description="Timeout for a single oracle call")

    @field_validator('command', mode='before')
    @classmethod
    def validate_command(cls, v) -> List[str]:
        """Allow the command to be written as a single string."""
        if isinstance(v, str):
            v = v.split()
        if not v or not str(v[0]).strip():
            raise ValueError("Oracle command cannot be empty")
        return [str(part) for part in v]

    @property
    def program(self) -> str:
        return self.command[0]

    def is_available(self) -> bool:
        """Check if the oracle program is on PATH."""
        return shutil.which(self.program) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class ToolsConfig(BaseModel):
    """
    Configuration for the filesystem search tools.

    Attributes:
        aliases: Maps a program name used in commands to the binary to run
            (e.g. ``fd`` is installed as ``fdfind`` on Debian)
        working_directory: Directory searches run in (None means the current directory)
    """

    model_config = ConfigDict(extra='forbid')

    aliases: Dict[str, str] = Field(default_factory=dict, description="Program name to binary overrides")
    working_directory: Optional[str] = Field(None, description="Directory searches run in")

    @field_validator('working_directory')
    @classmethod
    def validate_working_directory(cls, v: Optional[str]) -> Optional[str]:
        """Expand user paths."""
        if v is None or not v.strip():
            return None
        return str(Path(v).expanduser())

    def resolve(self, program: str) -> str:
        """Get the binary name to execute for a program."""
        return self.aliases.get(program, program)

    def is_available(self, program: str) -> bool:
        return shutil.which(self.resolve(program)) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LimitsConfig(BaseModel):
    """
    Configuration for pipeline limits.

    Attributes:
        listing_max_files: Files listed for the semantic strategy
        semantic_max_results: Paths kept from the semantic strategy
        rank_threshold: Merged results at or below this size skip ranking
        rank_candidates: Merged results shown to the ranking prompt
        rank_top: Ranked prefix length requested from the oracle
        max_synthesized_commands: Commands kept from the synthesizer
        search_timeout_seconds: Upper bound on a single search tool run
    """

    model_config = ConfigDict(extra='forbid')

    listing_max_files: int = Field(500, gt=0, description="Files listed for the semantic strategy")
    semantic_max_results: int = Field(15, gt=0, description="Paths kept from the semantic strategy")
    rank_threshold: int = Field(15, ge=0, description="Merged size at or below which ranking is skipped")
    rank_candidates: int = Field(50, gt=0, description="Merged results shown to the ranking prompt")
    rank_top: int = Field(15, gt=0, description="Ranked prefix length")
    max_synthesized_commands: int = Field(1, gt=0, description="Commands kept from the synthesizer")
    search_timeout_seconds: float = Field(60.0, gt=0, description="Timeout for a single search tool run")

    @model_validator(mode='after')
    def validate_limits(self):
        """Validate limit consistency."""
        if self.rank_top > self.rank_candidates:
            raise ValueError("rank_top cannot exceed rank_candidates")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class PresentationConfig(BaseModel):
    """
    Configuration for the interactive result picker.

    Attributes:
        selector: Picker program and arguments; results are written to its stdin
        editor: Program that opens the selected files
    """

    model_config = ConfigDict(extra='forbid')

    selector: List[str] = Field(
        default_factory=lambda: [
            "fzf", "--multi", "--ansi",
            "--preview", "bat --style=numbers --color=always --line-range=:500 {} 2>/dev/null || cat {}",
            "--preview-window", "right:50%:wrap",
            "--header", "AI-ranked results | Enter: open | Tab: multi-select",
        ],
        description="Picker program and arguments"
    )
    editor: List[str] = Field(default_factory=lambda: ["zed"], description="Editor program and arguments")

    @field_validator('selector', 'editor', mode='before')
    @classmethod
    def validate_program(cls, v) -> List[str]:
        if isinstance(v, str):
            v = v.split()
        return [str(part) for part in v]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SmartFindConfig(BaseModel):
    """
    Main configuration class for smart-find.

    Attributes:
        oracle: Text-generation oracle settings
        tools: Search tool settings
        limits: Pipeline limits and timeouts
        presentation: Result picker and editor settings
    """

    model_config = ConfigDict(extra='forbid')

    oracle: OracleConfig = Field(default_factory=OracleConfig, description="Oracle configuration")
    tools: ToolsConfig = Field(default_factory=ToolsConfig, description="Search tool configuration")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Pipeline limits")
    presentation: PresentationConfig = Field(default_factory=PresentationConfig, description="Presentation configuration")

    def validate_configuration(self) -> List[str]:
        """
        Check the environment for problems that are not fatal.

        Returns:
            List of warning messages
        """
        warnings = []

        if not self.oracle.is_available():
            warnings.append(
                f"Oracle program '{self.oracle.program}' not found on PATH; AI searches will return no results"
            )

        for program in ("fd", "rg"):
            if not self.tools.is_available(program):
                warnings.append(f"Search tool '{self.tools.resolve(program)}' not found on PATH")

        if self.tools.working_directory and not Path(self.tools.working_directory).is_dir():
            warnings.append(f"Working directory does not exist: {self.tools.working_directory}")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'oracle': self.oracle.to_dict(),
            'tools': self.tools.to_dict(),
            'limits': self.limits.to_dict(),
            'presentation': self.presentation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SmartFindConfig':
        """Create configuration from dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        return (
            f"SmartFindConfig(oracle={self.oracle.program}, "
            f"listing={self.limits.listing_max_files}, "
            f"rank_candidates={self.limits.rank_candidates})"
        )
