"""
Unit tests for configuration models.

Tests the pydantic models that make up SmartFindConfig, their validation
and the environment checks in validate_configuration.
"""

import pytest
from unittest.mock import patch
from pydantic import ValidationError

from smartfind.models.config import (
    OracleConfig,
    ToolsConfig,
    LimitsConfig,
    PresentationConfig,
    SmartFindConfig,
)


class TestOracleConfig:
    """Test cases for OracleConfig."""

    def test_default_config(self):
        """Test default oracle command."""
        config = OracleConfig()
        assert config.command == ["gemini", "-m", "gemini-3-flash-preview"]
        assert config.program == "gemini"
        assert config.timeout_seconds == 120.0

    def test_string_command(self):
        """Test command written as a single string."""
        config = OracleConfig(command="llm -m local")
        assert config.command == ["llm", "-m", "local"]
        assert config.program == "llm"

    @pytest.mark.parametrize("command", ["", "   ", []])
    def test_empty_command(self, command):
        with pytest.raises(ValidationError, match="Oracle command cannot be empty"):
            OracleConfig(command=command)

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            OracleConfig(timeout_seconds=0)

    def test_is_available(self):
        config = OracleConfig()
        with patch("smartfind.models.config.shutil.which", return_value="/usr/bin/gemini"):
            assert config.is_available() is True
        with patch("smartfind.models.config.shutil.which", return_value=None):
            assert config.is_available() is False


class TestToolsConfig:
    """Test cases for ToolsConfig."""

    def test_default_config(self):
        config = ToolsConfig()
        assert config.aliases == {}
        assert config.working_directory is None
        assert config.resolve("fd") == "fd"

    def test_aliases(self):
        """Test program aliases such as fdfind on Debian."""
        config = ToolsConfig(aliases={"fd": "fdfind"})
        assert config.resolve("fd") == "fdfind"
        assert config.resolve("rg") == "rg"

    def test_working_directory_expanded(self):
        config = ToolsConfig(working_directory="~/projects")
        assert not config.working_directory.startswith("~")
        assert config.working_directory.endswith("projects")

    def test_blank_working_directory(self):
        assert ToolsConfig(working_directory="  ").working_directory is None


class TestLimitsConfig:
    """Test cases for LimitsConfig."""

    def test_default_config(self):
        """Test default pipeline limits."""
        config = LimitsConfig()
        assert config.listing_max_files == 500
        assert config.semantic_max_results == 15
        assert config.rank_threshold == 15
        assert config.rank_candidates == 50
        assert config.rank_top == 15
        assert config.max_synthesized_commands == 1
        assert config.search_timeout_seconds == 60.0

    def test_custom_config(self):
        config = LimitsConfig(listing_max_files=100, rank_threshold=0, rank_candidates=20, rank_top=5)
        assert config.listing_max_files == 100
        assert config.rank_threshold == 0
        assert config.rank_top == 5

    @pytest.mark.parametrize("field", [
        "listing_max_files",
        "semantic_max_results",
        "rank_candidates",
        "rank_top",
        "max_synthesized_commands",
        "search_timeout_seconds",
    ])
    def test_invalid_values(self, field):
        with pytest.raises(ValidationError):
            LimitsConfig(**{field: 0})

    def test_negative_threshold(self):
        with pytest.raises(ValidationError):
            LimitsConfig(rank_threshold=-1)

    def test_rank_top_exceeds_candidates(self):
        with pytest.raises(ValidationError, match="rank_top cannot exceed rank_candidates"):
            LimitsConfig(rank_candidates=10, rank_top=20)


class TestPresentationConfig:
    """Test cases for PresentationConfig."""

    def test_default_config(self):
        config = PresentationConfig()
        assert config.selector[0] == "fzf"
        assert "--multi" in config.selector
        assert config.editor == ["zed"]

    def test_string_programs(self):
        config = PresentationConfig(selector="sk --multi", editor="code -r")
        assert config.selector == ["sk", "--multi"]
        assert config.editor == ["code", "-r"]


class TestSmartFindConfig:
    """Test cases for SmartFindConfig."""

    def test_default_config(self):
        config = SmartFindConfig()
        assert isinstance(config.oracle, OracleConfig)
        assert isinstance(config.tools, ToolsConfig)
        assert isinstance(config.limits, LimitsConfig)
        assert isinstance(config.presentation, PresentationConfig)

    def test_from_dict(self):
        config = SmartFindConfig.from_dict({
            "oracle": {"command": "llm", "timeout_seconds": 30},
            "limits": {"listing_max_files": 200},
        })
        assert config.oracle.command == ["llm"]
        assert config.oracle.timeout_seconds == 30
        assert config.limits.listing_max_files == 200
        assert config.limits.rank_candidates == 50

    def test_unknown_section(self):
        with pytest.raises(ValidationError):
            SmartFindConfig.from_dict({"vector_db": {}})

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            SmartFindConfig.from_dict({"limits": {"max_files": 10}})

    def test_to_dict_round_trip(self):
        config = SmartFindConfig(tools=ToolsConfig(aliases={"fd": "fdfind"}))
        data = config.to_dict()
        assert set(data) == {"oracle", "tools", "limits", "presentation"}
        assert SmartFindConfig.from_dict(data) == config

    def test_validate_configuration_all_present(self, tmp_path):
        config = SmartFindConfig(tools=ToolsConfig(working_directory=str(tmp_path)))
        with patch("smartfind.models.config.shutil.which", return_value="/usr/bin/tool"):
            assert config.validate_configuration() == []

    def test_validate_configuration_missing_programs(self, tmp_path):
        missing = tmp_path / "missing"
        config = SmartFindConfig(
            tools=ToolsConfig(aliases={"fd": "fdfind"}, working_directory=str(missing))
        )
        with patch("smartfind.models.config.shutil.which", return_value=None):
            warnings = config.validate_configuration()

        assert len(warnings) == 4
        assert "Oracle program 'gemini' not found" in warnings[0]
        assert "Search tool 'fdfind' not found on PATH" in warnings
        assert "Search tool 'rg' not found on PATH" in warnings
        assert f"Working directory does not exist: {missing}" in warnings

    def test_str(self):
        assert str(SmartFindConfig()) == "SmartFindConfig(oracle=gemini, listing=500, rank_candidates=50)"
