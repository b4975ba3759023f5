"""
YAML configuration loading for smart-find.

A configuration file is either passed explicitly or discovered by name in the
current directory, the home directory and ``~/.config/smart-find``. Whatever
is found is validated into a SmartFindConfig; when nothing is found the
defaults are used. Environment problems (missing programs, a missing working
directory) are reported as warnings rather than errors unless strict mode is on.
"""

import yaml
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError

from ..models.config import SmartFindConfig


logger = logging.getLogger(__name__)


PathLike = Union[str, Path]

SECTION_COMMENTS = {
    "oracle": "Text-generation oracle: invoked as command + [prompt]",
    "tools": "Search tool binaries and working directory",
    "limits": "Pipeline limits and timeouts",
    "presentation": "Interactive picker and editor",
}


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


@dataclass
class ConfigParseResult:
    """
    Outcome of loading a configuration.

    Attributes:
        config: Validated configuration
        warnings: Non-fatal problems found in the environment
        config_path: File the configuration came from, None for defaults
        is_default: True when no file was found
    """
    config: SmartFindConfig
    warnings: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None
    is_default: bool = False


class ConfigParser:
    """Discovers, reads and validates smart-find configuration files."""

    DEFAULT_CONFIG_NAMES = [
        '.smartfind.yaml',
        '.smartfind.yml',
        'smartfind.yaml',
        'smartfind.yml',
    ]

    def __init__(self, strict_mode: bool = False):
        """
        Args:
            strict_mode: Raise on environment warnings instead of reporting them
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_search_paths(self) -> List[Path]:
        """Directories searched for a configuration file, in order."""
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'smart-find',
        ]

    def discover(self) -> Optional[Path]:
        """Return the first configuration file found in the search paths."""
        for directory in self.get_search_paths():
            for name in self.DEFAULT_CONFIG_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    self.logger.info(f"Found configuration file: {candidate}")
                    return candidate
        return None

    def load_config(self, config_path: Optional[PathLike] = None) -> ConfigParseResult:
        """
        Load a configuration file, or the defaults if none is found.

        Args:
            config_path: Explicit file to load; discovered when omitted

        Returns:
            ConfigParseResult with the validated config and any warnings

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid,
                or if strict mode is on and there are warnings
        """
        if config_path:
            path = Path(config_path).expanduser()
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
        else:
            path = self.discover()

        data = self.read_yaml(path) if path else {}
        config = self.build_config(data, path)

        warnings = config.validate_configuration()
        if path is None:
            warnings.append("No configuration file found, using default settings")

        if warnings and self.strict_mode:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        for warning in warnings:
            self.logger.debug(warning)
        self.logger.info(f"Using configuration from {path or 'defaults'}")

        return ConfigParseResult(config=config, warnings=warnings, config_path=path, is_default=path is None)

    def read_yaml(self, path: Path) -> Dict[str, Any]:
        """
        Read a YAML mapping from disk. An empty file reads as an empty mapping.

        Raises:
            ConfigurationError: If the file cannot be read or is not a YAML mapping
        """
        try:
            data = yaml.safe_load(path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        if data is None:
            self.logger.warning(f"Configuration file is empty: {path}")
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")
        return data

    def build_config(self, data: Dict[str, Any], source: Optional[Path] = None) -> SmartFindConfig:
        """
        Validate raw configuration data.

        Raises:
            ConfigurationError: If the data does not describe a valid configuration
        """
        try:
            return SmartFindConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed for {source or 'defaults'}: {e}") from e

    def render(self, config: SmartFindConfig) -> str:
        """Render a configuration as commented YAML."""
        blocks = [
            "# smart-find configuration\n"
            "# Controls the oracle command, search tools, pipeline limits and the result picker\n"
        ]
        for section, values in config.to_dict().items():
            body = yaml.safe_dump({section: values}, default_flow_style=False, sort_keys=False)
            blocks.append(f"# {SECTION_COMMENTS[section]}\n{body}")
        return "\n".join(blocks)

    def save_config(self, config: SmartFindConfig, output_path: PathLike) -> None:
        """
        Write a configuration to disk as commented YAML.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        _write_text(Path(output_path), self.render(config))
        self.logger.info(f"Configuration saved to {output_path}")

    def validate_config_file(self, config_path: PathLike) -> List[str]:
        """
        Check a configuration file without loading it for use.

        Returns:
            Error messages; empty if the file is valid
        """
        path = Path(config_path)
        if not path.exists():
            return [f"Configuration file not found: {path}"]

        try:
            self.build_config(self.read_yaml(path), path)
        except ConfigurationError as e:
            return [str(e)]
        return []

    def get_config_template(self) -> str:
        """Commented YAML holding every option at its default value."""
        return self.render(SmartFindConfig())


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot write configuration file {path}: {e}") from e


def load_config(config_path: Optional[PathLike] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Load configuration from a file or the discovered defaults.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return ConfigParser(strict_mode=strict_mode).load_config(config_path)


def validate_config_file(config_path: PathLike) -> List[str]:
    """Validate a configuration file, returning error messages."""
    return ConfigParser().validate_config_file(config_path)


def create_config_template(output_path: PathLike) -> None:
    """Write a configuration template with every option at its default."""
    ConfigParser().save_config(SmartFindConfig(), output_path)
