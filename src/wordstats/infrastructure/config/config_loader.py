"""Configuration loading from YAML files and environment variables."""

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from .config_models import WordStatsConfig
from ...domain.exceptions import ConfigurationError


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class ConfigLoader:
    """
    Loads WordStats configuration.

    Resolution order:
    1. Explicit path, or the first existing default location
    2. Built-in defaults for anything the file leaves out
    3. ``WORDSTATS_*`` environment variables on top
    """

    DEFAULT_PATHS: List[Path] = [
        Path("./wordstats.yaml"),
        Path.home() / ".wordstats" / "config.yaml",
    ]

    # env var -> (section, key, parser)
    ENV_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
        "WORDSTATS_POOL_SIZE": ("parallel", "pool_size", int),
        "WORDSTATS_RECURSIVE": ("discovery", "recursive", _parse_bool),
        "WORDSTATS_EXTENSIONS": ("discovery", "extensions", _parse_list),
        "WORDSTATS_ENCODING": ("processing", "encoding", str),
        "WORDSTATS_EVENT_BUFFER_SIZE": ("streaming", "event_buffer_size", int),
        "WORDSTATS_OUTPUT_FORMAT": ("output", "default_format", str),
        "WORDSTATS_LOG_LEVEL": ("logging", "level", str),
        "WORDSTATS_LOG_FILE": ("logging", "file", str),
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> WordStatsConfig:
        """
        Load configuration.

        Args:
            config_path: Optional path to a YAML configuration file

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        data: Dict[str, Any] = {}

        path = cls._resolve_path(config_path)
        if path is not None:
            data = cls._read_yaml(path)

        cls._apply_env_overrides(data)

        try:
            return WordStatsConfig(**data)
        except ValidationError as e:
            source = str(path) if path else "defaults"
            raise ConfigurationError(f"Invalid configuration ({source}): {e}") from e

    @classmethod
    def create_default_config(cls, path: Optional[str] = None) -> Path:
        """
        Write the default configuration to a YAML file.

        Args:
            path: Target file (defaults to the user config location)

        Returns:
            Path of the written file

        Raises:
            ConfigurationError: If the file already exists
        """
        target = Path(path) if path else cls.DEFAULT_PATHS[-1]
        if target.exists():
            raise ConfigurationError(f"Configuration file already exists: {target}")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(WordStatsConfig().to_yaml(), encoding="utf-8")
        return target

    @classmethod
    def get_config_info(cls) -> Dict[str, Any]:
        """
        Describe where configuration comes from.

        Returns:
            Dictionary with existing config files, active env overrides
            and default search paths
        """
        return {
            "existing_configs": [str(p) for p in cls.DEFAULT_PATHS if p.exists()],
            "env_overrides": [
                f"{name}={os.environ[name]}"
                for name in cls.ENV_OVERRIDES
                if name in os.environ
            ],
            "default_paths": [str(p) for p in cls.DEFAULT_PATHS],
        }

    @classmethod
    def _resolve_path(cls, config_path: Optional[str]) -> Optional[Path]:
        if config_path:
            path = Path(config_path)
            if not path.is_file():
                raise ConfigurationError(f"Configuration file not found: {path}")
            return path

        for candidate in cls.DEFAULT_PATHS:
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        try:
            content = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not read configuration {path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {path}")
        return content

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]):
        for name, (section, key, parser) in cls.ENV_OVERRIDES.items():
            raw = os.environ.get(name)
            if raw is None:
                continue
            try:
                value = parser(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e

            section_data = data.setdefault(section, {})
            if not isinstance(section_data, dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
            section_data[key] = value
