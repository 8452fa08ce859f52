"""Configuration data models using Pydantic."""

import codecs
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


class ParallelConfig(BaseModel):
    """Worker pool configuration."""
    model_config = ConfigDict(validate_assignment=True)

    pool_size: Optional[int] = Field(
        default=None,
        ge=1,
        le=256,
        description="Number of concurrent file workers (default: CPU count)"
    )


class DiscoveryConfig(BaseModel):
    """File discovery configuration."""
    extensions: List[str] = Field(
        default_factory=lambda: [
            ".txt",
            ".text",
            ".md",
            ".java",
            ".c",
            ".cpp",
            ".h",
            ".py",
            ".js",
            ".html",
            ".css",
            ".xml",
            ".json",
            ".csv",
        ],
        description="File extensions treated as text files"
    )
    recursive: bool = Field(
        default=True,
        description="Search subdirectories"
    )
    excluded_dirs: List[str] = Field(
        default_factory=lambda: [
            ".git",
            "node_modules",
            "__pycache__",
        ],
        description="Directory names never descended into"
    )

    @field_validator('extensions')
    @classmethod
    def normalize_extensions(cls, v):
        """Lowercase extensions and ensure the leading dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            normalized.append(ext)
        if not normalized:
            raise ValueError("at least one extension is required")
        return normalized


class ProcessingConfig(BaseModel):
    """File reading configuration."""
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read files"
    )
    errors: str = Field(
        default="strict",
        description="Decode error handling (strict, ignore, replace)"
    )

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v):
        """Ensure the codec exists."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"unknown encoding: {v}")
        return v

    @field_validator('errors')
    @classmethod
    def validate_errors(cls, v):
        """Ensure error handler is valid."""
        valid_handlers = ["strict", "ignore", "replace"]
        v = v.lower()
        if v not in valid_handlers:
            raise ValueError(f"errors must be one of {valid_handlers}")
        return v


class StreamingConfig(BaseModel):
    """Progress event delivery configuration."""
    event_buffer_size: int = Field(
        default=64,
        ge=1,
        le=10000,
        description="Maximum undelivered progress events before processing waits"
    )


class OutputConfig(BaseModel):
    """Output configuration."""
    model_config = ConfigDict(validate_assignment=True)

    default_format: str = Field(
        default="table",
        description="Default output format (table, json, summary)"
    )
    color: bool = Field(
        default=True,
        description="Enable colored console output"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose output"
    )

    @field_validator('default_format')
    @classmethod
    def validate_format(cls, v):
        """Ensure format is valid."""
        valid_formats = ["table", "json", "summary"]
        v = v.lower()
        if v not in valid_formats:
            raise ValueError(f"format must be one of {valid_formats}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    model_config = ConfigDict(validate_assignment=True)

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file path (no file logging when unset)"
    )
    console: bool = Field(
        default=True,
        description="Enable console logging"
    )
    rotation: str = Field(
        default="daily",
        description="Log rotation strategy (daily, none)"
    )
    retention_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Number of days to retain logs"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return v

    @field_validator('rotation')
    @classmethod
    def validate_rotation(cls, v):
        """Ensure rotation strategy is valid."""
        valid_strategies = ["daily", "none"]
        v = v.lower()
        if v not in valid_strategies:
            raise ValueError(f"rotation must be one of {valid_strategies}")
        return v


class WordStatsConfig(BaseModel):
    """Complete WordStats configuration."""
    model_config = ConfigDict(
        extra="forbid",  # Forbid extra fields
        validate_assignment=True  # Validate on assignment
    )

    parallel: ParallelConfig = Field(default_factory=ParallelConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    streaming: StreamingConfig = Field(default_factory=StreamingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        import yaml
        return yaml.dump(self.model_dump(), default_flow_style=False, sort_keys=False)
