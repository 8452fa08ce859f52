"""Configuration loading and models."""

from .config_models import (
    WordStatsConfig,
    ParallelConfig,
    DiscoveryConfig,
    ProcessingConfig,
    StreamingConfig,
    OutputConfig,
    LoggingConfig,
)
from .config_loader import ConfigLoader

__all__ = [
    "WordStatsConfig",
    "ParallelConfig",
    "DiscoveryConfig",
    "ProcessingConfig",
    "StreamingConfig",
    "OutputConfig",
    "LoggingConfig",
    "ConfigLoader",
]
