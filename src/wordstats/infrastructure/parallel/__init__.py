"""Parallel processing infrastructure for concurrent file analysis."""

from .worker_pool import (
    WorkerPool,
    WorkerConfig,
    default_pool_size,
)

__all__ = [
    "WorkerPool",
    "WorkerConfig",
    "default_pool_size",
]
