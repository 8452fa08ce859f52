"""Dependency injection container for WordStats."""

from dataclasses import dataclass
from typing import Optional

from ..config.config_loader import ConfigLoader
from ..config.config_models import WordStatsConfig
from ..discovery import FileDiscoverer
from ..processing import FileProcessor
from ..parallel import WorkerPool, WorkerConfig
from ..streaming import ProgressListener
from ...domain.services.word_analyzer import WordAnalyzer
from ...domain.services.result_aggregator import ResultAggregator
from ...application.session import ProcessingSession


@dataclass
class DIContainer:
    """
    Dependency injection container for WordStats.

    Assembles all components with proper dependency injection.
    This container is created once at application startup.
    """

    # Configuration
    config: WordStatsConfig

    # Domain Services
    word_analyzer: WordAnalyzer
    aggregator: ResultAggregator

    # Infrastructure
    file_discoverer: FileDiscoverer
    file_processor: FileProcessor
    worker_pool: WorkerPool

    @classmethod
    def create(
        cls,
        config_path: Optional[str] = None,
        config: Optional[WordStatsConfig] = None,
    ) -> "DIContainer":
        """
        Create and wire all dependencies.

        Args:
            config_path: Optional path to configuration file
            config: Ready configuration (skips loading when given)

        Returns:
            DIContainer with all dependencies wired
        """
        if config is None:
            config = ConfigLoader.load(config_path)

        word_analyzer = WordAnalyzer()
        aggregator = ResultAggregator()

        file_discoverer = FileDiscoverer(
            extensions=config.discovery.extensions,
            excluded_dirs=config.discovery.excluded_dirs,
        )

        file_processor = FileProcessor(
            word_analyzer=word_analyzer,
            encoding=config.processing.encoding,
            errors=config.processing.errors,
        )

        # Worker pool for parallel processing
        if config.parallel.pool_size is not None:
            worker_config = WorkerConfig(pool_size=config.parallel.pool_size)
        else:
            worker_config = WorkerConfig()
        worker_pool = WorkerPool(
            config=worker_config,
            process_file=file_processor.process,
        )

        return cls(
            config=config,
            word_analyzer=word_analyzer,
            aggregator=aggregator,
            file_discoverer=file_discoverer,
            file_processor=file_processor,
            worker_pool=worker_pool,
        )

    def create_session(self, listener: Optional[ProgressListener] = None) -> ProcessingSession:
        """
        Create a processing session sharing this container's components.

        Args:
            listener: Receiver of progress events

        Returns:
            Idle ProcessingSession
        """
        return ProcessingSession(
            file_lister=self.file_discoverer,
            worker_pool=self.worker_pool,
            aggregator=self.aggregator,
            listener=listener,
            event_buffer_size=self.config.streaming.event_buffer_size,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"<DIContainer: {self.worker_pool.pool_size} workers>"
