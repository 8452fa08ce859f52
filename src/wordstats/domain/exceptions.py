"""Exceptions raised by WordStats."""


class WordStatsError(Exception):
    """Base class for all WordStats errors."""


class AlreadyRunningError(WordStatsError):
    """A session was started while another run is still in progress."""

    def __init__(self, state: str):
        super().__init__(f"Processing already in progress (state: {state})")
        self.state = state


class ConfigurationError(WordStatsError):
    """Configuration file or values are invalid."""
