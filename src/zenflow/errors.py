"""Exceptions raised by zenflow."""


class ZenFlowError(Exception):
    """Base exception for zenflow errors."""

    pass


class ConfigError(ZenFlowError):
    """Raised when configuration values are invalid."""

    pass


class GenerationFailure(ZenFlowError):
    """Sequence text generation failed, timed out, or returned unusable data."""

    pass


class EnrichmentFailure(ZenFlowError):
    """A single pose image request failed."""

    pass


class SessionFailure(ZenFlowError):
    """The practice script or its speech synthesis could not be produced."""

    pass
