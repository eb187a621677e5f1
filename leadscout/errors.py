"""
Exception types raised by the lead pipeline.
Every failure surfaces to the caller as one human-readable message.
"""


class LeadScoutError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(LeadScoutError, ValueError):
    """A credential or setting is missing. Raised before any network call."""


class ModelError(LeadScoutError):
    """The external model call itself failed (network, quota, bad request)."""


class ParseError(LeadScoutError):
    """Model text could not be decoded into the expected structure."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class NoLeadsFoundError(LeadScoutError):
    """Acquisition finished every batch without a single qualifying lead."""


class GenerationError(LeadScoutError):
    """A per-lead pitch or audit generation failed."""
