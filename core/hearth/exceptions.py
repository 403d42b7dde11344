"""
Hearth Custom Exceptions

Simple exception hierarchy for error handling.
"""


class HearthError(Exception):
    """Base exception for Hearth."""

    pass


class ConfigurationError(HearthError):
    """Configuration is invalid."""

    pass


class MalformedInputError(HearthError):
    """Input for a zone or device is missing or has the wrong type."""

    pass
