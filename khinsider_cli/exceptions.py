"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class KhinsiderCliError(Exception):
    """Base exception for all application-specific errors."""


class DestinationExistsError(KhinsiderCliError):
    """Raised when the album's destination folder is already occupied."""


class DirectoryPreparationError(KhinsiderCliError):
    """Raised when the album's destination folder cannot be inspected or created."""


class FetchError(KhinsiderCliError):
    """Raised when a remote resource cannot be fetched due to a transport failure."""


class ResourceCloseError(KhinsiderCliError):
    """
    Raised when an already-open file or response stream fails to close.
    This is never handled at the item boundary.
    """


class ConfigurationError(KhinsiderCliError):
    """Raised for issues related to configuration loading or validation."""


class AlbumMetadataError(KhinsiderCliError):
    """Raised when album metadata cannot be read or fails validation."""
