"""Custom exceptions for media catalog."""


class MediaCatalogError(Exception):
    """Base exception for media catalog errors."""
    pass


class ConfigurationError(MediaCatalogError):
    """Raised when there's an error in configuration."""
    pass


class StorageError(MediaCatalogError):
    """Raised when a backing store cannot be read or written."""
    pass
