"""Catalogue exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information. Core providers raise these synchronously and never retry.

Hierarchy:
    CatalogueError
    ├─ InvalidLocaleError (also ValueError)
    ├─ LoaderNotRegisteredError (also LookupError)
    ├─ ResourceNotFoundError
    │  └─ InvalidResourceError
    └─ CacheError
       └─ CacheCorruptionError

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CacheCorruptionError",
    "CacheError",
    "CatalogueError",
    "InvalidLocaleError",
    "InvalidResourceError",
    "LoaderNotRegisteredError",
    "ResourceNotFoundError",
]


class CatalogueError(Exception):
    """Base exception for all catalogue errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CatalogueError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidLocaleError(CatalogueError, ValueError):
    """Locale identifier failed validation.

    Raised at the point of use (add_resource, set_fallback_locales,
    get_catalogue), never deferred.

    Attributes:
        locale: The rejected locale value
    """

    def __init__(self, message: str | Diagnostic, *, locale: object = None) -> None:
        super().__init__(message)
        self.locale = locale


class LoaderNotRegisteredError(CatalogueError, LookupError):
    """No loader is registered for a resource's format.

    Attributes:
        format: Format name of the offending resource descriptor
    """

    def __init__(self, message: str | Diagnostic, *, format: str = "") -> None:  # noqa: A002
        super().__init__(message)
        self.format = format


class ResourceNotFoundError(CatalogueError):
    """A loader could not locate its resource.

    Attributes:
        resource: The resource locator passed to the loader
    """

    def __init__(self, message: str | Diagnostic, *, resource: object = None) -> None:
        super().__init__(message)
        self.resource = resource


class InvalidResourceError(ResourceNotFoundError):
    """A loader located its resource but could not parse it."""


class CacheError(CatalogueError):
    """Base class for cache storage failures.

    Attributes:
        path: Cache artifact path involved
    """

    def __init__(self, message: str | Diagnostic, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class CacheCorruptionError(CacheError):
    """Persisted artifact is unreadable, malformed, or fails its checksum."""
