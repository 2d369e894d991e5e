"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages for catalogue
resolution failures.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Locale errors (validation of locale identifiers)
        2000-2999: Loading errors (loader registry, resource loading)
        3000-3999: Cache errors (artifact storage and decoding)
    """

    # Locale errors (1000-1999)
    LOCALE_INVALID = 1001

    # Loading errors (2000-2999)
    LOADER_NOT_REGISTERED = 2001
    RESOURCE_NOT_FOUND = 2002
    RESOURCE_INVALID = 2003

    # Cache errors (3000-3999)
    CACHE_ARTIFACT_CORRUPT = 3001
    CACHE_CHECKSUM_MISMATCH = 3002
    CACHE_VERSION_MISMATCH = 3003
    CACHE_WRITE_FAILED = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        locale: Locale being resolved when the error occurred
        resource: Resource locator involved (stringified)
        path: Filesystem path involved (cache artifact or resource file)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    locale: str | None = None
    resource: str | None = None
    path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Render as a compiler-style block with the diagnostic's context.

        Example:
            error[LOADER_NOT_REGISTERED]: The "yaml" translation loader is not registered.
              = locale: 'fr'
              = help: Register a loader for "yaml" with add_loader()
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
