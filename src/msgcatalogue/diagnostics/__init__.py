"""Diagnostic system for catalogue errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CacheCorruptionError,
    CacheError,
    CatalogueError,
    InvalidLocaleError,
    InvalidResourceError,
    LoaderNotRegisteredError,
    ResourceNotFoundError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CacheCorruptionError",
    "CacheError",
    "CatalogueError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "InvalidLocaleError",
    "InvalidResourceError",
    "LoaderNotRegisteredError",
    "OutputFormat",
    "ResourceNotFoundError",
]
