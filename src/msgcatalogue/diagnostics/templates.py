"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here so exception constructors never
    carry ad-hoc f-strings.
    """

    @staticmethod
    def invalid_locale(locale: object) -> Diagnostic:
        """Locale failed the identifier pattern.

        Args:
            locale: The rejected locale value

        Returns:
            Diagnostic for LOCALE_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=f'Invalid "{locale}" locale.',
            hint="Locales may only contain letters, digits, '@', '_', '.' and '-'",
            locale=str(locale),
        )

    @staticmethod
    def loader_not_registered(format_name: str, locale: str) -> Diagnostic:
        """Resource descriptor references an unknown format.

        Args:
            format_name: Format of the resource descriptor
            locale: Locale being resolved

        Returns:
            Diagnostic for LOADER_NOT_REGISTERED
        """
        return Diagnostic(
            code=DiagnosticCode.LOADER_NOT_REGISTERED,
            message=f'The "{format_name}" translation loader is not registered.',
            hint=f'Register a loader for "{format_name}" with add_loader()',
            locale=locale,
        )

    @staticmethod
    def resource_not_found(resource: object, locale: str) -> Diagnostic:
        """Loader could not locate its resource."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_NOT_FOUND,
            message=f'File "{resource}" not found.',
            locale=locale,
            resource=str(resource),
        )

    @staticmethod
    def resource_invalid(resource: object, locale: str, reason: str) -> Diagnostic:
        """Loader could not parse its resource."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_INVALID,
            message=f'Error parsing "{resource}": {reason}',
            locale=locale,
            resource=str(resource),
        )

    @staticmethod
    def cache_corrupt(path: str, reason: str) -> Diagnostic:
        """Cache artifact could not be decoded."""
        return Diagnostic(
            code=DiagnosticCode.CACHE_ARTIFACT_CORRUPT,
            message=f"Corrupt catalogue cache artifact: {reason}",
            hint="Delete the artifact; it is regenerated on next access",
            path=path,
        )

    @staticmethod
    def cache_checksum_mismatch(path: str, expected: str, actual: str) -> Diagnostic:
        """Cache artifact payload does not match its recorded checksum."""
        return Diagnostic(
            code=DiagnosticCode.CACHE_CHECKSUM_MISMATCH,
            message=f"Checksum mismatch: expected {expected[:12]}, got {actual[:12]}",
            hint="Delete the artifact; it is regenerated on next access",
            path=path,
        )

    @staticmethod
    def cache_version_mismatch(path: str, found: object, expected: int) -> Diagnostic:
        """Cache artifact was written by an incompatible format version."""
        return Diagnostic(
            code=DiagnosticCode.CACHE_VERSION_MISMATCH,
            message=f"Unsupported cache format version {found!r} (expected {expected})",
            path=path,
        )

    @staticmethod
    def cache_write_failed(path: str, reason: str) -> Diagnostic:
        """Cache artifact could not be persisted."""
        return Diagnostic(
            code=DiagnosticCode.CACHE_WRITE_FAILED,
            message=f"Failed to write cache artifact: {reason}",
            hint="Check that the cache directory exists and is writable",
            path=path,
        )
