"""Locale utilities for validation and fallback derivation.

Centralizes locale identifier handling used throughout the providers so
that every public entry point validates locales the same way.

Python 3.13+.
"""

from __future__ import annotations

import os
import re

from msgcatalogue.constants import LOCALE_PATTERN, LOCALE_VARIANT_SEPARATOR
from msgcatalogue.diagnostics import ErrorTemplate, InvalidLocaleError

__all__ = [
    "assert_locale",
    "get_system_locale",
    "is_valid_locale",
    "parent_locale",
    "sanitize_locale",
]

_SANITIZE_PATTERN = re.compile(r"[^a-z0-9_]", re.IGNORECASE | re.ASCII)
_PSEUDO_LOCALES = frozenset({"", "C", "POSIX"})
_ENVIRONMENT_VARIABLES = ("LC_ALL", "LC_MESSAGES", "LANG")


def is_valid_locale(locale: object) -> bool:
    """Check a locale identifier against the accepted pattern.

    Example:
        >>> is_valid_locale("fr-FR.UTF8")
        True
        >>> is_valid_locale(" fr")
        False
    """
    return isinstance(locale, str) and LOCALE_PATTERN.fullmatch(locale) is not None


def assert_locale(locale: object) -> str:
    """Validate a locale identifier, raising on failure.

    Args:
        locale: Candidate locale identifier

    Returns:
        The locale unchanged, for call-site chaining

    Raises:
        InvalidLocaleError: If locale is not a string or contains
            characters outside ``[a-zA-Z0-9@_.-]``
    """
    if not is_valid_locale(locale):
        raise InvalidLocaleError(ErrorTemplate.invalid_locale(locale), locale=locale)
    return locale  # type: ignore[return-value]


def parent_locale(locale: str) -> str | None:
    """Return the base-language prefix of a locale, if it has one.

    The prefix is everything before the last variant separator.

    Example:
        >>> parent_locale("fr_FR")
        'fr'
        >>> parent_locale("sr_Latn_RS")
        'sr_Latn'
        >>> parent_locale("fr") is None
        True
    """
    head, sep, _ = locale.rpartition(LOCALE_VARIANT_SEPARATOR)
    if not sep:
        return None
    return head


def sanitize_locale(locale: str) -> str:
    """Replace every character outside ``[a-zA-Z0-9_]`` with ``_``.

    Example:
        >>> sanitize_locale("sr@latin")
        'sr_latin'
    """
    return _SANITIZE_PATTERN.sub("_", locale)


def _system_locale_candidates() -> list[str | None]:
    import locale as locale_module  # noqa: PLC0415

    try:
        os_locale = locale_module.getlocale()[0]
    except ValueError:
        os_locale = None
    return [os_locale, *(os.environ.get(name) for name in _ENVIRONMENT_VARIABLES)]


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Return the process default locale as a validated POSIX-style code.

    Candidates, first usable wins: locale.getlocale(), then the LC_ALL,
    LC_MESSAGES and LANG environment variables. The "C" and "POSIX"
    pseudo-locales are skipped, encoding suffixes (".UTF-8") are dropped
    and hyphens become underscores so the result has a parent locale.

    Args:
        raise_on_failure: Raise instead of returning "en" when no usable
            locale is found

    Raises:
        RuntimeError: If raise_on_failure is True and nothing usable is set
    """
    for candidate in _system_locale_candidates():
        if candidate is None or candidate in _PSEUDO_LOCALES:
            continue
        code = candidate.partition(".")[0].replace("-", LOCALE_VARIANT_SEPARATOR)
        if code and is_valid_locale(code):
            return code

    if raise_on_failure:
        msg = "Could not determine system locale; set LC_ALL, LC_MESSAGES or LANG"
        raise RuntimeError(msg)

    return "en"
