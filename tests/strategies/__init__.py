"""Hypothesis strategies for msgcatalogue property-based testing.

Usage:
    from tests.strategies import valid_locales, domain_messages
"""

from .catalogue import (
    LOCALE_ALPHABET,
    domain_messages,
    invalid_locales,
    message_maps,
    posix_locales,
    valid_locales,
)

__all__ = [
    "LOCALE_ALPHABET",
    "domain_messages",
    "invalid_locales",
    "message_maps",
    "posix_locales",
    "valid_locales",
]
