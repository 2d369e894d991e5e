"""Type aliases for the catalogue domain.

Provides semantic type aliases used throughout the package and by user
code when annotating provider call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "Domain",
    "DomainMessages",
    "LocaleCode",
    "MessageId",
    "Messages",
]

MessageId: TypeAlias = str
"""Identifier for a message within a domain (e.g., 'welcome', 'error.404')."""

LocaleCode: TypeAlias = str
"""POSIX-style locale code (e.g., 'en', 'fr_FR', 'sr@latin')."""

Domain: TypeAlias = str
"""Namespace partitioning messages (e.g., 'messages', 'validators')."""

Messages: TypeAlias = dict[MessageId, str]
"""Message id to message text mapping for one domain."""

DomainMessages: TypeAlias = dict[Domain, Messages]
"""Domain to message mapping for one catalogue."""
