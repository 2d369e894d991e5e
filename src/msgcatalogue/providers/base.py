"""Catalogue provider protocol.

Every layer of the provider chain (resource loading, fallback linking,
caching) exposes the same two operations, so layers compose by wrapping.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from msgcatalogue.catalogue import MessageCatalogue
    from msgcatalogue.types import LocaleCode

__all__ = ["CatalogueProvider"]


class CatalogueProvider(Protocol):
    """Protocol for objects that resolve a catalogue per locale."""

    def get_catalogue(self, locale: LocaleCode) -> MessageCatalogue:
        """Resolve the catalogue for a locale.

        Raises:
            InvalidLocaleError: If locale fails validation
        """
        ...

    def is_fresh(self, locale: LocaleCode) -> bool:
        """Check whether a catalogue previously returned for locale is still current."""
        ...
