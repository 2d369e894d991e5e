"""Fallback-chain catalogue provider.

Wraps another provider and links each resolved catalogue to the
catalogues of its fallback locales: first the parent language of a
regional locale (fr_FR -> fr), then the configured fallback locales.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.locale_utils import assert_locale, parent_locale
from msgcatalogue.providers.base import CatalogueProvider
from msgcatalogue.types import LocaleCode

__all__ = ["FallbackCatalogueProvider"]

logger = logging.getLogger(__name__)


class FallbackCatalogueProvider:
    """Links fallback catalogues onto catalogues of the wrapped provider.

    Changing the fallback locales invalidates every locale resolved so
    far, because the fallback list is part of every chain already built.

    Example:
        >>> resources = ResourceCatalogueProvider({"array": ArrayLoader()})
        >>> resources.add_resource("array", {"bar": "foobar"}, "en")
        >>> provider = FallbackCatalogueProvider(resources, ["en"])
        >>> provider.get_catalogue("fr_FR").locale_chain()
        ('fr_FR', 'fr', 'en')
        >>> provider.get_catalogue("fr_FR").get("bar")
        'foobar'
    """

    __slots__ = ("_fallback_locales", "_fresh", "_provider")

    def __init__(
        self,
        provider: CatalogueProvider,
        fallback_locales: Iterable[LocaleCode] = (),
    ) -> None:
        """Initialize provider.

        Args:
            provider: Provider used for both the base and fallback catalogues
            fallback_locales: Configured fallback locales, in priority order

        Raises:
            InvalidLocaleError: If a fallback locale fails validation
        """
        self._provider = provider
        self._fresh: dict[LocaleCode, bool] = {}
        self._fallback_locales: tuple[LocaleCode, ...] = ()
        self.set_fallback_locales(fallback_locales)

    @property
    def provider(self) -> CatalogueProvider:
        """The wrapped provider."""
        return self._provider

    @property
    def fallback_locales(self) -> tuple[LocaleCode, ...]:
        """Configured fallback locales, in priority order."""
        return self._fallback_locales

    def set_fallback_locales(self, locales: Iterable[LocaleCode]) -> None:
        """Replace the configured fallback locales.

        Every locale resolved before the change is marked stale.

        Raises:
            TypeError: If locales is a single str rather than an iterable of codes
            InvalidLocaleError: If any locale fails validation (nothing is changed)
        """
        if isinstance(locales, str):
            msg = (
                "Invalid type for locales argument. "
                f"Expected an iterable of locale codes, but got str {locales!r}"
            )
            raise TypeError(msg)
        validated = tuple(assert_locale(locale) for locale in locales)
        self._fallback_locales = validated

        for locale in self._fresh:
            self._fresh[locale] = False

        logger.debug("Fallback locales set to %s", validated)

    def compute_fallback_locales(self, locale: LocaleCode) -> list[LocaleCode]:
        """Compute the ordered fallback chain for a locale (excluding locale itself).

        Example:
            >>> provider.set_fallback_locales(["en"])
            >>> provider.compute_fallback_locales("fr_FR")
            ['fr', 'en']
            >>> provider.set_fallback_locales(["fr"])
            >>> provider.compute_fallback_locales("fr")
            []
        """
        locales = [fallback for fallback in self._fallback_locales if fallback != locale]

        parent = parent_locale(locale)
        if parent is not None:
            locales.insert(0, parent)

        # dict.fromkeys() removes duplicates while maintaining insertion order
        return list(dict.fromkeys(locales))

    def get_catalogue(self, locale: LocaleCode) -> MessageCatalogue:
        """Resolve the base catalogue and link its fallback chain.

        Raises:
            InvalidLocaleError: If locale fails validation
            LoaderNotRegisteredError: Propagated from the wrapped provider
            ResourceNotFoundError: Propagated from the wrapped provider
        """
        catalogue = self._provider.get_catalogue(locale)
        self.link_fallback_catalogues(catalogue)

        self._fresh[locale] = True
        return catalogue

    def mark_fresh(self, locale: LocaleCode) -> None:
        """Record that locale was resolved under the current fallback locales.

        Used when the resolved chain comes from elsewhere, such as a cache
        artifact keyed by these fallback locales.
        """
        self._fresh[locale] = True

    def link_fallback_catalogues(self, catalogue: MessageCatalogue) -> None:
        """Attach the fallback chain of ``catalogue.locale`` to catalogue.

        Each fallback link is a new catalogue holding a copy of the wrapped
        provider's messages for that locale, so links never share state.
        """
        current = catalogue
        for fallback in self.compute_fallback_locales(catalogue.locale):
            fallback_catalogue = MessageCatalogue(
                fallback, self._provider.get_catalogue(fallback).all()
            )
            current.add_fallback_catalogue(fallback_catalogue)
            current = fallback_catalogue

        logger.debug("Linked fallback chain %s", catalogue.locale_chain())

    def is_fresh(self, locale: LocaleCode) -> bool:
        """Fresh only if the wrapped provider and the local flag both agree."""
        return self._provider.is_fresh(locale) and self._fresh.get(locale, True)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"FallbackCatalogueProvider(fallback_locales={self._fallback_locales!r}, "
            f"provider={self._provider!r})"
        )
