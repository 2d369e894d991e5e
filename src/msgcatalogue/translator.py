"""Translator facade over the provider chain.

Composes the three providers explicitly, in fixed order, and keeps
direct references to each:

    ResourceCatalogueProvider -> FallbackCatalogueProvider -> CacheCatalogueProvider

The cache layer is optional. Resolved catalogues are memoized in process
and re-resolved once the provider chain reports them stale.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from msgcatalogue.cache.storage import CacheStorage
from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.config import CacheConfig
from msgcatalogue.constants import DEFAULT_DOMAIN
from msgcatalogue.diagnostics import ResourceNotFoundError
from msgcatalogue.loaders import Loader
from msgcatalogue.locale_utils import assert_locale, get_system_locale
from msgcatalogue.providers import (
    CacheCatalogueProvider,
    CatalogueProvider,
    FallbackCatalogueProvider,
    ResourceCatalogueProvider,
)
from msgcatalogue.types import Domain, DomainMessages, LocaleCode, MessageId

__all__ = ["Translator"]

logger = logging.getLogger(__name__)


class Translator:
    """Message lookup across a locale's fallback chain.

    Example:
        >>> translator = Translator("fr_FR", fallback_locales=["en"])
        >>> translator.add_loader("array", ArrayLoader())
        >>> translator.add_resource("array", {"hello": "Hello"}, "en")
        >>> translator.add_resource("array", {"hello": "Bonjour"}, "fr")
        >>> translator.trans("hello")
        'Bonjour'

    Example - Cached catalogues:
        >>> translator = Translator("fr", cache=CacheConfig("var/cache/translations"))
    """

    __slots__ = (
        "_cache_provider",
        "_catalogues",
        "_fallback_provider",
        "_locale",
        "_provider",
        "_resource_provider",
    )

    def __init__(
        self,
        locale: LocaleCode | None = None,
        *,
        loaders: Mapping[str, Loader] | None = None,
        fallback_locales: Iterable[LocaleCode] = (),
        cache: CacheConfig | None = None,
        storage: CacheStorage | None = None,
    ) -> None:
        """Initialize translator.

        Args:
            locale: Default locale for lookups (default: get_system_locale())
            loaders: Format name -> loader mapping
            fallback_locales: Configured fallback locales, in priority order
            cache: Enables on-disk caching when given
            storage: Artifact storage override (only used with ``cache``)

        Raises:
            InvalidLocaleError: If locale or a fallback locale fails validation
        """
        self._locale = get_system_locale() if locale is None else assert_locale(locale)
        self._resource_provider = ResourceCatalogueProvider(loaders)
        self._fallback_provider = FallbackCatalogueProvider(
            self._resource_provider, fallback_locales
        )
        self._cache_provider: CacheCatalogueProvider | None = None
        self._provider: CatalogueProvider = self._fallback_provider
        if cache is not None:
            self._cache_provider = CacheCatalogueProvider(
                self._fallback_provider,
                cache,
                storage=storage,
                fallback=self._fallback_provider,
            )
            self._provider = self._cache_provider
        self._catalogues: dict[LocaleCode, MessageCatalogue] = {}

    @property
    def locale(self) -> LocaleCode:
        """Default locale for lookups."""
        return self._locale

    def set_locale(self, locale: LocaleCode) -> None:
        """Change the default locale.

        Raises:
            InvalidLocaleError: If locale fails validation
        """
        self._locale = assert_locale(locale)

    @property
    def fallback_locales(self) -> tuple[LocaleCode, ...]:
        """Configured fallback locales."""
        return self._fallback_provider.fallback_locales

    def set_fallback_locales(self, locales: Iterable[LocaleCode]) -> None:
        """Replace the fallback locales; every memoized catalogue becomes stale."""
        self._fallback_provider.set_fallback_locales(locales)

    @property
    def resource_provider(self) -> ResourceCatalogueProvider:
        """Innermost provider (loader and resource registry)."""
        return self._resource_provider

    @property
    def fallback_provider(self) -> FallbackCatalogueProvider:
        """Fallback-chain provider."""
        return self._fallback_provider

    @property
    def cache_provider(self) -> CacheCatalogueProvider | None:
        """Caching provider, or None when caching is disabled."""
        return self._cache_provider

    def add_loader(self, format_name: str, loader: Loader) -> None:
        """Register or replace the loader for a format."""
        self._resource_provider.add_loader(format_name, loader)

    def add_resource(
        self,
        format_name: str,
        resource: object,
        locale: LocaleCode,
        domain: Domain | None = None,
    ) -> None:
        """Register a resource; the locale's memoized catalogue becomes stale."""
        self._resource_provider.add_resource(format_name, resource, locale, domain)

    def get_catalogue(self, locale: LocaleCode | None = None) -> MessageCatalogue:
        """Return the catalogue chain for locale (default: current locale).

        A missing resource for the requested locale is tolerated when at
        least one fallback locale applies: the catalogue then starts empty
        and every lookup falls through to the fallbacks.

        Raises:
            InvalidLocaleError: If locale fails validation
            LoaderNotRegisteredError: If a resource's format has no loader
            ResourceNotFoundError: If a resource is missing and no fallback applies,
                or a fallback locale's resource is missing
        """
        locale = self._locale if locale is None else assert_locale(locale)

        catalogue = self._catalogues.get(locale)
        if catalogue is not None and self._provider.is_fresh(locale):
            return catalogue

        return self._resolve(locale)

    def trans(
        self,
        message_id: MessageId,
        domain: Domain | None = None,
        locale: LocaleCode | None = None,
    ) -> str:
        """Return message text from the fallback chain, or message_id if undefined."""
        catalogue = self.get_catalogue(locale)
        return catalogue.get(str(message_id), DEFAULT_DOMAIN if domain is None else domain)

    def get_messages(self, locale: LocaleCode | None = None) -> DomainMessages:
        """Merge the whole chain into one mapping; nearer links win."""
        merged: DomainMessages = {}
        for link in reversed(list(self.get_catalogue(locale).chain())):
            for domain, messages in link.all().items():
                merged.setdefault(domain, {}).update(messages)
        return merged

    def _resolve(self, locale: LocaleCode) -> MessageCatalogue:
        try:
            catalogue = self._provider.get_catalogue(locale)
        except ResourceNotFoundError as e:
            if not self._fallback_provider.compute_fallback_locales(locale):
                raise
            logger.warning(
                "Resource missing for locale '%s' (%s); resolving from fallbacks only",
                locale,
                e,
            )
        else:
            self._catalogues[locale] = catalogue
            return catalogue

        # Not memoized: the locale may gain its resource later
        catalogue = MessageCatalogue(locale)
        self._fallback_provider.link_fallback_catalogues(catalogue)
        return catalogue

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Translator(locale={self._locale!r}, "
            f"fallback_locales={self.fallback_locales!r}, "
            f"cached={self._cache_provider is not None}, "
            f"catalogues={len(self._catalogues)})"
        )
