"""Caching catalogue provider.

Wraps another provider and materializes its catalogues as on-disk
artifacts. A fresh artifact is decoded directly without invoking any
loader; a stale or missing one is regenerated through the wrapped
provider and persisted.

Cache paths depend on the locale and, when a fallback provider is part
of the chain, on a hash of its fallback locales, so a configuration
change selects a different artifact instead of requiring invalidation.

Python 3.13+.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable
from pathlib import Path

from msgcatalogue.cache.codec import dump_catalogue, load_catalogue
from msgcatalogue.cache.storage import CacheStorage, FileCacheStorage
from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.config import CacheConfig
from msgcatalogue.constants import CACHE_FILE_PREFIX, CACHE_FILE_SUFFIX
from msgcatalogue.diagnostics import CacheCorruptionError, DiagnosticFormatter, OutputFormat
from msgcatalogue.locale_utils import assert_locale
from msgcatalogue.providers.base import CatalogueProvider
from msgcatalogue.providers.fallback import FallbackCatalogueProvider
from msgcatalogue.types import LocaleCode

__all__ = ["CacheCatalogueProvider"]

logger = logging.getLogger(__name__)

_LOG_FORMATTER = DiagnosticFormatter(output_format=OutputFormat.LINE, truncate=True)


class CacheCatalogueProvider:
    """Persists catalogues of a wrapped provider to a cache directory.

    Args:
        provider: Provider generating catalogues on a cache miss
        config: Cache directory and freshness settings
        storage: Artifact storage (default: FileCacheStorage built from config)
        fallback: Fallback provider whose locales key the cache paths. When
            omitted and ``provider`` is itself a FallbackCatalogueProvider,
            that provider is used.

    Example:
        >>> resources = ResourceCatalogueProvider({"json": JsonFileLoader()})
        >>> fallback = FallbackCatalogueProvider(resources, ["en"])
        >>> provider = CacheCatalogueProvider(fallback, CacheConfig("var/cache"))
        >>> catalogue = provider.get_catalogue("fr_FR")  # loads, then writes the artifact
        >>> catalogue = provider.get_catalogue("fr_FR")  # decoded from the artifact
    """

    __slots__ = ("_config", "_fallback", "_provider", "_storage")

    def __init__(
        self,
        provider: CatalogueProvider,
        config: CacheConfig,
        *,
        storage: CacheStorage | None = None,
        fallback: FallbackCatalogueProvider | None = None,
    ) -> None:
        self._provider = provider
        self._config = config
        self._storage: CacheStorage = storage or FileCacheStorage(
            auto_reload=config.auto_reload, file_mode=config.file_mode
        )
        if fallback is None and isinstance(provider, FallbackCatalogueProvider):
            fallback = provider
        self._fallback = fallback

    @property
    def provider(self) -> CatalogueProvider:
        """The wrapped provider."""
        return self._provider

    @property
    def config(self) -> CacheConfig:
        """Cache configuration."""
        return self._config

    def get_catalogue(self, locale: LocaleCode) -> MessageCatalogue:
        """Return the cached catalogue for locale, regenerating it if stale.

        Raises:
            InvalidLocaleError: If locale fails validation
            LoaderNotRegisteredError: Propagated from the wrapped provider on a miss
            ResourceNotFoundError: Propagated from the wrapped provider on a miss
            CacheError: If a regenerated artifact cannot be written
        """
        assert_locale(locale)
        provider = self._provider
        catalogue = self.cache(locale, lambda: provider.get_catalogue(locale))
        # The artifact path is keyed by the current fallback locales.
        if self._fallback is not None:
            self._fallback.mark_fresh(locale)
        return catalogue

    def is_fresh(self, locale: LocaleCode) -> bool:
        """Delegate to the wrapped provider; caching does not change data currency."""
        return self._provider.is_fresh(locale)

    def get_cache_path(self, locale: LocaleCode) -> Path:
        """Artifact path for locale under the current fallback configuration."""
        name = f"{CACHE_FILE_PREFIX}.{locale}"
        if self._fallback is not None:
            name = f"{name}.{_fallback_digest(self._fallback)}"
        return self._config.cache_dir / f"{name}{CACHE_FILE_SUFFIX}"

    def cache(
        self, locale: LocaleCode, generator: Callable[[], MessageCatalogue]
    ) -> MessageCatalogue:
        """Load the artifact for locale, or generate and persist it.

        On a hit no loader runs. On a miss the generated catalogue itself is
        returned, not a decoded copy. The recorded dependency set is exactly
        the base catalogue's resources.

        Args:
            locale: Locale keying the artifact
            generator: Zero-argument callable producing the catalogue on a miss

        Raises:
            TypeError: If generator is not callable
        """
        if not callable(generator):
            msg = (
                "Invalid type for generator argument. "
                f"Expected callable, but got {type(generator).__name__!r}"
            )
            raise TypeError(msg)

        path = self.get_cache_path(locale)

        if self._storage.is_fresh(path):
            try:
                catalogue = load_catalogue(
                    self._storage.read(path),
                    path=str(path),
                    verify_checksum=self._config.verify_checksum,
                )
            except CacheCorruptionError as e:
                detail = _LOG_FORMATTER.format(e.diagnostic) if e.diagnostic else str(e)
                logger.warning("Discarding corrupt cache artifact %s: %s", path, detail)
            else:
                logger.debug("Cache hit for '%s': %s", locale, path)
                return catalogue

        catalogue = generator()
        self._storage.write(path, dump_catalogue(catalogue), catalogue.resources)
        logger.info("Regenerated catalogue cache for '%s': %s", locale, path)
        return catalogue

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"CacheCatalogueProvider(cache_dir={str(self._config.cache_dir)!r}, "
            f"provider={self._provider!r})"
        )


def _fallback_digest(fallback: FallbackCatalogueProvider) -> str:
    """Stable SHA-1 of the fallback locale list (order-sensitive)."""
    encoded = json.dumps(list(fallback.fallback_locales), separators=(",", ":"))
    return hashlib.sha1(encoded.encode("utf-8"), usedforsecurity=False).hexdigest()
