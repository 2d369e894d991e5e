"""Resource-backed catalogue provider.

Holds a registry of loaders keyed by format and, per locale, the ordered
list of resources to load. Resolving a locale loads every registered
resource in order and merges the fragments; later resources win.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TypeAlias

from msgcatalogue.catalogue import MessageCatalogue, ResourceDescriptor
from msgcatalogue.constants import DEFAULT_DOMAIN
from msgcatalogue.diagnostics import ErrorTemplate, LoaderNotRegisteredError
from msgcatalogue.loaders import Loader
from msgcatalogue.locale_utils import assert_locale
from msgcatalogue.types import Domain, LocaleCode

__all__ = ["ResourceCatalogueProvider"]

logger = logging.getLogger(__name__)

# (format, resource, locale) or (format, resource, locale, domain)
ResourceSpec: TypeAlias = tuple[str, object, LocaleCode] | tuple[str, object, LocaleCode, Domain | None]


class ResourceCatalogueProvider:
    """Loads catalogues from registered resources.

    Freshness is tracked per locale: a locale becomes stale when a resource
    is added after its catalogue was produced, and fresh again once it is
    re-resolved.

    Example:
        >>> provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        >>> provider.add_resource("array", {"hello": "Bonjour"}, "fr")
        >>> provider.get_catalogue("fr").get("hello")
        'Bonjour'
    """

    __slots__ = ("_fresh", "_loaders", "_resources")

    def __init__(
        self,
        loaders: Mapping[str, Loader] | None = None,
        resources: Iterable[ResourceSpec] = (),
    ) -> None:
        """Initialize provider.

        Args:
            loaders: Format name -> loader mapping
            resources: Resource specs, each ``(format, resource, locale[, domain])``

        Raises:
            InvalidLocaleError: If a resource spec has an invalid locale
        """
        self._loaders: dict[str, Loader] = {}
        self._resources: dict[LocaleCode, list[ResourceDescriptor]] = {}
        self._fresh: dict[LocaleCode, bool] = {}

        for format_name, loader in (loaders or {}).items():
            self.add_loader(format_name, loader)

        for spec in resources:
            format_name, resource, locale, *rest = spec
            self.add_resource(format_name, resource, locale, rest[0] if rest else None)

    @property
    def loaders(self) -> Mapping[str, Loader]:
        """Read-only view of registered loaders."""
        return MappingProxyType(self._loaders)

    def add_loader(self, format_name: str, loader: Loader) -> None:
        """Register or replace the loader for a format.

        Raises:
            TypeError: If loader is None
        """
        if loader is None:
            msg = f"Loader for format '{format_name}' must not be None"
            raise TypeError(msg)
        self._loaders[format_name] = loader

    def add_resource(
        self,
        format_name: str,
        resource: object,
        locale: LocaleCode,
        domain: Domain | None = None,
    ) -> None:
        """Register a resource for a locale.

        Args:
            format_name: Loader format name (see add_loader())
            resource: Resource locator handed to the loader
            locale: Locale the resource provides messages for
            domain: Message domain (default: "messages")

        Raises:
            InvalidLocaleError: If locale fails validation
        """
        assert_locale(locale)

        descriptor = ResourceDescriptor(
            format=format_name,
            resource=resource,
            locale=locale,
            domain=DEFAULT_DOMAIN if domain is None else domain,
        )
        self._resources.setdefault(locale, []).append(descriptor)

        if locale in self._fresh:
            self._fresh[locale] = False

    def get_resources(self, locale: LocaleCode) -> tuple[ResourceDescriptor, ...]:
        """Resources registered for a locale, in registration order."""
        return tuple(self._resources.get(locale, ()))

    def get_catalogue(self, locale: LocaleCode) -> MessageCatalogue:
        """Load and merge every resource registered for a locale.

        Raises:
            InvalidLocaleError: If locale fails validation
            LoaderNotRegisteredError: If a resource's format has no loader
            ResourceNotFoundError: If a loader cannot locate or parse its resource
        """
        assert_locale(locale)

        catalogue = MessageCatalogue(locale)
        for descriptor in self.get_resources(locale):
            catalogue.add_catalogue(self._load_resource(descriptor))
            catalogue.add_resource(descriptor)

        self._fresh[locale] = True
        logger.debug(
            "Resolved catalogue for '%s' from %d resource(s)",
            locale,
            len(catalogue.resources),
        )
        return catalogue

    def is_fresh(self, locale: LocaleCode) -> bool:
        """Check whether no resource was added since locale was last resolved."""
        return self._fresh.get(locale, True)

    def _load_resource(self, descriptor: ResourceDescriptor) -> MessageCatalogue:
        loader = self._loaders.get(descriptor.format)
        if loader is None:
            raise LoaderNotRegisteredError(
                ErrorTemplate.loader_not_registered(descriptor.format, descriptor.locale),
                format=descriptor.format,
            )

        logger.debug("Loading resource %s", descriptor.describe())
        return loader.load(descriptor.resource, descriptor.locale, descriptor.domain)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        total = sum(len(descriptors) for descriptors in self._resources.values())
        return (
            f"ResourceCatalogueProvider(formats={tuple(self._loaders)!r}, "
            f"locales={tuple(self._resources)!r}, resources={total})"
        )
