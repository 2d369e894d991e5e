"""msgcatalogue - Layered message catalogue resolution with on-disk caching.

Resolves the messages of a locale by loading resources through pluggable
format loaders, linking locale fallbacks (fr_FR -> fr -> configured
fallbacks), and persisting resolved catalogue chains to a freshness-checked
cache.

Public API:
    MessageCatalogue - Messages of one locale plus its fallback chain
    ResourceDescriptor - (format, resource, locale, domain) registration record
    ResourceCatalogueProvider - Loads and merges registered resources
    FallbackCatalogueProvider - Links fallback catalogues
    CacheCatalogueProvider - Persists resolved chains on disk
    CacheConfig - Cache directory and freshness settings
    Translator - Facade composing the provider chain

Exceptions:
    CatalogueError - Base exception class
    InvalidLocaleError - Locale failed validation
    LoaderNotRegisteredError - No loader for a resource format
    ResourceNotFoundError - Loader could not locate/parse a resource
    CacheCorruptionError - Unreadable cache artifact

Submodules:
    msgcatalogue.loaders - Loader protocol and Array/JSON/PO/MO loaders
    msgcatalogue.cache - Artifact codec and storage
    msgcatalogue.diagnostics - Error types, codes and formatting
    msgcatalogue.locale_utils - Locale validation helpers
"""

from .catalogue import MessageCatalogue, ResourceDescriptor
from .config import CacheConfig
from .diagnostics import (
    CacheCorruptionError,
    CacheError,
    CatalogueError,
    InvalidLocaleError,
    InvalidResourceError,
    LoaderNotRegisteredError,
    ResourceNotFoundError,
)
from .providers import (
    CacheCatalogueProvider,
    CatalogueProvider,
    FallbackCatalogueProvider,
    ResourceCatalogueProvider,
)
from .translator import Translator

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgcatalogue")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CacheCatalogueProvider",
    "CacheConfig",
    "CacheCorruptionError",
    "CacheError",
    "CatalogueError",
    "CatalogueProvider",
    "FallbackCatalogueProvider",
    "InvalidLocaleError",
    "InvalidResourceError",
    "LoaderNotRegisteredError",
    "MessageCatalogue",
    "ResourceCatalogueProvider",
    "ResourceDescriptor",
    "ResourceNotFoundError",
    "Translator",
    "__version__",
]
