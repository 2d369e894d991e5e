"""Catalogue provider chain.

Layers, innermost first:
    ResourceCatalogueProvider - loads and merges registered resources
    FallbackCatalogueProvider - links parent-language and configured fallbacks
    CacheCatalogueProvider    - persists resolved chains on disk

Python 3.13+.
"""

from msgcatalogue.providers.base import CatalogueProvider
from msgcatalogue.providers.cache import CacheCatalogueProvider
from msgcatalogue.providers.fallback import FallbackCatalogueProvider
from msgcatalogue.providers.resource import ResourceCatalogueProvider

__all__ = [
    "CacheCatalogueProvider",
    "CatalogueProvider",
    "FallbackCatalogueProvider",
    "ResourceCatalogueProvider",
]
