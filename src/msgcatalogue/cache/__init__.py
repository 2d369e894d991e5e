"""On-disk catalogue cache: artifact codec and storage.

Submodules:
    codec   - dump_catalogue / load_catalogue (JSON artifact documents)
    storage - CacheStorage protocol and FileCacheStorage

Python 3.13+.
"""

from msgcatalogue.cache.codec import dump_catalogue, link_id, load_catalogue
from msgcatalogue.cache.storage import CacheStorage, FileCacheStorage

__all__ = [
    "CacheStorage",
    "FileCacheStorage",
    "dump_catalogue",
    "link_id",
    "load_catalogue",
]
