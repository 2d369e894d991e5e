"""Cache configuration for CacheCatalogueProvider.

Provides a single frozen dataclass that encapsulates all cache-related
parameters, shared by the cache provider and its file storage.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for on-disk catalogue caching.

    Attributes:
        cache_dir: Directory holding catalogue artifacts. Created on first
            write. A str is accepted and converted to Path.
        auto_reload: Check recorded resource files for changes before
            trusting an artifact (default: True). When False, an existing
            artifact is always considered fresh.
        verify_checksum: Verify the payload checksum when decoding an
            artifact (default: True).
        file_mode: Permission bits for written artifacts, before the
            process umask is applied (default: 0o666).

    Example:
        >>> config = CacheConfig("/var/cache/app/translations")
        >>> config.cache_dir
        PosixPath('/var/cache/app/translations')

    Example - Production deployment with read-only resources:
        >>> config = CacheConfig("/var/cache/app", auto_reload=False)
    """

    cache_dir: Path
    auto_reload: bool = True
    verify_checksum: bool = True
    file_mode: int = 0o666

    def __post_init__(self) -> None:
        """Normalize and validate configuration values.

        Raises:
            ValueError: If cache_dir is empty or file_mode is outside 0o000-0o777
        """
        if not str(self.cache_dir):
            msg = "cache_dir must not be empty"
            raise ValueError(msg)
        if not 0 <= self.file_mode <= 0o777:
            msg = f"file_mode must be between 0o000 and 0o777, got {self.file_mode:#o}"
            raise ValueError(msg)
        object.__setattr__(self, "cache_dir", Path(self.cache_dir))
