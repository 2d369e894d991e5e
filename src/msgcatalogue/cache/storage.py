"""Cache storage for catalogue artifacts.

Stores an artifact next to a ``.meta`` sidecar recording the artifact's
dependency set: the resources its catalogue was built from, with the
modification time and size of every file-backed resource at write time.

Writes go to a temporary file in the target directory which then
replaces the artifact via os.replace(), so readers never observe a
half-written file. Concurrent processes may still regenerate the same
artifact independently; the last writer wins.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from msgcatalogue.catalogue import ResourceDescriptor
from msgcatalogue.constants import CACHE_FORMAT_VERSION, META_FILE_SUFFIX
from msgcatalogue.diagnostics import CacheCorruptionError, CacheError, ErrorTemplate

__all__ = ["CacheStorage", "FileCacheStorage"]

logger = logging.getLogger(__name__)


class CacheStorage(Protocol):
    """Protocol for artifact storage consumed by CacheCatalogueProvider."""

    def is_fresh(self, path: Path) -> bool:
        """Check that the artifact exists and its dependency set is unchanged."""
        ...

    def write(self, path: Path, content: str, resources: Iterable[ResourceDescriptor]) -> None:
        """Persist content atomically together with its dependency set."""
        ...

    def read(self, path: Path) -> str:
        """Return the artifact content.

        Raises:
            CacheCorruptionError: If the artifact cannot be read back
        """
        ...


def _meta_path(path: Path) -> Path:
    return path.with_name(path.name + META_FILE_SUFFIX)


def _describe_dependency(resource: ResourceDescriptor) -> dict[str, Any]:
    """Build the metadata record of one dependency."""
    record: dict[str, Any] = {
        "format": resource.format,
        "locale": resource.locale,
        "domain": resource.domain,
        "path": None,
    }
    source = resource.source_path
    if source is not None and source.is_file():
        # String locators that are not files are opaque and never go stale
        stat = source.stat()
        record["path"] = str(source.resolve())
        record["mtime_ns"] = stat.st_mtime_ns
        record["size"] = stat.st_size
    return record


def _dependency_changed(record: dict[str, Any]) -> bool:
    try:
        stat = os.stat(record["path"])
    except (OSError, ValueError):
        return True
    return stat.st_mtime_ns != record.get("mtime_ns") or stat.st_size != record.get("size")


class FileCacheStorage:
    """Filesystem artifact storage with mtime-based freshness.

    Example:
        >>> storage = FileCacheStorage()
        >>> storage.write(Path("/tmp/cache/catalogue.fr.json"), "{}", [])
        >>> storage.is_fresh(Path("/tmp/cache/catalogue.fr.json"))
        True
    """

    __slots__ = ("_auto_reload", "_file_mode")

    def __init__(self, *, auto_reload: bool = True, file_mode: int = 0o666) -> None:
        """Initialize storage.

        Args:
            auto_reload: Check dependencies; when False, existence is enough
            file_mode: Permission bits for written files, before umask
        """
        self._auto_reload = auto_reload
        self._file_mode = file_mode

    def is_fresh(self, path: Path) -> bool:
        """Check artifact existence and, with auto_reload, its dependencies.

        An unreadable or malformed sidecar makes the artifact stale.
        """
        if not path.is_file():
            return False

        if not self._auto_reload:
            return True

        meta_path = _meta_path(path)
        try:
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
            dependencies = meta["resources"]
            version = meta["version"]
            if not isinstance(dependencies, list) or not all(
                isinstance(record, dict) and isinstance(record.get("path"), str | None)
                for record in dependencies
            ):
                raise ValueError("resources must be a list of dependency records")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Unreadable cache metadata %s: %s", meta_path, e)
            return False

        if version != CACHE_FORMAT_VERSION:
            logger.info("Cache metadata %s has version %r; regenerating", meta_path, version)
            return False

        for record in dependencies:
            if record.get("path") is not None:
                if _dependency_changed(record):
                    logger.info("Resource %s changed; %s is stale", record["path"], path)
                    return False

        return True

    def write(self, path: Path, content: str, resources: Iterable[ResourceDescriptor]) -> None:
        """Persist content and its dependency sidecar.

        Raises:
            CacheError: If the cache directory or files cannot be written
        """
        meta = {
            "version": CACHE_FORMAT_VERSION,
            "resources": [_describe_dependency(resource) for resource in resources],
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._dump_file(path, content)
            self._dump_file(_meta_path(path), json.dumps(meta, indent=1))
        except OSError as e:
            raise CacheError(
                ErrorTemplate.cache_write_failed(str(path), str(e)), path=str(path)
            ) from e

        logger.debug("Wrote cache artifact %s (%d dependencies)", path, len(meta["resources"]))

    def read(self, path: Path) -> str:
        """Return the artifact content.

        Raises:
            CacheCorruptionError: If the artifact is missing or not valid UTF-8
        """
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheCorruptionError(
                ErrorTemplate.cache_corrupt(str(path), str(e)), path=str(path)
            ) from e

    def _dump_file(self, path: Path, content: str) -> None:
        """Atomically replace path with content."""
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(content)
            os.chmod(tmp_name, self._file_mode & ~_current_umask())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _current_umask() -> int:
    # os.umask() can only be read by setting it; restore immediately
    mask = os.umask(0)
    os.umask(mask)
    return mask
