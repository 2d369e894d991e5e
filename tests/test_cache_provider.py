"""Tests for CacheCatalogueProvider.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.config import CacheConfig
from msgcatalogue.diagnostics import InvalidLocaleError
from msgcatalogue.loaders import JsonFileLoader
from msgcatalogue.providers import (
    CacheCatalogueProvider,
    FallbackCatalogueProvider,
    ResourceCatalogueProvider,
)
from tests.helpers.resources import CountingLoader, bump_mtime, write_resource


def _build(
    loader: CountingLoader, cache_dir: Path, fallback_locales: list[str]
) -> tuple[ResourceCatalogueProvider, FallbackCatalogueProvider, CacheCatalogueProvider]:
    resources = ResourceCatalogueProvider({"array": loader})
    resources.add_resource("array", {"hello": "Hello", "ok": "OK"}, "en")
    resources.add_resource("array", {"hello": "Bonjour"}, "fr")
    fallback = FallbackCatalogueProvider(resources, fallback_locales)
    return resources, fallback, CacheCatalogueProvider(fallback, CacheConfig(cache_dir))


class TestCachePaths:
    """Test artifact path derivation."""

    def test_path_includes_fallback_digest(
        self, counting_loader: CountingLoader, cache_dir: Path
    ) -> None:
        """Path embeds the locale and a SHA-1 of the fallback locales."""
        _, _, provider = _build(counting_loader, cache_dir, ["en"])
        path = provider.get_cache_path("fr")

        assert path.parent == cache_dir
        prefix, locale, digest, suffix = path.name.split(".")
        assert (prefix, locale, suffix) == ("catalogue", "fr", "json")
        assert len(digest) == 40

    def test_distinct_fallbacks_distinct_paths(
        self, counting_loader: CountingLoader, cache_dir: Path
    ) -> None:
        """Changing the fallback locales selects another artifact."""
        _, fallback, provider = _build(counting_loader, cache_dir, ["en"])
        first = provider.get_cache_path("fr")

        fallback.set_fallback_locales(["en", "de"])

        assert provider.get_cache_path("fr") != first

        fallback.set_fallback_locales(["en"])
        assert provider.get_cache_path("fr") == first

    def test_path_without_fallback_provider(self, cache_dir: Path) -> None:
        """Without a fallback provider only the locale keys the path."""
        provider = CacheCatalogueProvider(ResourceCatalogueProvider(), CacheConfig(cache_dir))
        assert provider.get_cache_path("fr_FR") == cache_dir / "catalogue.fr_FR.json"

    def test_explicit_fallback_argument(
        self, counting_loader: CountingLoader, cache_dir: Path
    ) -> None:
        """An explicitly given fallback provider keys the path."""
        resources, fallback, implicit = _build(counting_loader, cache_dir, ["en"])
        explicit = CacheCatalogueProvider(resources, CacheConfig(cache_dir), fallback=fallback)

        assert explicit.get_cache_path("fr") == implicit.get_cache_path("fr")


class TestGetCatalogue:
    """Test cache hits, misses and regeneration."""

    def test_miss_then_hit(self, counting_loader: CountingLoader, cache_dir: Path) -> None:
        """Second lookup is served from the artifact with no loader calls."""
        _, _, provider = _build(counting_loader, cache_dir, ["en"])

        generated = provider.get_catalogue("fr")
        assert len(counting_loader.calls) == 2
        assert provider.get_cache_path("fr").is_file()

        counting_loader.calls.clear()
        cached = provider.get_catalogue("fr")

        assert counting_loader.calls == []
        assert cached == generated
        assert cached.locale_chain() == ("fr", "en")
        assert cached.get("ok") == "OK"

    def test_miss_returns_generated_catalogue(
        self, counting_loader: CountingLoader, cache_dir: Path
    ) -> None:
        """On a miss the generated catalogue (with resources) is returned."""
        _, _, provider = _build(counting_loader, cache_dir, ["en"])

        catalogue = provider.get_catalogue("fr")

        assert len(catalogue.resources) == 1
        assert provider.get_catalogue("fr").resources == ()

    def test_stale_resource_file_regenerates(self, tmp_path: Path, cache_dir: Path) -> None:
        """Touching a resource file triggers regeneration."""
        path = write_resource(tmp_path / "fr.json", '{"hello": "Bonjour"}')
        resources = ResourceCatalogueProvider({"json": JsonFileLoader()})
        resources.add_resource("json", path, "fr")
        provider = CacheCatalogueProvider(resources, CacheConfig(cache_dir))
        provider.get_catalogue("fr")

        write_resource(path, '{"hello": "Salut"}')
        bump_mtime(path)

        assert provider.get_catalogue("fr").get("hello") == "Salut"

    def test_auto_reload_disabled_keeps_artifact(self, tmp_path: Path, cache_dir: Path) -> None:
        """With auto_reload off, changed resource files are not picked up."""
        path = write_resource(tmp_path / "fr.json", '{"hello": "Bonjour"}')
        resources = ResourceCatalogueProvider({"json": JsonFileLoader()})
        resources.add_resource("json", path, "fr")
        provider = CacheCatalogueProvider(resources, CacheConfig(cache_dir, auto_reload=False))
        provider.get_catalogue("fr")

        write_resource(path, '{"hello": "Salut"}')
        bump_mtime(path)

        assert provider.get_catalogue("fr").get("hello") == "Bonjour"

    def test_corrupt_artifact_regenerated(
        self,
        counting_loader: CountingLoader,
        cache_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A corrupt artifact is logged, discarded and rewritten."""
        _, _, provider = _build(counting_loader, cache_dir, ["en"])
        provider.get_catalogue("fr")
        path = provider.get_cache_path("fr")
        path.write_text("{corrupt", encoding="utf-8")
        counting_loader.calls.clear()

        with caplog.at_level(logging.WARNING, logger="msgcatalogue.providers.cache"):
            catalogue = provider.get_catalogue("fr")

        assert catalogue.get("hello") == "Bonjour"
        assert counting_loader.calls
        assert "Discarding corrupt cache artifact" in caplog.text
        assert "CACHE_ARTIFACT_CORRUPT" in caplog.text
        assert path.read_text(encoding="utf-8").startswith("{\n")

    def test_lone_surrogate_message_cached(self, tmp_path: Path, cache_dir: Path) -> None:
        """Messages holding unpaired surrogates are written and read back intact."""
        path = write_resource(tmp_path / "en.json", '{"a": "\\ud800"}')
        resources = ResourceCatalogueProvider({"json": JsonFileLoader()})
        resources.add_resource("json", path, "en")
        provider = CacheCatalogueProvider(
            FallbackCatalogueProvider(resources), CacheConfig(cache_dir)
        )

        generated = provider.get_catalogue("en")
        cached = provider.get_catalogue("en")

        assert generated.get("a") == "\ud800"
        assert cached == generated
        assert provider.get_cache_path("en").read_text(encoding="utf-8").isascii()

    def test_hit_after_fallback_change_is_fresh(
        self, counting_loader: CountingLoader, cache_dir: Path
    ) -> None:
        """Returning to earlier fallback locales serves a fresh artifact."""
        _, fallback, provider = _build(counting_loader, cache_dir, ["en"])
        provider.get_catalogue("fr")
        fallback.set_fallback_locales(["en", "de"])
        assert not provider.is_fresh("fr")

        fallback.set_fallback_locales(["en"])
        counting_loader.calls.clear()
        catalogue = provider.get_catalogue("fr")

        assert counting_loader.calls == []
        assert catalogue.locale_chain() == ("fr", "en")
        assert provider.is_fresh("fr")

    def test_invalid_locale(self, counting_loader: CountingLoader, cache_dir: Path) -> None:
        """Invalid locales are rejected before touching the cache."""
        _, _, provider = _build(counting_loader, cache_dir, ["en"])
        with pytest.raises(InvalidLocaleError):
            provider.get_catalogue("../etc")
        assert not cache_dir.exists()

    def test_is_fresh_delegates(self, counting_loader: CountingLoader, cache_dir: Path) -> None:
        """Freshness reflects the wrapped provider."""
        resources, _, provider = _build(counting_loader, cache_dir, ["en"])
        provider.get_catalogue("fr")
        assert provider.is_fresh("fr")

        resources.add_resource("array", {"new": "Nouveau"}, "fr")
        assert not provider.is_fresh("fr")


class TestCache:
    """Test the generic cache() entry point."""

    def test_generator_must_be_callable(self, cache_dir: Path) -> None:
        """Non-callable generators are rejected."""
        provider = CacheCatalogueProvider(ResourceCatalogueProvider(), CacheConfig(cache_dir))
        with pytest.raises(TypeError, match="Expected callable, but got 'str'"):
            provider.cache("fr", "not callable")  # type: ignore[arg-type]

    def test_generator_called_only_on_miss(self, cache_dir: Path) -> None:
        """The generator runs once; later calls hit the artifact."""
        calls: list[str] = []

        def generate() -> MessageCatalogue:
            calls.append("fr")
            return MessageCatalogue("fr", {"messages": {"a": "A"}})

        provider = CacheCatalogueProvider(ResourceCatalogueProvider(), CacheConfig(cache_dir))
        first = provider.cache("fr", generate)
        second = provider.cache("fr", generate)

        assert calls == ["fr"]
        assert first == second

    def test_repr(self, cache_dir: Path) -> None:
        """repr shows the cache directory."""
        provider = CacheCatalogueProvider(ResourceCatalogueProvider(), CacheConfig(cache_dir))
        assert repr(provider).startswith(f"CacheCatalogueProvider(cache_dir={str(cache_dir)!r}")


class TestCacheConfig:
    """Test cache configuration validation."""

    def test_str_directory_converted(self, tmp_path: Path) -> None:
        """A str cache_dir becomes a Path."""
        config = CacheConfig(str(tmp_path))  # type: ignore[arg-type]
        assert config.cache_dir == tmp_path
        assert config.auto_reload
        assert config.verify_checksum
        assert config.file_mode == 0o666

    def test_empty_directory_rejected(self) -> None:
        """Empty cache_dir is rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            CacheConfig("")  # type: ignore[arg-type]

    @pytest.mark.parametrize("mode", [-1, 0o1000])
    def test_file_mode_range(self, tmp_path: Path, mode: int) -> None:
        """file_mode must be permission bits only."""
        with pytest.raises(ValueError, match="file_mode"):
            CacheConfig(tmp_path, file_mode=mode)
