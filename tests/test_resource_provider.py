"""Tests for ResourceCatalogueProvider.

Python 3.13+.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from msgcatalogue.catalogue import ResourceDescriptor
from msgcatalogue.diagnostics import (
    InvalidLocaleError,
    LoaderNotRegisteredError,
    ResourceNotFoundError,
)
from msgcatalogue.loaders import ArrayLoader, JsonFileLoader
from msgcatalogue.providers import ResourceCatalogueProvider
from tests.helpers.resources import CountingLoader, write_resource


class TestResourceRegistration:
    """Test loader and resource registration."""

    def test_constructor_registers_loaders_and_resources(self) -> None:
        """Constructor accepts loaders and (format, resource, locale[, domain]) specs."""
        provider = ResourceCatalogueProvider(
            {"array": ArrayLoader()},
            [("array", {"a": "A"}, "en"), ("array", {"b": "B"}, "en", "validators")],
        )

        assert set(provider.loaders) == {"array"}
        assert provider.get_resources("en") == (
            ResourceDescriptor("array", {"a": "A"}, "en", "messages"),
            ResourceDescriptor("array", {"b": "B"}, "en", "validators"),
        )

    def test_loaders_view_is_read_only(self) -> None:
        """loaders cannot be mutated from outside."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        with pytest.raises(TypeError):
            provider.loaders["json"] = JsonFileLoader()  # type: ignore[index]

    def test_add_loader_replaces(self) -> None:
        """Registering a format again replaces its loader."""
        first, second = ArrayLoader(), ArrayLoader()
        provider = ResourceCatalogueProvider({"array": first})
        provider.add_loader("array", second)

        assert provider.loaders["array"] is second

    def test_add_loader_none_rejected(self) -> None:
        """None is not a loader."""
        with pytest.raises(TypeError, match="must not be None"):
            ResourceCatalogueProvider().add_loader("array", None)  # type: ignore[arg-type]

    def test_invalid_locale_rejected_on_add(self) -> None:
        """Invalid locales fail at registration time."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        with pytest.raises(InvalidLocaleError):
            provider.add_resource("array", {}, "fr FR")
        assert provider.get_resources("fr FR") == ()

    def test_unknown_format_accepted_at_registration(self) -> None:
        """Formats are only checked when the locale is resolved."""
        provider = ResourceCatalogueProvider()
        provider.add_resource("yaml", "messages.yaml", "en")
        assert len(provider.get_resources("en")) == 1


class TestGetCatalogue:
    """Test catalogue resolution."""

    def test_no_resources_gives_empty_catalogue(self) -> None:
        """A locale without resources resolves to an empty catalogue."""
        catalogue = ResourceCatalogueProvider().get_catalogue("en")

        assert catalogue.locale == "en"
        assert catalogue.all() == {}
        assert catalogue.fallback_catalogue is None

    def test_later_resources_win(self) -> None:
        """Resources merge in registration order."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        provider.add_resource("array", {"a": "1", "b": "1"}, "en")
        provider.add_resource("array", {"a": "2"}, "en")

        assert provider.get_catalogue("en").all("messages") == {"a": "2", "b": "1"}

    def test_resources_recorded_on_catalogue(self, tmp_path: Path) -> None:
        """The catalogue records every resource it was built from."""
        path = write_resource(tmp_path / "en.json", '{"a": "A"}')
        provider = ResourceCatalogueProvider({"json": JsonFileLoader()})
        provider.add_resource("json", path, "en")

        assert provider.get_catalogue("en").resources == (ResourceDescriptor("json", path, "en"),)

    def test_loader_called_per_resource(self, counting_loader: CountingLoader) -> None:
        """Each resource is loaded with its locale and domain."""
        provider = ResourceCatalogueProvider({"array": counting_loader})
        provider.add_resource("array", {"a": "A"}, "fr", "admin")
        provider.add_resource("array", {"b": "B"}, "en")

        provider.get_catalogue("fr")

        assert counting_loader.calls == [({"a": "A"}, "fr", "admin")]

    def test_unregistered_format(self) -> None:
        """Resolution fails when a resource's format has no loader."""
        provider = ResourceCatalogueProvider()
        provider.add_resource("yaml", "messages.yaml", "en")

        with pytest.raises(LoaderNotRegisteredError, match='"yaml" translation loader') as exc_info:
            provider.get_catalogue("en")
        assert exc_info.value.format == "yaml"

    def test_missing_resource_propagates(self, tmp_path: Path) -> None:
        """Loader errors propagate unchanged."""
        provider = ResourceCatalogueProvider({"json": JsonFileLoader()})
        provider.add_resource("json", tmp_path / "missing.json", "en")

        with pytest.raises(ResourceNotFoundError):
            provider.get_catalogue("en")

    def test_invalid_locale_rejected_on_get(self) -> None:
        """Invalid locales fail at lookup."""
        with pytest.raises(InvalidLocaleError):
            ResourceCatalogueProvider().get_catalogue("fr/FR")

    def test_each_call_builds_new_catalogue(self) -> None:
        """Returned catalogues are independent of each other."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        provider.add_resource("array", {"a": "A"}, "en")

        first = provider.get_catalogue("en")
        first.set("a", "changed")

        assert provider.get_catalogue("en").get("a") == "A"


class TestFreshness:
    """Test per-locale freshness tracking."""

    def test_untracked_locale_is_fresh(self) -> None:
        """Locales never resolved are fresh."""
        assert ResourceCatalogueProvider().is_fresh("en")

    def test_adding_resource_marks_locale_stale(self) -> None:
        """A resource added after resolution makes the locale stale."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        provider.get_catalogue("en")
        provider.add_resource("array", {"a": "A"}, "en")

        assert not provider.is_fresh("en")

        provider.get_catalogue("en")
        assert provider.is_fresh("en")

    def test_other_locales_unaffected(self) -> None:
        """Staleness is tracked per locale."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        provider.get_catalogue("en")
        provider.get_catalogue("fr")
        provider.add_resource("array", {"a": "A"}, "fr")

        assert provider.is_fresh("en")
        assert not provider.is_fresh("fr")

    def test_repr(self) -> None:
        """repr summarizes formats, locales and resource count."""
        provider = ResourceCatalogueProvider({"array": ArrayLoader()})
        provider.add_resource("array", {}, "en")
        assert repr(provider) == (
            "ResourceCatalogueProvider(formats=('array',), locales=('en',), resources=1)"
        )
