"""Translator Example - Fallback Chains and On-Disk Caching.

Demonstrates resolving messages across a locale fallback chain and caching
resolved chains on disk.

Scenarios covered:
1. Regional locale falling back to its language, then to English
2. Missing resource tolerated when fallbacks exist
3. Cached catalogues shared between two translators

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from msgcatalogue import CacheConfig, Translator
from msgcatalogue.loaders import ArrayLoader, JsonFileLoader


def example_1_fallback_chain() -> None:
    """Example 1: fr_CA -> fr -> en."""
    print("=" * 60)
    print("Example 1: Fallback chain (fr_CA -> fr -> en)")
    print("=" * 60)

    translator = Translator("fr_CA", loaders={"array": ArrayLoader()}, fallback_locales=["en"])
    translator.add_resource("array", {"cart": "Cart", "checkout": "Checkout", "help": "Help"}, "en")
    translator.add_resource("array", {"cart": "Panier", "checkout": "Paiement"}, "fr")
    translator.add_resource("array", {"cart": "Chariot"}, "fr_CA")

    for message_id in ("cart", "checkout", "help", "undefined"):
        print(f"{message_id:>10}: {translator.trans(message_id)}")

    print(f"chain: {translator.get_catalogue().locale_chain()}")
    print()


def example_2_missing_resource(root: Path) -> None:
    """Example 2: The French file does not exist yet."""
    print("=" * 60)
    print("Example 2: Missing resource with fallback")
    print("=" * 60)

    translator = Translator(
        "fr",
        loaders={"json": JsonFileLoader(), "array": ArrayLoader()},
        fallback_locales=["en"],
    )
    translator.add_resource("json", root / "messages.fr.json", "fr")
    translator.add_resource("array", {"welcome": "Welcome"}, "en")

    print(f"before: {translator.trans('welcome')}")

    (root / "messages.fr.json").write_text(json.dumps({"welcome": "Bienvenue"}), "utf-8")
    print(f"after:  {translator.trans('welcome')}")
    print()


def example_3_cache(root: Path) -> None:
    """Example 3: Second translator reads the artifact, no loader runs."""
    print("=" * 60)
    print("Example 3: On-disk cache")
    print("=" * 60)

    source = root / "messages.de.json"
    source.write_text(json.dumps({"nav": {"home": "Startseite"}}), "utf-8")
    config = CacheConfig(root / "cache")

    for run in (1, 2):
        translator = Translator("de", loaders={"json": JsonFileLoader()}, cache=config)
        translator.add_resource("json", source, "de")
        print(f"run {run}: {translator.trans('nav.home')}")

    print("artifacts:", sorted(p.name for p in config.cache_dir.iterdir()))
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as tmp:
        example_1_fallback_chain()
        example_2_missing_resource(Path(tmp))
        example_3_cache(Path(tmp))
