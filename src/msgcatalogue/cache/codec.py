"""Catalogue artifact encoding.

Serializes a catalogue chain to a JSON document and back. The document
is data only; it is decoded by json and never executed. Text outside
ASCII is written as \\u escapes, so every str (lone surrogates included)
round-trips and the checksum input always encodes.

Document shape::

    {
        "version": 1,
        "locale": "fr_FR",
        "checksum": "<sha256 of the canonical 'catalogues' payload>",
        "catalogues": [
            {"id": "catalogue", "locale": "fr_FR", "messages": {...}, "fallback": "catalogueFr"},
            {"id": "catalogueFr", "locale": "fr", "messages": {...}, "fallback": "catalogueEn"},
            {"id": "catalogueEn", "locale": "en", "messages": {...}, "fallback": null}
        ]
    }

Link ids derive from sanitized locales, so they are stable across runs.
Two distinct locales that sanitize to the same id get a numeric suffix.

Python 3.13+.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.constants import BASE_LINK_ID, CACHE_FORMAT_VERSION
from msgcatalogue.diagnostics import CacheCorruptionError, ErrorTemplate
from msgcatalogue.locale_utils import sanitize_locale

__all__ = ["dump_catalogue", "link_id", "load_catalogue", "payload_checksum"]


def link_id(locale: str) -> str:
    """Derive the record id of a fallback link from its locale.

    Example:
        >>> link_id("fr_FR")
        'catalogueFr_FR'
        >>> link_id("sr@latin")
        'catalogueSr_latin'
    """
    suffix = sanitize_locale(locale)
    return BASE_LINK_ID + suffix[:1].upper() + suffix[1:]


def payload_checksum(records: list[dict[str, Any]]) -> str:
    """SHA-256 over the canonical JSON encoding of the link records."""
    canonical = json.dumps(records, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def dump_catalogue(catalogue: MessageCatalogue) -> str:
    """Encode a catalogue and its whole fallback chain.

    Args:
        catalogue: Head of the chain

    Returns:
        JSON document text
    """
    links = list(catalogue.chain())

    ids: list[str] = [BASE_LINK_ID]
    used = {BASE_LINK_ID}
    for link in links[1:]:
        candidate = base = link_id(link.locale)
        counter = 2
        while candidate in used:
            candidate = f"{base}_{counter}"
            counter += 1
        used.add(candidate)
        ids.append(candidate)

    records: list[dict[str, Any]] = [
        {
            "id": ids[index],
            "locale": link.locale,
            "messages": link.all(),
            "fallback": ids[index + 1] if index + 1 < len(links) else None,
        }
        for index, link in enumerate(links)
    ]

    document = {
        "version": CACHE_FORMAT_VERSION,
        "locale": catalogue.locale,
        "checksum": payload_checksum(records),
        "catalogues": records,
    }
    return json.dumps(document, indent=1)


def load_catalogue(
    content: str, *, path: str = "", verify_checksum: bool = True
) -> MessageCatalogue:
    """Decode a document produced by dump_catalogue().

    Args:
        content: JSON document text
        path: Artifact path, for diagnostics only
        verify_checksum: Reject documents whose payload checksum differs

    Returns:
        Head catalogue with its fallback chain relinked

    Raises:
        CacheCorruptionError: If the document is malformed, has an
            unsupported version, or fails checksum verification
    """
    try:
        document = json.loads(content)
    except ValueError as e:
        raise CacheCorruptionError(ErrorTemplate.cache_corrupt(path, str(e)), path=path) from e

    if not isinstance(document, dict):
        raise CacheCorruptionError(
            ErrorTemplate.cache_corrupt(path, "document is not an object"), path=path
        )

    version = document.get("version")
    if version != CACHE_FORMAT_VERSION:
        raise CacheCorruptionError(
            ErrorTemplate.cache_version_mismatch(path, version, CACHE_FORMAT_VERSION), path=path
        )

    records = document.get("catalogues")
    if not isinstance(records, list) or not records:
        raise CacheCorruptionError(
            ErrorTemplate.cache_corrupt(path, "missing 'catalogues' records"), path=path
        )

    if verify_checksum:
        expected = str(document.get("checksum", ""))
        actual = payload_checksum(records)
        if expected != actual:
            raise CacheCorruptionError(
                ErrorTemplate.cache_checksum_mismatch(path, expected, actual), path=path
            )

    try:
        by_id = {
            record["id"]: (record, MessageCatalogue(record["locale"], record["messages"]))
            for record in records
        }
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise CacheCorruptionError(
            ErrorTemplate.cache_corrupt(path, f"malformed record: {e!r}"), path=path
        ) from e

    if BASE_LINK_ID not in by_id:
        raise CacheCorruptionError(
            ErrorTemplate.cache_corrupt(path, f"missing '{BASE_LINK_ID}' record"), path=path
        )

    head = by_id[BASE_LINK_ID][1]
    current_id = BASE_LINK_ID
    visited = {current_id}
    while (next_id := by_id[current_id][0].get("fallback")) is not None:
        if not isinstance(next_id, str) or next_id not in by_id or next_id in visited:
            raise CacheCorruptionError(
                ErrorTemplate.cache_corrupt(path, f"broken fallback link '{next_id}'"),
                path=path,
            )
        by_id[current_id][1].add_fallback_catalogue(by_id[next_id][1])
        visited.add(next_id)
        current_id = next_id

    return head
