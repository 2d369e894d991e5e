"""Format loaders producing catalogue fragments.

A loader turns one raw resource into a MessageCatalogue fragment holding
messages for a single (locale, domain). Providers look loaders up by
format name and merge their fragments.

Components:
    Loader - Protocol for format loaders (structural typing)
    ArrayLoader - In-memory mappings, nested keys flattened with '.'
    FileLoader - Base for file-backed loaders (missing/invalid handling)
    JsonFileLoader - JSON object files
    PoFileLoader - gettext .po files (via Babel)
    MoFileLoader - gettext .mo files (via Babel)

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import os
import struct
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from babel.messages.mofile import read_mo
from babel.messages.pofile import PoFileError, read_po

from msgcatalogue.catalogue import MessageCatalogue
from msgcatalogue.constants import DEFAULT_DOMAIN
from msgcatalogue.diagnostics import ErrorTemplate, InvalidResourceError, ResourceNotFoundError
from msgcatalogue.types import Domain, LocaleCode, Messages

if TYPE_CHECKING:
    from babel.messages.catalog import Catalog

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "Loader",
    # In-memory
    "ArrayLoader",
    # File-backed
    "FileLoader",
    "JsonFileLoader",
    "PoFileLoader",
    "MoFileLoader",
]

logger = logging.getLogger(__name__)


class Loader(Protocol):
    """Protocol for loading one resource into a catalogue fragment.

    This is a Protocol (structural typing) rather than ABC so that any
    object with a matching load() method can be registered.

    Example:
        >>> class UpperLoader:
        ...     def load(self, resource, locale, domain="messages"):
        ...         upper = {k: v.upper() for k, v in resource.items()}
        ...         return MessageCatalogue(locale, {domain: upper})
        >>> provider.add_loader("upper", UpperLoader())
    """

    def load(
        self, resource: object, locale: LocaleCode, domain: Domain = DEFAULT_DOMAIN
    ) -> MessageCatalogue:
        """Load a resource.

        Args:
            resource: Resource locator (path, mapping, ...)
            locale: Locale the messages belong to
            domain: Domain to store the messages under

        Returns:
            Catalogue fragment for ``locale``

        Raises:
            ResourceNotFoundError: If the resource cannot be located
            InvalidResourceError: If the resource cannot be parsed
        """
        ...


def _flatten(messages: Mapping[object, object], prefix: str = "") -> Messages:
    """Flatten nested mappings into dotted ids: {'a': {'b': 'x'}} -> {'a.b': 'x'}."""
    result: Messages = {}
    for key, value in messages.items():
        message_id = f"{prefix}{key}"
        if isinstance(value, Mapping):
            result.update(_flatten(value, f"{message_id}."))
        else:
            result[message_id] = "" if value is None else str(value)
    return result


class ArrayLoader:
    """Loader for in-memory mappings.

    Example:
        >>> ArrayLoader().load({"nav": {"home": "Home"}}, "en").all("messages")
        {'nav.home': 'Home'}
    """

    def load(
        self, resource: object, locale: LocaleCode, domain: Domain = DEFAULT_DOMAIN
    ) -> MessageCatalogue:
        """Flatten the mapping into a catalogue fragment.

        Raises:
            InvalidResourceError: If resource is not a mapping
        """
        if not isinstance(resource, Mapping):
            reason = f"expected a mapping, got {type(resource).__name__}"
            raise InvalidResourceError(
                ErrorTemplate.resource_invalid(resource, locale, reason), resource=resource
            )
        return MessageCatalogue(locale, {domain: _flatten(resource)})


class FileLoader:
    """Base class for file-backed loaders.

    Subclasses implement ``_load_file`` returning a (possibly nested)
    mapping; this class turns a missing file into ResourceNotFoundError and
    a parse failure into InvalidResourceError.
    """

    # Exceptions from _load_file that mean "unparseable content".
    parse_errors: tuple[type[Exception], ...] = (ValueError, UnicodeDecodeError)

    def load(
        self, resource: object, locale: LocaleCode, domain: Domain = DEFAULT_DOMAIN
    ) -> MessageCatalogue:
        """Load messages from a file path.

        Raises:
            ResourceNotFoundError: If the file does not exist
            InvalidResourceError: If resource is not a path or the file cannot be parsed
        """
        if not isinstance(resource, (str, os.PathLike)):
            reason = f"expected a file path, got {type(resource).__name__}"
            raise InvalidResourceError(
                ErrorTemplate.resource_invalid(resource, locale, reason), resource=resource
            )
        path = Path(resource)
        if not path.is_file():
            raise ResourceNotFoundError(
                ErrorTemplate.resource_not_found(resource, locale), resource=resource
            )

        try:
            messages = self._load_file(path)
        except self.parse_errors as e:
            raise InvalidResourceError(
                ErrorTemplate.resource_invalid(resource, locale, str(e)), resource=resource
            ) from e

        logger.debug("Loaded %d messages from %s", len(messages), path)
        return MessageCatalogue(locale, {domain: _flatten(messages)})

    def _load_file(self, path: Path) -> Mapping[object, object]:
        raise NotImplementedError


class JsonFileLoader(FileLoader):
    """Loader for JSON files holding one (optionally nested) object."""

    def _load_file(self, path: Path) -> Mapping[object, object]:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise ValueError(msg)
        return data


def _messages_from_babel(catalog: Catalog) -> Messages:
    """Extract translated messages from a Babel catalog.

    Header, fuzzy and untranslated entries are skipped. Plural entries map
    both the singular and plural ids to the forms joined with '|'.
    """
    messages: Messages = {}
    for message in catalog:
        if not message.id or message.fuzzy:
            continue
        if isinstance(message.id, (list, tuple)):
            forms = message.string
            if not isinstance(forms, (list, tuple)):
                forms = (forms,)
            if not any(forms):
                continue
            text = "|".join(form or "" for form in forms)
            for plural_id in message.id:
                messages[plural_id] = text
        elif message.string:
            messages[message.id] = message.string
    return messages


class PoFileLoader(FileLoader):
    """Loader for gettext .po files, parsed by Babel."""

    parse_errors = (PoFileError, ValueError, UnicodeDecodeError)

    def _load_file(self, path: Path) -> Mapping[object, object]:
        with path.open("rb") as fileobj:
            catalog = read_po(fileobj, ignore_obsolete=True, abort_invalid=True)
        return _messages_from_babel(catalog)


class MoFileLoader(FileLoader):
    """Loader for compiled gettext .mo files, parsed by Babel."""

    parse_errors = (OSError, struct.error, ValueError, UnicodeDecodeError)

    def _load_file(self, path: Path) -> Mapping[object, object]:
        with path.open("rb") as fileobj:
            catalog = read_mo(fileobj)
        return _messages_from_babel(catalog)
