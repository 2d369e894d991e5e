"""Message catalogue and resource descriptor data types.

A MessageCatalogue holds the messages of one locale, partitioned by
domain, plus an optional link to a fallback catalogue. Linking catalogues
forms a singly linked chain that lookups fall through.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path

from msgcatalogue.constants import DEFAULT_DOMAIN
from msgcatalogue.types import Domain, DomainMessages, LocaleCode, MessageId, Messages

__all__ = ["MessageCatalogue", "ResourceDescriptor"]


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """One translatable resource registered for a locale.

    Attributes:
        format: Name of the loader that reads the resource (e.g., 'json', 'po')
        resource: Opaque locator handed to the loader (path, mapping, ...)
        locale: Locale the resource provides messages for
        domain: Domain the resource's messages are stored under
    """

    format: str
    resource: object
    locale: LocaleCode
    domain: Domain = DEFAULT_DOMAIN

    @property
    def source_path(self) -> Path | None:
        """Filesystem path of the resource, or None for in-memory locators."""
        if isinstance(self.resource, (str, os.PathLike)):
            return Path(self.resource)
        return None

    def describe(self) -> str:
        """Return human-readable description for diagnostics and metadata."""
        source = self.source_path
        where = str(source) if source is not None else f"<{type(self.resource).__name__}>"
        return f"{self.format}:{where} ({self.locale}/{self.domain})"


class MessageCatalogue:
    """Messages of one locale, grouped by domain, with an optional fallback.

    Later writes overwrite earlier values for the same (domain, id). The
    fallback link is set once while a chain is being assembled; callers
    never mutate a catalogue after it has been fully linked.

    Example:
        >>> fr = MessageCatalogue("fr", {"messages": {"hello": "Bonjour"}})
        >>> fr_FR = MessageCatalogue("fr_FR")
        >>> fr_FR.add_fallback_catalogue(fr)
        >>> fr_FR.get("hello")
        'Bonjour'
    """

    __slots__ = ("_fallback", "_locale", "_messages", "_resources")

    def __init__(
        self,
        locale: LocaleCode,
        messages: Mapping[Domain, Mapping[MessageId, str]] | None = None,
    ) -> None:
        """Initialize catalogue.

        Args:
            locale: Locale code this catalogue holds messages for
            messages: Initial domain -> (id -> text) mapping (copied)
        """
        self._locale = locale
        self._messages: DomainMessages = {}
        self._resources: list[ResourceDescriptor] = []
        self._fallback: MessageCatalogue | None = None
        if messages:
            for domain, domain_messages in messages.items():
                self.add(domain_messages, domain)

    @property
    def locale(self) -> LocaleCode:
        """Locale code of this catalogue."""
        return self._locale

    @property
    def domains(self) -> tuple[Domain, ...]:
        """Domains defined in this catalogue, in insertion order."""
        return tuple(self._messages)

    @property
    def fallback_catalogue(self) -> MessageCatalogue | None:
        """Next catalogue in the fallback chain, if any."""
        return self._fallback

    @property
    def resources(self) -> tuple[ResourceDescriptor, ...]:
        """Resources this catalogue was built from, in load order."""
        return tuple(self._resources)

    def all(self, domain: Domain | None = None) -> DomainMessages | Messages:
        """Return a copy of the messages of one domain, or of every domain."""
        if domain is None:
            return {name: dict(messages) for name, messages in self._messages.items()}
        return dict(self._messages.get(domain, {}))

    def set(self, message_id: MessageId, text: str, domain: Domain = DEFAULT_DOMAIN) -> None:
        """Set a single message."""
        self._messages.setdefault(domain, {})[message_id] = text

    def defines(self, message_id: MessageId, domain: Domain = DEFAULT_DOMAIN) -> bool:
        """Check whether this catalogue itself (not its fallbacks) has the message."""
        return message_id in self._messages.get(domain, {})

    def has(self, message_id: MessageId, domain: Domain = DEFAULT_DOMAIN) -> bool:
        """Check whether the message exists anywhere along the fallback chain."""
        return any(link.defines(message_id, domain) for link in self.chain())

    def get(self, message_id: MessageId, domain: Domain = DEFAULT_DOMAIN) -> str:
        """Return message text from the first chain link defining it.

        Returns the message id itself when no link defines it.
        """
        for link in self.chain():
            messages = link._messages.get(domain)
            if messages is not None and message_id in messages:
                return messages[message_id]
        return message_id

    def find_locale(
        self, message_id: MessageId, domain: Domain = DEFAULT_DOMAIN
    ) -> LocaleCode | None:
        """Return the locale of the first chain link defining the message."""
        for link in self.chain():
            if link.defines(message_id, domain):
                return link.locale
        return None

    def add(self, messages: Mapping[MessageId, str], domain: Domain = DEFAULT_DOMAIN) -> None:
        """Merge messages into a domain, overwriting existing ids."""
        self._messages.setdefault(domain, {}).update(messages)

    def replace(self, messages: Mapping[MessageId, str], domain: Domain = DEFAULT_DOMAIN) -> None:
        """Replace every message of a domain."""
        self._messages[domain] = {}
        self.add(messages, domain)

    def add_catalogue(self, catalogue: MessageCatalogue) -> None:
        """Merge another catalogue of the same locale into this one.

        Messages of ``catalogue`` win over existing ones. Its resources are
        appended to this catalogue's resources.

        Raises:
            ValueError: If the catalogues have different locales
        """
        if catalogue.locale != self._locale:
            msg = (
                f"Cannot add a catalogue for locale '{catalogue.locale}' "
                f"as the current locale for this catalogue is '{self._locale}'"
            )
            raise ValueError(msg)

        for domain, messages in catalogue._messages.items():
            self.add(messages, domain)

        for resource in catalogue._resources:
            self.add_resource(resource)

    def add_fallback_catalogue(self, catalogue: MessageCatalogue) -> None:
        """Link the next catalogue of the fallback chain.

        Chains are built head to tail from a de-duplicated locale list, so a
        locale never reappears further down the chain.
        """
        self._fallback = catalogue

    def add_resource(self, resource: ResourceDescriptor) -> None:
        """Record a resource this catalogue depends on (once per equal descriptor)."""
        if resource not in self._resources:
            self._resources.append(resource)

    def chain(self) -> Iterator[MessageCatalogue]:
        """Iterate this catalogue followed by every fallback catalogue."""
        link: MessageCatalogue | None = self
        while link is not None:
            yield link
            link = link._fallback

    def locale_chain(self) -> tuple[LocaleCode, ...]:
        """Locales of this catalogue and its fallbacks, in lookup order."""
        return tuple(link.locale for link in self.chain())

    def __eq__(self, other: object) -> bool:
        """Compare locale, messages and the fallback chain.

        Resources are provenance metadata and do not take part in equality.
        """
        if not isinstance(other, MessageCatalogue):
            return NotImplemented
        return (
            self._locale == other._locale
            and self._messages == other._messages
            and self._fallback == other._fallback
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(MessageCatalogue("fr", {"messages": {"a": "b"}}))
            "MessageCatalogue(locale='fr', domains=('messages',), fallbacks=())"
        """
        fallbacks = self.locale_chain()[1:]
        return (
            f"MessageCatalogue(locale={self._locale!r}, "
            f"domains={self.domains!r}, fallbacks={fallbacks!r})"
        )
