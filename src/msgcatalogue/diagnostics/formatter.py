"""Rendering of catalogue diagnostics for terminals, logs and tooling.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """How a diagnostic is rendered."""

    BLOCK = "block"  # Compiler-style, one context field per line
    LINE = "line"  # Single line with key=value context, for log records
    JSON = "json"  # One JSON object per diagnostic


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Formats diagnostics with their locale, resource and path context.

    Attributes:
        output_format: Rendering style
        truncate: Shorten free-text fields (resource locators, hints)
        max_field_length: Field length kept when truncating

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.LINE)
        >>> print(formatter.format(ErrorTemplate.invalid_locale(" fr")))
        LOCALE_INVALID: Invalid " fr" locale. locale=' fr'
    """

    output_format: OutputFormat = OutputFormat.BLOCK
    truncate: bool = False
    max_field_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic."""
        match self.output_format:
            case OutputFormat.BLOCK:
                return self._block(diagnostic)
            case OutputFormat.LINE:
                return self._line(diagnostic)
            case OutputFormat.JSON:
                return self._json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics; blocks are separated by a blank line."""
        separator = "\n\n" if self.output_format is OutputFormat.BLOCK else "\n"
        return separator.join(map(self.format, diagnostics))

    def context(self, diagnostic: Diagnostic) -> dict[str, str]:
        """Context fields of a diagnostic that are set, in display order."""
        fields = {
            "path": diagnostic.path,
            "locale": diagnostic.locale,
            "resource": diagnostic.resource,
            "help": diagnostic.hint,
        }
        return {
            name: value if name in ("path", "locale") else self._shorten(value)
            for name, value in fields.items()
            if value is not None and (value or name == "locale")
        }

    def _block(self, diagnostic: Diagnostic) -> str:
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {diagnostic.message}"]
        for name, value in self.context(diagnostic).items():
            match name:
                case "path":
                    lines.append(f"  --> {value}")
                case "locale":
                    lines.append(f"  = locale: {value!r}")
                case _:
                    lines.append(f"  = {name}: {value}")
        return "\n".join(lines)

    def _line(self, diagnostic: Diagnostic) -> str:
        context = self.context(diagnostic)
        context.pop("help", None)
        pairs = " ".join(f"{name}={value!r}" for name, value in context.items())
        head = f"{diagnostic.code.name}: {self._shorten(diagnostic.message)}"
        return f"{head} {pairs}" if pairs else head

    def _json(self, diagnostic: Diagnostic) -> str:
        record: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "severity": diagnostic.severity,
            "message": self._shorten(diagnostic.message),
        }
        for name, value in self.context(diagnostic).items():
            record["hint" if name == "help" else name] = value
        return json.dumps(record, ensure_ascii=False)

    def _shorten(self, text: str) -> str:
        if not self.truncate or len(text) <= self.max_field_length:
            return text
        return text[: self.max_field_length] + "..."
