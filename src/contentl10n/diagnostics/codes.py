"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages for translation loading.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Content store errors (unreachable store, missing nodes)
        2000-2999: Document errors (serialization and parsing)
        3000-3999: Configuration errors (settings, translation root)
        4000-4999: Naming warnings (derived key problems)
        5000-5999: Registration errors (provider chain)
    """

    # Content store errors (1000-1999)
    STORE_UNAVAILABLE = 1001
    CONTENT_NOT_FOUND = 1002
    LANGUAGE_LOOKUP_FAILED = 1003

    # Document errors (2000-2999)
    SERIALIZATION_FAILED = 2001
    DOCUMENT_INVALID = 2002
    INVALID_ELEMENT_NAME = 2003
    MAX_DEPTH_EXCEEDED = 2004

    # Configuration errors (3000-3999)
    SETTINGS_NOT_FOUND = 3001
    TRANSLATION_ROOT_MISSING = 3002
    INVALID_CONFIGURATION = 3003

    # Naming warnings (4000-4999)
    KEY_COLLISION = 4001

    # Registration errors (5000-5999)
    PROVIDER_ALREADY_REGISTERED = 5001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        content_id: Content node involved (if any)
        language: Language being processed (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    content_id: int | None = None
    language: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic for logs.

        Example output:
            error[TRANSLATION_ROOT_MISSING]: No translation root for site 'main'
              = content: 42
              = help: Set the translations root on the start page

        Control characters in the message are escaped so that content text
        cannot forge log lines.

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.content_id is not None:
            lines.append(f"  = content: {self.content_id}")
        if self.language is not None:
            lines.append(f"  = language: {_escape(self.language)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    return text.encode("unicode_escape").decode("ascii") if not text.isprintable() else text
