"""Localization exception hierarchy with structured diagnostics.

All exceptions can carry a Diagnostic for rich error information. None of
them escape a translate() call: the serializer, provider and coordinator
contain them and fall back to the last good (or empty) table.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TransientStoreError(LocalizationError):
    """Content store unreachable or timed out.

    Fallback: keep serving the last good table; retried on the next
    trigger event, never in a loop.
    """


class ContentNotFoundError(TransientStoreError):
    """A referenced content node does not exist (deleted or moved away)."""


class MalformedDataError(LocalizationError):
    """Translation document failed to serialize or parse.

    Examples:
    - Derived key that is not a valid XML element name (empty, leading digit)
    - Translation text with XML-incompatible control characters
    - Container nesting beyond MAX_DEPTH
    """


class ConfigurationError(LocalizationError):
    """No translation root resolvable for a site.

    Treated as zero languages / empty document, never fatal.
    """


class ProviderRegistrationError(LocalizationError):
    """Provider could not be added to the localization service."""


class NamingCollisionWarning(UserWarning):
    """Two sibling nodes derive the same key.

    Not raised to callers; recorded on the load result and logged.
    """
