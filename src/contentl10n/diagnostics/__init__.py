"""Diagnostic system for localization errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    ContentNotFoundError,
    LocalizationError,
    MalformedDataError,
    NamingCollisionWarning,
    ProviderRegistrationError,
    TransientStoreError,
)

__all__ = [
    "ConfigurationError",
    "ContentNotFoundError",
    "Diagnostic",
    "DiagnosticCode",
    "LocalizationError",
    "MalformedDataError",
    "NamingCollisionWarning",
    "ProviderRegistrationError",
    "TransientStoreError",
]
