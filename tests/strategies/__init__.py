"""Hypothesis strategies for contentl10n property-based testing.

Strategies are organized by domain:

- content: labels, culture codes and generated translation trees

Usage:
    from tests.strategies import labels, translation_trees
"""

from .content import (
    LANGUAGE_POOL,
    GeneratedTree,
    culture_codes,
    labels,
    lookup_keys,
    translation_texts,
    translation_trees,
)

__all__ = [
    "LANGUAGE_POOL",
    "GeneratedTree",
    "culture_codes",
    "labels",
    "lookup_keys",
    "translation_texts",
    "translation_trees",
]
