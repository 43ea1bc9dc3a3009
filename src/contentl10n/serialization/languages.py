"""Available language resolution.

The languages a deployment serves are the language branches of its
translation root. When that lookup fails or yields degenerate data
(nothing, or a culture without code or display name) the deployment
falls back to serving its master language alone.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentl10n.locale_utils import Language

if TYPE_CHECKING:
    from contentl10n.content.accessor import ContentTreeAccessor
    from contentl10n.content.model import ContentNode

__all__ = ["resolve_available_languages"]

logger = logging.getLogger(__name__)


def resolve_available_languages(
    accessor: ContentTreeAccessor,
    root: ContentNode | None,
    master_language: str,
) -> tuple[Language, ...]:
    """Languages to serialize, in the store's branch order.

    Args:
        accessor: Content store
        root: Translation root; None when no root is configured
        master_language: Culture used for the fallback

    Returns:
        Unique languages, never empty
    """
    fallback = (Language.from_code(master_language),)
    if root is None:
        return fallback

    try:
        codes = tuple(accessor.get_language_variants(root.content_id))
    except Exception:  # noqa: BLE001 - any store failure degrades to the master language
        logger.warning(
            "Could not read language branches of translation root %s; "
            "falling back to master language '%s'",
            root.content_id,
            master_language,
            exc_info=True,
        )
        return fallback

    languages: dict[str, Language] = {}
    for code in codes:
        language = Language.from_code(code)
        languages.setdefault(language.key, language)

    if not languages or not all(language.is_complete for language in languages.values()):
        logger.warning(
            "Degenerate language branches %r on translation root %s; "
            "falling back to master language '%s'",
            codes,
            root.content_id,
            master_language,
        )
        return fallback
    return tuple(languages.values())
