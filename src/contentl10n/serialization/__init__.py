"""Translation tree serialization to the ``<languages>`` document format.

Python 3.13+. External dependency: lxml.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp
from .document import KeyCollision, TranslationDocument
from .languages import resolve_available_languages
from .serializer import TranslationTreeSerializer, create_parser

__all__ = [
    "DepthGuard",
    "DepthLimitExceededError",
    "KeyCollision",
    "TranslationDocument",
    "TranslationTreeSerializer",
    "create_parser",
    "depth_clamp",
    "resolve_available_languages",
]
