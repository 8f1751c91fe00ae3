"""Extractor tiers and the order they are tried in."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from sweep.index.parser import detect_language

if TYPE_CHECKING:
    from .base import ModuleExtractor

# Tried in order; the first tier that parses a file wins.
_TIERS = ("precise", "permissive")


@lru_cache(maxsize=None)
def _create_extractor(tier: str) -> "ModuleExtractor":
    """Create and cache an extractor instance for a tier."""
    if tier == "precise":
        from .javascript_lang import JavaScriptExtractor

        return JavaScriptExtractor()
    elif tier == "permissive":
        from .lenient_lang import LenientExtractor

        return LenientExtractor()
    raise ValueError(f"Unknown extractor tier: {tier}")


def get_extractor(tier: str) -> "ModuleExtractor":
    """Get the extractor for a tier name ('precise' or 'permissive').

    Raises:
        ValueError: If the tier is unknown.
    """
    return _create_extractor(tier)


def get_extractor_chain(path: str) -> list["ModuleExtractor"]:
    """Return the extractor tiers for a file, or an empty list for non-scripts."""
    if detect_language(path) is None:
        return []
    return [_create_extractor(tier) for tier in _TIERS]
