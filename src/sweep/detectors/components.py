"""Unused UI component files."""

from __future__ import annotations

from sweep.detectors.base import CandidateScanner, ScanContext, has_stale_signal, in_directory, name_contains
from sweep.graph.usage import is_referenced

COMPONENT_PATTERNS = (
    "**/*.jsx",
    "**/components/**/*.{js,ts,tsx}",
    "**/*.vue",
    "**/*.svelte",
)

BASE_CONFIDENCE = 85

# Shared structural pieces are often wired up indirectly
STRUCTURAL_NAMES = ("button", "layout", "header", "footer", "nav", "sidebar", "modal", "dialog", "provider")

ROUTED_NAMES = ("page", "screen", "view")
ROUTED_DIRS = frozenset({"pages", "views", "screens"})


def component_confidence(ctx: ScanContext, path: str) -> int:
    confidence = BASE_CONFIDENCE
    if name_contains(path, STRUCTURAL_NAMES):
        confidence -= 20
    if has_stale_signal(path):
        confidence += 10
    if name_contains(path, ROUTED_NAMES) or in_directory(path, ROUTED_DIRS):
        confidence -= 15
    return confidence


def _is_used(ctx: ScanContext, path: str) -> bool:
    return is_referenced(ctx.graph, path)


SCANNER = CandidateScanner(
    category="components",
    patterns=COMPONENT_PATTERNS,
    is_used=_is_used,
    score=component_confidence,
    file_type=lambda path: "components",
    skip_index=True,
)


def detect_unused_components(ctx: ScanContext):
    """Component files nothing imports."""
    return SCANNER.scan(ctx)
