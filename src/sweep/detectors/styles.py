"""Unused stylesheets."""

from __future__ import annotations

from sweep.detectors.base import CandidateScanner, ScanContext, has_stale_signal, path_contains
from sweep.detectors.matchers import CSS_MODULE_MATCHERS, STYLE_MATCHERS, AssetRef, any_matcher
from sweep.graph.usage import is_referenced

STYLE_EXTENSIONS = (".css", ".scss", ".sass", ".less", ".styl")

# Files that may reference a stylesheet: scripts, markup, templates and
# other stylesheets (for @import)
STYLE_REFERRERS = frozenset(
    {".js", ".jsx", ".ts", ".tsx", ".html", ".vue", ".svelte"} | set(STYLE_EXTENSIONS)
)

BASE_CONFIDENCE = 80
SHARED_NAMES = ("global", "common", "base", "main", "app", "index", "variables", "mixins")


def style_confidence(ctx: ScanContext, path: str) -> int:
    confidence = BASE_CONFIDENCE
    if path_contains(path, SHARED_NAMES):
        confidence -= 25
    if has_stale_signal(path):
        confidence += 15
    if AssetRef(path).is_css_module:
        confidence += 10
    return confidence


def is_style_used(ctx: ScanContext, path: str) -> bool:
    if is_referenced(ctx.graph, path):
        return True
    ref = AssetRef(path)
    texts = list(ctx.corpus.iter_texts(STYLE_REFERRERS, exclude=path))
    if any(any_matcher(text, ref, STYLE_MATCHERS) for _, text in texts):
        return True
    if ref.is_css_module:
        return any(any_matcher(text, ref, CSS_MODULE_MATCHERS) for _, text in texts)
    return False


SCANNER = CandidateScanner(
    category="styles",
    patterns=tuple(f"**/*{ext}" for ext in STYLE_EXTENSIONS),
    is_used=is_style_used,
    score=style_confidence,
    file_type=lambda path: "styles",
)


def detect_unused_styles(ctx: ScanContext):
    return SCANNER.scan(ctx)
