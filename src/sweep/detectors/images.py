"""Unused image and media files."""

from __future__ import annotations

from sweep.detectors.base import CandidateScanner, ScanContext, extension, has_stale_signal, path_contains
from sweep.detectors.matchers import IMAGE_MATCHERS, AssetRef, any_matcher
from sweep.graph.usage import is_referenced

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico", ".bmp")
MEDIA_EXTENSIONS = (".mp4", ".webm", ".mp3", ".wav", ".ogg")

BASE_CONFIDENCE = 85
BRANDING_NAMES = ("logo", "icon", "background", "bg", "banner")


def image_file_type(path: str) -> str:
    return "images" if extension(path) in IMAGE_EXTENSIONS else "media"


def image_confidence(ctx: ScanContext, path: str) -> int:
    confidence = BASE_CONFIDENCE
    if path_contains(path, BRANDING_NAMES):
        confidence -= 15
    if has_stale_signal(path):
        confidence += 10
    return confidence


def is_image_used(ctx: ScanContext, path: str) -> bool:
    """Imported through the graph, or named anywhere in project text."""
    if is_referenced(ctx.graph, path):
        return True
    ref = AssetRef(path)
    return any(any_matcher(text, ref, IMAGE_MATCHERS) for _, text in ctx.corpus.iter_texts())


SCANNER = CandidateScanner(
    category="images",
    patterns=tuple(f"**/*{ext}" for ext in IMAGE_EXTENSIONS + MEDIA_EXTENSIONS),
    is_used=is_image_used,
    score=image_confidence,
    file_type=image_file_type,
)


def detect_unused_images(ctx: ScanContext):
    return SCANNER.scan(ctx)
