"""Script files that nothing imports (dead code).

Candidates are graph orphans.  Orphans that import something are treated
as entry scripts and skipped, as are index files, library-style files and
files a router or framework is likely to load by convention.
"""

from __future__ import annotations

from sweep.detectors.base import CandidateScanner, ScanContext, has_stale_signal, in_directory, name_contains
from sweep.graph.usage import get_entry_points, get_orphans

BASE_CONFIDENCE = 80

LIBRARY_DIRS = frozenset({"lib", "utils", "helpers", "shared", "common", "constants", "config"})
LIBRARY_NAMES = ("util", "helper", "config", "constant", "type")

DYNAMIC_DIRS = frozenset({"pages", "views", "screens", "routes"})
DYNAMIC_NAMES = ("page", "view", "screen", "route")

ENTRY_NAMES = ("app", "main", "index", "entry", "start")


def is_likely_library(path: str) -> bool:
    return in_directory(path, LIBRARY_DIRS) or name_contains(path, LIBRARY_NAMES)


def is_likely_dynamic(path: str) -> bool:
    return in_directory(path, DYNAMIC_DIRS) or name_contains(path, DYNAMIC_NAMES)


def dead_code_confidence(ctx: ScanContext, path: str) -> int:
    confidence = BASE_CONFIDENCE
    if name_contains(path, ENTRY_NAMES):
        confidence -= 30
    if has_stale_signal(path):
        confidence += 15
    if ctx.graph.has_node(path) and ctx.graph.out_degree(path) == 0:
        confidence += 10
    return confidence


def dead_code_candidates(ctx: ScanContext) -> list[str]:
    """Orphans that are neither entry scripts, library files nor routed files."""
    entry_points = set(get_entry_points(ctx.graph))
    return [
        path
        for path in get_orphans(ctx.graph)
        if path not in entry_points and not is_likely_library(path) and not is_likely_dynamic(path)
    ]


SCANNER = CandidateScanner(
    category="dead",
    patterns=(),
    is_used=lambda ctx, path: False,
    score=dead_code_confidence,
    file_type=lambda path: "scripts",
    skip_index=True,
    source=dead_code_candidates,
)


def detect_dead_code(ctx: ScanContext):
    return SCANNER.scan(ctx)
