"""Shared machinery for the category detectors.

Every file detector has the same shape: enumerate candidate files by glob,
drop the ones that are used, score the rest.  ``CandidateScanner`` holds
that loop; a detector supplies its patterns, a usage predicate, a scoring
function and a file-type function.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from sweep.graph.model import DependencyGraph
from sweep.index.discovery import BUILD_OUTPUT_DIRS, file_size, matches_glob, read_text
from sweep.index.symbols import ModuleInfo
from sweep.models import DetectorResult, UnusedFile, clamp_confidence

log = logging.getLogger(__name__)

INDEX_FILES = frozenset({"index.js", "index.jsx", "index.ts", "index.tsx"})

STALE_DIRS = frozenset({"temp", "tmp", "old", "deprecated"})
STALE_NAME_FRAGMENTS = ("test", "_old", "-old")

# Text-bearing files consulted by the reference scans
TEXT_EXTENSIONS = frozenset(
    {
        ".js", ".jsx", ".ts", ".tsx",
        ".css", ".scss", ".sass", ".less", ".styl",
        ".html", ".md", ".mdx", ".vue", ".svelte",
    }
)


# ---------------------------------------------------------------------------
# Path signals
# ---------------------------------------------------------------------------


def basename_lower(path: str) -> str:
    return posixpath.basename(path).lower()


def dir_segments(path: str) -> list[str]:
    """Lower-cased directory components of *path* (the basename excluded)."""
    parent = posixpath.dirname(path).lower()
    return [seg for seg in parent.split("/") if seg]


def name_contains(path: str, fragments) -> bool:
    name = basename_lower(path)
    return any(fragment in name for fragment in fragments)


def path_contains(path: str, fragments) -> bool:
    """Whether the basename or any directory segment contains a fragment."""
    parts = [basename_lower(path)] + dir_segments(path)
    return any(fragment in part for part in parts for fragment in fragments)


def in_directory(path: str, names) -> bool:
    return any(seg in names for seg in dir_segments(path))


def is_index_file(path: str) -> bool:
    return posixpath.basename(path) in INDEX_FILES


def has_stale_signal(path: str) -> bool:
    """Temporary/old/deprecated directory, or a test/old name."""
    return in_directory(path, STALE_DIRS) or name_contains(path, STALE_NAME_FRAGMENTS)


def extension(path: str) -> str:
    return posixpath.splitext(path)[1].lower()


# ---------------------------------------------------------------------------
# Scan context
# ---------------------------------------------------------------------------


class TextCorpus:
    """Project text files, each read at most once per scan.

    Files under dependency/build output directories are never part of it.
    """

    def __init__(self, root: Path, files) -> None:
        self._root = Path(root)
        self._paths = [
            f
            for f in files
            if extension(f) in TEXT_EXTENSIONS and not any(matches_glob(f, d) for d in BUILD_OUTPUT_DIRS)
        ]
        self._cache: dict[str, str | None] = {}

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def text(self, path: str) -> str | None:
        if path not in self._cache:
            self._cache[path] = read_text(self._root, path)
        return self._cache[path]

    def iter_texts(self, extensions=None, exclude: str | None = None):
        """Yield ``(path, text)`` for readable files, optionally by extension."""
        for path in self._paths:
            if path == exclude:
                continue
            if extensions is not None and extension(path) not in extensions:
                continue
            text = self.text(path)
            if text is not None:
                yield path, text


@dataclass
class ScanContext:
    """Everything a detector may read.  Nothing here is mutated by detectors
    except the corpus read cache."""

    root: Path
    graph: DependencyGraph
    files: list[str]
    modules: dict[str, ModuleInfo] = field(default_factory=dict)
    _corpus: TextCorpus | None = field(default=None, repr=False)

    @property
    def corpus(self) -> TextCorpus:
        if self._corpus is None:
            self._corpus = TextCorpus(self.root, self.files)
        return self._corpus


# ---------------------------------------------------------------------------
# Candidate scanner
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CandidateScanner:
    """One category's enumerate/check/score loop.

    Candidates are the scanned files matching *patterns*, or whatever
    *source* returns when given (the dead-code detector draws from graph
    orphans instead of globs).
    """

    category: str
    patterns: tuple[str, ...]
    is_used: Callable[[ScanContext, str], bool]
    score: Callable[[ScanContext, str], float]
    file_type: Callable[[str], str]
    skip_index: bool = False
    source: Callable[[ScanContext], list[str]] | None = None

    def candidates(self, ctx: ScanContext) -> list[str]:
        pool = self.source(ctx) if self.source is not None else ctx.files
        if self.source is not None and not self.patterns:
            return [p for p in pool if not (self.skip_index and is_index_file(p))]
        found = []
        for path in pool:
            if self.skip_index and is_index_file(path):
                continue
            if any(matches_glob(path, p) for p in self.patterns):
                found.append(path)
        return found

    def scan(self, ctx: ScanContext) -> DetectorResult:
        unused = []
        for path in self.candidates(ctx):
            if self.is_used(ctx, path):
                continue
            size = file_size(ctx.root, path)
            if size is None:
                continue
            unused.append(
                UnusedFile(
                    path=path,
                    file_type=self.file_type(path),
                    size=size,
                    confidence=clamp_confidence(self.score(ctx, path)),
                )
            )
        log.debug("%s: %d unused files", self.category, len(unused))
        return DetectorResult(category=self.category, unused_files=tuple(unused))
