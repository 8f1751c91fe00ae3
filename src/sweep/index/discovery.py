"""File discovery with exclude-glob filtering."""

from __future__ import annotations

import fnmatch
import itertools
import logging
import os
import re
from pathlib import Path

from sweep.exit_codes import ConfigError

log = logging.getLogger(__name__)

# Directories pruned regardless of exclude patterns (VCS metadata)
SKIP_DIRS = frozenset({".git", ".hg", ".svn"})

# Dependency directory exclusion that every scan carries
DEPENDENCY_EXCLUDE = "node_modules/**"

# Default --exclude value
DEFAULT_EXCLUDES = ("node_modules", "dist", "build", ".git")

# Build/dependency output never consulted by the text-reference scans
BUILD_OUTPUT_DIRS = ("node_modules/", "dist/", "build/")

MAX_FILE_SIZE = 1_000_000  # 1MB, text scans skip anything larger

_DRIVE_RE = re.compile(r"^[A-Za-z]:/")


# ---------------------------------------------------------------------------
# Pattern handling
# ---------------------------------------------------------------------------


def validate_exclude_patterns(patterns) -> list[str]:
    """Check and normalise exclude patterns.

    Raises ConfigError for patterns that cannot describe a file set:
    non-strings, empty or absolute patterns, NUL bytes, ``..`` segments and
    unbalanced braces.
    """
    cleaned: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise ConfigError(f"Exclude pattern must be a string, got {pattern!r}")
        stripped = pattern.strip().replace("\\", "/")
        if stripped.startswith("/") or _DRIVE_RE.match(stripped):
            raise ConfigError(f"Exclude pattern must be relative to the project root: {pattern!r}")
        p = _clean(pattern)
        if not p:
            raise ConfigError(f"Empty exclude pattern: {pattern!r}")
        if "\x00" in p:
            raise ConfigError(f"Exclude pattern contains a NUL byte: {pattern!r}")
        if ".." in p.split("/"):
            raise ConfigError(f"Exclude pattern points outside the project: {pattern!r}")
        if p.count("{") != p.count("}"):
            raise ConfigError(f"Unbalanced braces in exclude pattern: {pattern!r}")
        if p not in cleaned:
            cleaned.append(p)
    return cleaned


def _clean(pattern: str) -> str:
    p = pattern.strip().replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return "" if p == "." else p


def _expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives (fnmatch has no brace support)."""
    start = pattern.find("{")
    if start < 0:
        return [pattern]
    end = pattern.find("}", start)
    if end < 0:
        return [pattern]
    head, body, tail = pattern[:start], pattern[start + 1 : end], pattern[end + 1 :]
    expanded = []
    for alt in body.split(","):
        expanded.extend(_expand_braces(head + alt + tail))
    return expanded


def _doublestar_variants(pattern: str) -> list[str]:
    """``a/**/b`` also matches ``a/b``: every ``**/`` may match zero directories."""
    pieces = pattern.split("**/")
    if len(pieces) == 1:
        return [pattern]
    variants = []
    for keep in itertools.product((True, False), repeat=len(pieces) - 1):
        out = pieces[0]
        for kept, piece in zip(keep, pieces[1:]):
            out += ("**/" if kept else "") + piece
        variants.append(out)
    return variants


def _under_dir(rel_path: str, dir_pattern: str) -> bool:
    """True when *rel_path* lies inside a directory matching *dir_pattern*."""
    while dir_pattern.startswith("**/"):
        dir_pattern = dir_pattern[3:]
    parts = rel_path.split("/")[:-1]
    if not dir_pattern or not parts:
        return False
    if "/" not in dir_pattern:
        return any(fnmatch.fnmatchcase(part, dir_pattern) for part in parts)
    for i in range(1, len(parts) + 1):
        prefix = "/".join(parts[:i])
        if any(fnmatch.fnmatchcase(prefix, v) for v in _doublestar_variants(dir_pattern)):
            return True
    return False


def _match_single(rel_path: str, pattern: str) -> bool:
    if pattern.endswith("/"):
        return _under_dir(rel_path, pattern.rstrip("/"))
    if pattern.endswith("/**") and _under_dir(rel_path, pattern[:-3]):
        return True
    if "/" not in pattern:
        # Bare name: matches the basename or any directory segment
        return any(fnmatch.fnmatchcase(part, pattern) for part in rel_path.split("/"))
    return any(fnmatch.fnmatchcase(rel_path, v) for v in _doublestar_variants(pattern))


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Match a project-relative path against one glob pattern.

    Supports ``*``/``?``/``[...]`` (fnmatch), ``**`` across directories,
    ``{a,b}`` alternatives, trailing ``/`` for directories, and bare names
    that match any path segment (``node_modules``).
    """
    rel_path = rel_path.replace("\\", "/")
    p = _clean(pattern)
    if not p:
        return False
    return any(_match_single(rel_path, alt) for alt in _expand_braces(p))


def _matches_exclude(rel_path: str, patterns) -> bool:
    return any(matches_glob(rel_path, p) for p in patterns)


def _prunes_directory(rel_dir: str, patterns) -> bool:
    """True when a pattern excludes everything below *rel_dir*."""
    probe = rel_dir + "/"
    for pattern in patterns:
        for p in _expand_braces(_clean(pattern)):
            if p.endswith("/"):
                base = p.rstrip("/")
            elif p.endswith("/**"):
                base = p[:-3]
            elif "/" not in p:
                base = p
            else:
                continue
            if _under_dir(probe, base):
                return True
    return False


def load_ignore_file(root: Path, name: str = ".cleanupignore") -> list[str]:
    """Read exclude patterns from an ignore file (one glob per line, # comments).

    A missing or unreadable file yields an empty list.
    """
    path = Path(root) / name
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError):
        return []
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("Could not read ignore file %s: %s", path, exc)
        return []
    patterns = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            patterns.append(stripped)
    return patterns


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def _walk_files(root: Path, patterns: list[str]) -> list[str]:
    result = []

    def _on_error(err: OSError) -> None:
        if Path(err.filename or "") == root:
            raise ConfigError(f"Cannot list project root {root}: {err.strerror}")
        log.debug("skipping unreadable directory %s: %s", err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        rel_dir = os.path.relpath(dirpath, root).replace("\\", "/")
        if rel_dir == ".":
            rel_dir = ""
        kept_dirs = []
        for d in dirnames:
            if d in SKIP_DIRS:
                continue
            rel = f"{rel_dir}/{d}" if rel_dir else d
            if _prunes_directory(rel, patterns):
                continue
            kept_dirs.append(d)
        dirnames[:] = kept_dirs
        for fname in filenames:
            rel = f"{rel_dir}/{fname}" if rel_dir else fname
            if not _matches_exclude(rel, patterns):
                result.append(rel)
    return result


def discover_files(root: Path, exclude_patterns=()) -> list[str]:
    """Discover every file below *root* that no exclude pattern matches.

    The dependency-directory exclusion is always applied.  Returns a sorted
    list of project-relative paths using forward slashes.

    Raises ConfigError when *root* is not a readable directory or a pattern
    is invalid, since neither leaves a meaningful file set to scan.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ConfigError(f"Project root is not a directory: {root}")
    patterns = validate_exclude_patterns(list(exclude_patterns) + [DEPENDENCY_EXCLUDE])
    files = _walk_files(root, patterns)
    files.sort()
    return files


def read_source(root: Path, rel_path: str) -> bytes | None:
    """Read a project file once; None when it vanished or is unreadable."""
    try:
        return (Path(root) / rel_path).read_bytes()
    except OSError as exc:
        log.debug("skipping unreadable file %s: %s", rel_path, exc)
        return None


def read_text(root: Path, rel_path: str) -> str | None:
    """Read a text file for reference scanning; None when unreadable or too large."""
    path = Path(root) / rel_path
    try:
        if path.stat().st_size > MAX_FILE_SIZE:
            log.debug("skipping oversized file %s", rel_path)
            return None
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        log.debug("skipping unreadable file %s: %s", rel_path, exc)
        return None


def file_size(root: Path, rel_path: str) -> int | None:
    try:
        return (Path(root) / rel_path).stat().st_size
    except OSError as exc:
        log.debug("cannot stat %s: %s", rel_path, exc)
        return None
