"""Resolution of relative import specifiers into graph node keys."""

from __future__ import annotations

import posixpath
from collections.abc import Collection

from sweep.index.parser import SOURCE_EXTENSIONS

# Specifiers ending in one of these name a concrete non-script file; they
# resolve verbatim so asset imports (import "./a.css") become graph edges.
ASSET_EXTENSIONS = frozenset(
    {
        ".css", ".scss", ".sass", ".less", ".styl",
        ".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".ico", ".bmp",
        ".mp4", ".webm", ".mp3", ".wav", ".ogg",
        ".vue", ".svelte", ".json", ".html",
    }
)


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith(".")


def normalize_path(path: str) -> str:
    """Forward-slash path with ``.`` and ``..`` segments collapsed."""
    return posixpath.normpath(path.replace("\\", "/"))


def resolve_import_path(
    importer: str,
    specifier: str,
    known_files: Collection[str] | None = None,
) -> str | None:
    """Resolve *specifier*, imported from *importer*, to a project-relative key.

    Returns None for bare/package specifiers and for paths that climb above
    the project root.

    Rules, in order:
      1. A trailing ``/`` means a directory import: ``index`` is appended.
      2. A known script extension (.js/.jsx/.ts/.tsx) is stripped.
      3. The specifier is joined to the importer's directory and normalised.
      4. An asset extension resolves verbatim.  Otherwise, with *known_files*
         the first existing candidate among ``<p>.js|.jsx|.ts|.tsx`` and
         ``<p>/index.<ext>`` wins; without a match, or without
         *known_files*, ``<p>.js`` is returned unverified.
    """
    if not specifier or not is_relative_specifier(specifier):
        return None

    spec = specifier.replace("\\", "/").split("?", 1)[0].split("#", 1)[0]
    if spec.endswith("/") or spec in (".", ".."):
        spec = spec.rstrip("/") + "/index"

    stem, ext = posixpath.splitext(spec)
    if ext in SOURCE_EXTENSIONS:
        spec = stem

    importer_dir = posixpath.dirname(importer.replace("\\", "/"))
    resolved = normalize_path(posixpath.join(importer_dir, spec))
    if resolved == ".." or resolved.startswith("../") or resolved.startswith("/"):
        return None

    _, ext = posixpath.splitext(resolved)
    if ext.lower() in ASSET_EXTENSIONS:
        return resolved

    if known_files is not None:
        for candidate in _candidates(resolved):
            if candidate in known_files:
                return candidate
    return resolved + SOURCE_EXTENSIONS[0]


def _candidates(base: str) -> list[str]:
    files = [base + ext for ext in SOURCE_EXTENSIONS]
    files.extend(f"{base}/index{ext}" for ext in SOURCE_EXTENSIONS)
    return files
