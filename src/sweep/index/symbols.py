"""Export and import extraction with tiered parser fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sweep.index.parser import ParseError
from sweep.languages.registry import get_extractor_chain

log = logging.getLogger(__name__)

EXPORT_KINDS = frozenset({"function", "class", "variable", "default", "specifier"})
IMPORT_KINDS = frozenset({"default", "named", "namespace"})


@dataclass(frozen=True)
class ExportInfo:
    name: str
    kind: str
    line: int | None = None


@dataclass(frozen=True)
class ImportInfo:
    name: str
    kind: str
    source: str
    line: int | None = None


@dataclass(frozen=True)
class ModuleInfo:
    """What one file declares: its exports, its import bindings and every
    module specifier it references.  ``tier`` names the parser that produced
    it, or is None when no tier could parse the file."""

    exports: tuple[ExportInfo, ...] = field(default_factory=tuple)
    imports: tuple[ImportInfo, ...] = field(default_factory=tuple)
    specifiers: tuple[str, ...] = field(default_factory=tuple)
    tier: str | None = None

    @property
    def parsed(self) -> bool:
        return self.tier is not None


EMPTY_MODULE = ModuleInfo()


def extract_module(source: bytes, file_path: str) -> ModuleInfo:
    """Extract exports, imports and module specifiers from *source*.

    Each extractor tier is tried in turn.  A tier that raises ParseError
    hands the file to the next one; when every tier fails the file yields
    EMPTY_MODULE.  Parse failures never leave this function.
    """
    for extractor in get_extractor_chain(file_path):
        try:
            tree = extractor.parse(source, file_path)
        except ParseError as exc:
            log.debug("%s: %s tier rejected file: %s", file_path, extractor.tier_name, exc)
            continue
        try:
            raw = extractor.extract_module(tree, source, file_path)
        except (AttributeError, IndexError, TypeError, ValueError) as exc:
            log.debug("%s: %s tier walk failed: %s", file_path, extractor.tier_name, exc)
            continue
        return _normalise(raw, extractor.tier_name)

    log.debug("%s: no parser tier could read the file", file_path)
    return EMPTY_MODULE


def _normalise(raw: dict, tier: str) -> ModuleInfo:
    """Build a ModuleInfo, dropping duplicates and malformed entries."""
    exports: list[ExportInfo] = []
    seen_exports = set()
    for exp in raw.get("exports", []):
        name = exp.get("name", "")
        kind = exp.get("kind", "variable")
        if not name or kind not in EXPORT_KINDS or name in seen_exports:
            continue
        seen_exports.add(name)
        exports.append(ExportInfo(name=name, kind=kind, line=exp.get("line")))

    imports: list[ImportInfo] = []
    seen_imports = set()
    for imp in raw.get("imports", []):
        name = imp.get("name", "")
        kind = imp.get("kind", "named")
        source = imp.get("source", "")
        key = (name, source)
        if not name or kind not in IMPORT_KINDS or key in seen_imports:
            continue
        seen_imports.add(key)
        imports.append(ImportInfo(name=name, kind=kind, source=source, line=imp.get("line")))

    specifiers = tuple(dict.fromkeys(s for s in raw.get("specifiers", []) if s))
    return ModuleInfo(exports=tuple(exports), imports=tuple(imports), specifiers=specifiers, tier=tier)
