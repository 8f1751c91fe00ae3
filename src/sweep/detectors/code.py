"""Unused exports, unused imports and fully-unused script files."""

from __future__ import annotations

import logging

from sweep.detectors.base import ScanContext, is_index_file
from sweep.detectors.matchers import is_import_used
from sweep.graph.usage import is_export_used, is_referenced
from sweep.index.discovery import file_size, read_source
from sweep.index.parser import is_source_file, is_typed_file
from sweep.index.symbols import EMPTY_MODULE, ExportInfo, ImportInfo, ModuleInfo, extract_module
from sweep.models import DetectorResult, UnusedExport, UnusedFile, UnusedImport, clamp_confidence

log = logging.getLogger(__name__)

EXPORT_BASE_CONFIDENCE = 70
EXPORT_KIND_CONFIDENCE = {"function": 90, "class": 90, "variable": 80}
TYPED_BONUS = 5
UNUSED_FILE_CONFIDENCE = 90


def export_confidence(export: ExportInfo, path: str) -> int:
    confidence = EXPORT_KIND_CONFIDENCE.get(export.kind, EXPORT_BASE_CONFIDENCE)
    if is_typed_file(path):
        confidence += TYPED_BONUS
    return clamp_confidence(confidence)


def _module_for(ctx: ScanContext, path: str) -> ModuleInfo:
    info = ctx.modules.get(path)
    if info is not None:
        return info
    raw = read_source(ctx.root, path)
    if raw is None:
        return EMPTY_MODULE
    return extract_module(raw, path)


def _unused_imports(path: str, text: str, imports: tuple[ImportInfo, ...]) -> list[UnusedImport]:
    found = []
    for imp in imports:
        # Default bindings are assumed used (JSX pragmas, side effects)
        if imp.kind == "default":
            continue
        if not is_import_used(text, imp.name):
            found.append(UnusedImport(file_path=path, name=imp.name, source=imp.source, kind=imp.kind))
    return found


def detect_unused_code(ctx: ScanContext) -> DetectorResult:
    """Check every script's exports against the graph and its imports
    against its own text.

    A file whose exports are all unused, and which nothing imports, is
    also reported as an unused ``scripts`` file.
    """
    exports: list[UnusedExport] = []
    imports: list[UnusedImport] = []
    files: list[UnusedFile] = []

    for path in ctx.files:
        if not is_source_file(path) or is_index_file(path):
            continue
        text = ctx.corpus.text(path)
        if text is None or not text.strip():
            continue
        info = _module_for(ctx, path)

        unused_exports = [
            UnusedExport(file_path=path, name=exp.name, kind=exp.kind, confidence=export_confidence(exp, path))
            for exp in info.exports
            if not is_export_used(ctx.graph, path, exp.name)
        ]
        exports.extend(unused_exports)
        imports.extend(_unused_imports(path, text, info.imports))

        if info.exports and len(unused_exports) == len(info.exports) and not is_referenced(ctx.graph, path):
            size = file_size(ctx.root, path)
            if size is not None:
                files.append(
                    UnusedFile(path=path, file_type="scripts", size=size, confidence=UNUSED_FILE_CONFIDENCE)
                )

    log.debug("exports: %d unused exports, %d unused imports", len(exports), len(imports))
    return DetectorResult(
        category="exports",
        unused_files=tuple(files),
        unused_exports=tuple(exports),
        unused_imports=tuple(imports),
    )
