"""Run a full scan: discover, build the graph, run detectors, merge."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from sweep.config import ScanConfig, validate_categories
from sweep.detectors.base import ScanContext
from sweep.detectors.code import detect_unused_code
from sweep.detectors.components import detect_unused_components
from sweep.detectors.dead import detect_dead_code
from sweep.detectors.images import detect_unused_images
from sweep.detectors.styles import detect_unused_styles
from sweep.exit_codes import ConfigError
from sweep.graph.builder import build_dependency_graph, extract_sources
from sweep.index.discovery import discover_files
from sweep.models import DetectorResult, ScanResult, UnusedFile

log = logging.getLogger(__name__)

DETECTORS = {
    "exports": detect_unused_code,
    "components": detect_unused_components,
    "dead": detect_dead_code,
    "images": detect_unused_images,
    "styles": detect_unused_styles,
}


def prepare_context(config: ScanConfig) -> ScanContext:
    """Discover the project's files and build its frozen graph."""
    root = config.project_root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Project root is not a directory: {root}")
    files = discover_files(root, config.exclude_patterns)
    modules = extract_sources(root, files)
    graph = build_dependency_graph(root, files=files, modules=modules)
    return ScanContext(root=root, graph=graph, files=files, modules=modules)


def merge_unused_files(results: list[DetectorResult]) -> tuple[UnusedFile, ...]:
    """One finding per path; the highest confidence wins, ties keep the first."""
    merged: dict[str, UnusedFile] = {}
    for result in results:
        for finding in result.unused_files:
            current = merged.get(finding.path)
            if current is None or finding.confidence > current.confidence:
                merged[finding.path] = finding
    return tuple(sorted(merged.values(), key=lambda f: f.path))


def scan_project(config: ScanConfig, context: ScanContext | None = None) -> ScanResult:
    """Run the requested detectors (all of them when none are named).

    The result carries every finding regardless of confidence; threshold
    filtering belongs to the caller.
    """
    categories = validate_categories(config.active_categories)
    t0 = time.monotonic()
    ctx = context if context is not None else prepare_context(config)

    results = []
    for category in categories:
        result = DETECTORS[category](ctx)
        log.debug(
            "%s detector: %d files, %d exports, %d imports",
            category,
            len(result.unused_files),
            len(result.unused_exports),
            len(result.unused_imports),
        )
        results.append(result)

    scan = ScanResult(
        project_root=str(ctx.root),
        unused_files=merge_unused_files(results),
        unused_exports=tuple(e for r in results for e in r.unused_exports),
        unused_imports=tuple(i for r in results for i in r.unused_imports),
        categories=categories,
        scanned_at=datetime.now(timezone.utc),
    )
    log.info(
        "scanned %d files in %.2fs: %d findings",
        len(ctx.files),
        time.monotonic() - t0,
        scan.total,
    )
    return scan
