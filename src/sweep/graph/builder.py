"""Build the module dependency graph from a project tree."""

from __future__ import annotations

import logging
from pathlib import Path

from sweep.graph.model import DependencyGraph
from sweep.index.discovery import discover_files, read_source
from sweep.index.parser import is_source_file
from sweep.index.relations import resolve_import_path
from sweep.index.symbols import ModuleInfo, extract_module

log = logging.getLogger(__name__)


def extract_sources(root: Path, files) -> dict[str, ModuleInfo]:
    """Read and extract every script in *files*.

    Files that cannot be read are left out; files that cannot be parsed map
    to EMPTY_MODULE.  Each file is read once.
    """
    root = Path(root)
    extracted: dict[str, ModuleInfo] = {}
    for rel_path in files:
        if not is_source_file(rel_path):
            continue
        source = read_source(root, rel_path)
        if source is None:
            continue
        extracted[rel_path] = extract_module(source, rel_path)
    return extracted


def build_dependency_graph(
    root: Path,
    exclude_patterns=(),
    files: list[str] | None = None,
    modules: dict[str, ModuleInfo] | None = None,
) -> DependencyGraph:
    """Build a frozen DependencyGraph for the scripts under *root*.

    *files* is the already-discovered file list and *modules* the already
    extracted scripts (the scanner passes both so the tree is walked and
    read once); whatever is omitted is computed here.

    Extraction happens before any insertion, then a single pass adds the
    nodes and edges.  Non-relative specifiers and self-imports produce no
    edge.  Building twice from an unchanged tree gives a structurally
    identical graph.
    """
    root = Path(root).resolve()
    if files is None:
        files = discover_files(root, exclude_patterns)
    if modules is None:
        modules = extract_sources(root, files)

    known = frozenset(files)
    graph = DependencyGraph()
    unparsed = 0
    for rel_path in sorted(modules):
        info = modules[rel_path]
        if not info.parsed:
            unparsed += 1
        graph.add_node(rel_path)
        graph.add_exports(rel_path, (exp.name for exp in info.exports))
        for specifier in info.specifiers:
            target = resolve_import_path(rel_path, specifier, known)
            if target is None or target == rel_path:
                continue
            graph.add_import(rel_path, target)

    graph.freeze()
    log.debug(
        "dependency graph: %d nodes, %d edges (%d of %d scripts unparsed)",
        len(graph),
        graph.edge_count(),
        unparsed,
        len(modules),
    )
    return graph
