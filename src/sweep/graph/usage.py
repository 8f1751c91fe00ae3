"""Usage queries over a built dependency graph."""

from __future__ import annotations

from sweep.graph.model import DependencyGraph


def is_referenced(graph: DependencyGraph, path: str) -> bool:
    """True when *path* is a node with at least one importer."""
    return graph.in_degree(path) > 0


def is_export_used(graph: DependencyGraph, path: str, export_name: str) -> bool:
    """Whether an export of *path* counts as used.

    ``default`` is always used.  Any other export is used when the file has
    an importer at all; which names each importer binds is not tracked.
    """
    if export_name == "default":
        return True
    return is_referenced(graph, path)


def get_orphans(graph: DependencyGraph) -> list[str]:
    """Nodes nothing imports, sorted."""
    return [n for n in graph.nodes if graph.in_degree(n) == 0]


def get_entry_points(graph: DependencyGraph) -> list[str]:
    """Orphans that import something: likely entry scripts."""
    return [n for n in get_orphans(graph) if graph.out_degree(n) > 0]
