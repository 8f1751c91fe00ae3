"""Module dependency graph and usage queries."""

from sweep.graph.builder import build_dependency_graph, extract_sources
from sweep.graph.model import DependencyGraph
from sweep.graph.usage import get_entry_points, get_orphans, is_export_used, is_referenced

__all__ = [
    "DependencyGraph",
    "build_dependency_graph",
    "extract_sources",
    "is_referenced",
    "is_export_used",
    "get_orphans",
    "get_entry_points",
]
