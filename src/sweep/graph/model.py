"""The module dependency graph.

Nodes are project-relative file keys; an edge ``a -> b`` means *a* imports
*b*.  Both directions of every edge come from the one underlying
``networkx.DiGraph``, so ``b in imports(a)`` holds exactly when
``a in imported_by(b)``.  Each node carries an ``exports`` attribute (a
frozenset of exported names).

A graph is mutable only while the builder populates it.  ``freeze()`` wraps
the networkx graph with ``nx.freeze`` and every later mutation raises.
"""

from __future__ import annotations

import networkx as nx


class DependencyGraph:
    """File-level import graph, immutable once frozen."""

    def __init__(self) -> None:
        self._g = nx.DiGraph()
        self._frozen = False

    # -- construction (builder only) --------------------------------------

    def add_node(self, path: str) -> None:
        """Create *path* as an empty node if it is not present yet."""
        self._check_mutable()
        if path not in self._g:
            self._g.add_node(path, exports=frozenset())

    def add_exports(self, path: str, names) -> None:
        self.add_node(path)
        node = self._g.nodes[path]
        node["exports"] = node["exports"] | frozenset(names)

    def add_import(self, importer: str, imported: str) -> None:
        """Record that *importer* imports *imported*, creating both nodes."""
        self.add_node(importer)
        self.add_node(imported)
        self._g.add_edge(importer, imported)

    def freeze(self) -> "DependencyGraph":
        if not self._frozen:
            nx.freeze(self._g)
            self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("DependencyGraph is frozen")

    # -- queries -----------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def nodes(self) -> list[str]:
        return sorted(self._g.nodes)

    @property
    def nx_graph(self) -> nx.DiGraph:
        """The underlying networkx graph (frozen after build)."""
        return self._g

    def has_node(self, path: str) -> bool:
        return path in self._g

    def __contains__(self, path: str) -> bool:
        return path in self._g

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    def edge_count(self) -> int:
        return self._g.number_of_edges()

    def imports(self, path: str) -> frozenset[str]:
        """Files *path* imports; empty when the node does not exist."""
        if path not in self._g:
            return frozenset()
        return frozenset(self._g.successors(path))

    def imported_by(self, path: str) -> frozenset[str]:
        """Files importing *path*; empty when the node does not exist."""
        if path not in self._g:
            return frozenset()
        return frozenset(self._g.predecessors(path))

    def exports(self, path: str) -> frozenset[str]:
        if path not in self._g:
            return frozenset()
        return self._g.nodes[path]["exports"]

    def in_degree(self, path: str) -> int:
        return self._g.in_degree(path) if path in self._g else 0

    def out_degree(self, path: str) -> int:
        return self._g.out_degree(path) if path in self._g else 0

    def edges(self) -> list[tuple[str, str]]:
        return sorted(self._g.edges)

    def structure(self) -> tuple:
        """Comparable snapshot of nodes, exports and edges."""
        return (
            tuple((n, tuple(sorted(self._g.nodes[n]["exports"]))) for n in self.nodes),
            tuple(self.edges()),
        )

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "building"
        return f"<DependencyGraph {len(self)} nodes, {self.edge_count()} edges, {state}>"
