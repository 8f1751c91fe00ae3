from __future__ import annotations

from abc import ABC, abstractmethod


class ModuleExtractor(ABC):
    """Base class for one parsing tier of export/import extraction."""

    @property
    @abstractmethod
    def tier_name(self) -> str: ...

    @abstractmethod
    def parse(self, source: bytes, file_path: str):
        """Parse *source* into a tree.

        Raises ``ParseError`` when this tier cannot handle the file, so the
        caller can hand it to the next tier.
        """
        ...

    @abstractmethod
    def extract_module(self, tree, source: bytes, file_path: str) -> dict:
        """Extract declarations from a parsed tree.

        Returns a dict with:
            exports     list of {name, kind, line}
            imports     list of {name, kind, source, line}
            specifiers  list of module specifier strings the file references
        """
        ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def string_value(self, node, source: bytes) -> str | None:
        """Unquoted value of a string literal node, or None for other nodes."""
        if node is None or node.type not in ("string", "template_string"):
            return None
        if node.type == "template_string":
            # Only plain `./path` templates are module specifiers.
            if any(c.type == "template_substitution" for c in node.children):
                return None
        text = self.node_text(node, source)
        if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
            return text[1:-1]
        return None

    def _make_export(self, name: str, kind: str, line: int) -> dict:
        return {"name": name, "kind": kind, "line": line}

    def _make_import(self, name: str, kind: str, source: str, line: int) -> dict:
        return {"name": name, "kind": kind, "source": source, "line": line}

    def _empty_result(self) -> dict:
        return {"exports": [], "imports": [], "specifiers": []}
