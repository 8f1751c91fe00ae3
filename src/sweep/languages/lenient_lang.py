"""Permissive fallback extraction.

Every file is parsed with the tsx grammar, the widest of the three
dialects, and tree-sitter's error recovery is accepted.  Only top-level
statements outside ERROR regions are walked, and only the declaration
shapes of the precise tier are recognised.
"""

from __future__ import annotations

from sweep.index.parser import PERMISSIVE_GRAMMAR, ParseError, parse_source

from .javascript_lang import JavaScriptExtractor


class LenientExtractor(JavaScriptExtractor):
    """Error-tolerant extractor used when the precise tier rejects a file."""

    @property
    def tier_name(self) -> str:
        return "permissive"

    def parse(self, source: bytes, file_path: str):
        tree = parse_source(source, PERMISSIVE_GRAMMAR)
        root = tree.root_node
        if root.type == "ERROR":
            raise ParseError(f"{file_path} is unparseable")
        children = root.named_children
        if children and all(child.type == "ERROR" for child in children):
            raise ParseError(f"{file_path} has no recoverable statements")
        return tree

    def _top_level_statements(self, root) -> list:
        return [child for child in root.named_children if child.type != "ERROR"]

    def _call_scope(self, root, statements) -> list:
        return statements
