"""Dialect detection and tree-sitter parser access."""

from __future__ import annotations

import os
from functools import lru_cache

# Single source of truth for extension -> dialect.  The javascript grammar
# understands JSX, so .jsx needs no separate dialect.
EXTENSION_MAP: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Extensions that make up the module graph.
SOURCE_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")

# Extensions whose files get the typed-dialect confidence bonus.
TYPED_EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts"})

# The dialect the permissive tier parses everything with: tsx accepts
# type annotations and JSX, which covers every other dialect's syntax.
PERMISSIVE_GRAMMAR = "tsx"


class ParseError(Exception):
    """A parser tier could not produce a usable tree for a file."""


def detect_language(path: str) -> str | None:
    """Return the dialect name for *path*, or None when it is not a script."""
    _, ext = os.path.splitext(path)
    return EXTENSION_MAP.get(ext.lower())


def is_source_file(path: str) -> bool:
    _, ext = os.path.splitext(path)
    return ext in SOURCE_EXTENSIONS


def is_typed_file(path: str) -> bool:
    _, ext = os.path.splitext(path)
    return ext.lower() in TYPED_EXTENSIONS


@lru_cache(maxsize=None)
def get_ts_parser(grammar: str):
    """Get a cached tree-sitter parser for *grammar* (e.g. 'typescript')."""
    from tree_sitter_language_pack import get_parser

    return get_parser(grammar)


def parse_source(source: bytes, grammar: str):
    """Parse *source* with *grammar*.

    Raises ParseError when the grammar cannot be loaded or the parser
    rejects the input outright.
    """
    try:
        parser = get_ts_parser(grammar)
    except (LookupError, ValueError) as exc:
        raise ParseError(f"no grammar for {grammar}: {exc}") from exc
    try:
        tree = parser.parse(source)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"{grammar} parser failed: {exc}") from exc
    if tree is None or tree.root_node is None:
        raise ParseError(f"{grammar} parser returned no tree")
    return tree
