"""Precise export/import extraction for JavaScript, TypeScript and TSX.

The file is parsed with the grammar matching its extension (JSX is part of
the javascript grammar, .tsx gets the tsx grammar).  A tree with any error
node is rejected so the permissive tier can take over.

Exports recorded
----------------
* ``export function f`` / ``export function* g``  -> kind "function"
* ``export class C`` / ``export abstract class``   -> kind "class"
* ``export const|let|var a, {b}, [c]``             -> kind "variable" per binding
* ``export enum E``                                -> kind "variable"
* ``export default function|class``                -> name "default", kind function/class
* ``export default <expression>``                  -> name "default", kind "default"
* ``export { a, b as c }`` / ``export * as ns``    -> kind "specifier", exported name

Imports recorded
----------------
* ``import x from``           -> kind "default"
* ``import { a, b as c }``    -> kind "named", local binding name
* ``import * as ns``          -> kind "namespace"
* ``import x = require()``    -> kind "default" (TypeScript)

Every module specifier (imports, re-exports, side-effect imports,
``require()`` and ``import()`` with a literal argument) is also collected
for the dependency graph.
"""

from __future__ import annotations

from sweep.index.parser import ParseError, detect_language, parse_source

from .base import ModuleExtractor

_FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "function_expression",
        "function",
        "generator_function",
    }
)
_CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})
_VARIABLE_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


class JavaScriptExtractor(ModuleExtractor):
    """Extractor that only accepts error-free trees from the dialect grammar."""

    @property
    def tier_name(self) -> str:
        return "precise"

    def parse(self, source: bytes, file_path: str):
        language = detect_language(file_path)
        if language is None:
            raise ParseError(f"not a script file: {file_path}")
        tree = parse_source(source, language)
        if tree.root_node.has_error:
            raise ParseError(f"{language} grammar found syntax errors in {file_path}")
        return tree

    def extract_module(self, tree, source: bytes, file_path: str) -> dict:
        result = self._empty_result()
        statements = self._top_level_statements(tree.root_node)
        for node in statements:
            if node.type == "import_statement":
                self._extract_import(node, source, result)
            elif node.type == "export_statement":
                self._extract_export(node, source, result)
        for node in self._call_scope(tree.root_node, statements):
            self._collect_calls(node, source, result)
        return result

    def _top_level_statements(self, root) -> list:
        return list(root.named_children)

    def _call_scope(self, root, statements) -> list:
        return [root]

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def _extract_import(self, node, source: bytes, result: dict) -> None:
        line = node.start_point[0] + 1
        spec = self.string_value(node.child_by_field_name("source"), source)
        for child in node.named_children:
            if child.type == "import_clause" and spec is not None:
                self._extract_import_clause(child, spec, line, source, result)
            elif child.type == "import_require_clause":
                # import fs = require("fs")
                req_spec = self.string_value(child.child_by_field_name("source"), source)
                if req_spec is None:
                    for sub in child.named_children:
                        req_spec = self.string_value(sub, source)
                        if req_spec is not None:
                            break
                if req_spec is None:
                    continue
                spec = req_spec
                for sub in child.named_children:
                    if sub.type == "identifier":
                        result["imports"].append(
                            self._make_import(self.node_text(sub, source), "default", req_spec, line)
                        )
                        break
        if spec is not None:
            result["specifiers"].append(spec)

    def _extract_import_clause(self, clause, spec: str, line: int, source: bytes, result: dict) -> None:
        for child in clause.named_children:
            if child.type == "identifier":
                result["imports"].append(self._make_import(self.node_text(child, source), "default", spec, line))
            elif child.type == "namespace_import":
                for sub in child.named_children:
                    if sub.type == "identifier":
                        result["imports"].append(
                            self._make_import(self.node_text(sub, source), "namespace", spec, line)
                        )
            elif child.type == "named_imports":
                for sub in child.named_children:
                    if sub.type != "import_specifier":
                        continue
                    local = sub.child_by_field_name("alias") or sub.child_by_field_name("name")
                    if local is None or local.type != "identifier":
                        continue
                    result["imports"].append(self._make_import(self.node_text(local, source), "named", spec, line))

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------

    def _extract_export(self, node, source: bytes, result: dict) -> None:
        line = node.start_point[0] + 1
        spec = self.string_value(node.child_by_field_name("source"), source)
        if spec is not None:
            result["specifiers"].append(spec)

        declaration = node.child_by_field_name("declaration")
        if any(child.type == "default" for child in node.children):
            target = declaration or node.child_by_field_name("value")
            kind = "default"
            if target is not None and target.type in _FUNCTION_TYPES:
                kind = "function"
            elif target is not None and target.type in _CLASS_TYPES:
                kind = "class"
            result["exports"].append(self._make_export("default", kind, line))
            return

        if declaration is not None:
            self._extract_declaration(declaration, line, source, result)

        for child in node.named_children:
            if child.type == "export_clause":
                for sub in child.named_children:
                    if sub.type != "export_specifier":
                        continue
                    exported = sub.child_by_field_name("alias") or sub.child_by_field_name("name")
                    name = self._export_name(exported, source)
                    if name:
                        result["exports"].append(self._make_export(name, "specifier", line))
            elif child.type == "namespace_export":
                # export * as ns from "./mod"
                names = [c for c in child.named_children if c.type in ("identifier", "string")]
                if names:
                    name = self._export_name(names[-1], source)
                    if name:
                        result["exports"].append(self._make_export(name, "specifier", line))

    def _export_name(self, node, source: bytes) -> str | None:
        if node is None:
            return None
        value = self.string_value(node, source)
        if value is not None:
            return value
        return self.node_text(node, source) or None

    def _extract_declaration(self, decl, line: int, source: bytes, result: dict) -> None:
        if decl.type in ("function_declaration", "generator_function_declaration", "function_signature"):
            kind = "function"
        elif decl.type in ("class_declaration", "abstract_class_declaration"):
            kind = "class"
        elif decl.type == "enum_declaration":
            kind = "variable"
        elif decl.type in _VARIABLE_TYPES:
            for declarator in decl.named_children:
                if declarator.type != "variable_declarator":
                    continue
                for name in self._binding_names(declarator.child_by_field_name("name"), source):
                    result["exports"].append(self._make_export(name, "variable", line))
            return
        else:
            # interfaces, type aliases and ambient declarations have no runtime value
            return
        name_node = decl.child_by_field_name("name")
        if name_node is not None:
            result["exports"].append(self._make_export(self.node_text(name_node, source), kind, line))

    def _binding_names(self, node, source: bytes) -> list[str]:
        """Names bound by a declarator target (identifier or destructuring pattern)."""
        if node is None:
            return []
        if node.type in ("identifier", "shorthand_property_identifier_pattern"):
            return [self.node_text(node, source)]
        if node.type == "pair_pattern":
            return self._binding_names(node.child_by_field_name("value"), source)
        if node.type in ("assignment_pattern", "object_assignment_pattern"):
            return self._binding_names(node.child_by_field_name("left"), source)
        names: list[str] = []
        if node.type in ("object_pattern", "array_pattern", "rest_pattern"):
            for child in node.named_children:
                names.extend(self._binding_names(child, source))
        return names

    # ------------------------------------------------------------------
    # require() / import()
    # ------------------------------------------------------------------

    def _collect_calls(self, root, source: bytes, result: dict) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR":
                continue
            if node.type == "call_expression":
                spec = self._call_specifier(node, source)
                if spec is not None:
                    result["specifiers"].append(spec)
            stack.extend(reversed(node.named_children))

    def _call_specifier(self, node, source: bytes) -> str | None:
        fn = node.child_by_field_name("function")
        if fn is None:
            return None
        if fn.type == "import" or (fn.type == "identifier" and self.node_text(fn, source) == "require"):
            args = node.child_by_field_name("arguments")
            if args is None:
                return None
            if args.type != "arguments":
                # tagged template form: require`x`
                return self.string_value(args, source)
            literal = args.named_children[0] if args.named_children else None
            return self.string_value(literal, source)
        return None
