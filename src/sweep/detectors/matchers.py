"""Textual reference matchers.

The graph only sees relative import statements.  Assets are also referenced
from markup, stylesheets and string literals, so the image and style
detectors fall back to scanning project text.  Each function here checks
one reference form and takes the text to search plus an ``AssetRef``
describing the candidate.  The scans are plain substring checks and can
report a reference that is really an unrelated string.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from functools import cached_property


@dataclass(frozen=True)
class AssetRef:
    """The names under which a project file may be referenced."""

    path: str

    @cached_property
    def basename(self) -> str:
        return posixpath.basename(self.path)

    @cached_property
    def stem(self) -> str:
        return posixpath.splitext(self.basename)[0]

    @cached_property
    def import_names(self) -> tuple[str, ...]:
        """Names a stylesheet ``@import`` may use.

        SCSS partials (``_vars.scss``) are imported without the underscore.
        """
        names = [self.path, self.basename, self.stem]
        if self.stem.startswith("_") and len(self.stem) > 1:
            names.extend([self.stem[1:], self.basename[1:]])
        return tuple(dict.fromkeys(names))

    @cached_property
    def is_css_module(self) -> bool:
        return bool(_CSS_MODULE_RE.search(self.basename))

    @cached_property
    def module_name(self) -> str:
        """Leading dotted component, e.g. ``Card`` for ``Card.module.css``."""
        return self.basename.split(".")[0]


_CSS_MODULE_RE = re.compile(r"\.module\.(css|scss|sass)$")

_AT_IMPORT_RE = re.compile(r"""@import\s+(?:url\(\s*)?(['"]?)([^'"\s;)]+)\1""")


# ---------------------------------------------------------------------------
# Image / media forms
# ---------------------------------------------------------------------------


def mentions_basename(text: str, ref: AssetRef) -> bool:
    return ref.basename in text


def mentions_stem(text: str, ref: AssetRef) -> bool:
    return bool(ref.stem) and ref.stem in text


def mentions_relative_path(text: str, ref: AssetRef) -> bool:
    return ref.path in text


def mentions_rooted_path(text: str, ref: AssetRef) -> bool:
    return f"/{ref.path}" in text


def mentions_quoted_path(text: str, ref: AssetRef) -> bool:
    return f"'{ref.path}'" in text or f'"{ref.path}"' in text


IMAGE_MATCHERS = (
    mentions_basename,
    mentions_stem,
    mentions_relative_path,
    mentions_rooted_path,
    mentions_quoted_path,
)


# ---------------------------------------------------------------------------
# Stylesheet forms
# ---------------------------------------------------------------------------


def imports_quoted_path(text: str, ref: AssetRef) -> bool:
    """``import 'styles/a.css'`` or ``import "./styles/a.css"``."""
    for prefix in ("", "./"):
        for quote in ("'", '"'):
            if f"import {quote}{prefix}{ref.path}{quote}" in text:
                return True
    return False


def at_imports(text: str, ref: AssetRef) -> bool:
    """``@import`` by path, basename or stem, quoted or inside ``url()``."""
    names = ref.import_names
    for match in _AT_IMPORT_RE.finditer(text):
        target = match.group(2)
        while target.startswith("./"):
            target = target[2:]
        target = target.lstrip("~")
        if target in names or any(target.endswith("/" + name) for name in names):
            return True
    return False


def links_stylesheet(text: str, ref: AssetRef) -> bool:
    """An HTML ``<link`` tag in a text that also names the file."""
    return "<link" in text and ref.basename in text


def requires_path(text: str, ref: AssetRef) -> bool:
    """``require('styles/a.css')`` or ``require("./styles/a.css")``."""
    for prefix in ("", "./"):
        for quote in ("'", '"'):
            if f"require({quote}{prefix}{ref.path}{quote})" in text:
                return True
    return False


STYLE_MATCHERS = (
    imports_quoted_path,
    at_imports,
    links_stylesheet,
    requires_path,
)


def imports_module_binding(text: str, ref: AssetRef) -> bool:
    """``import Card from`` for ``Card.module.css``."""
    return f"import {ref.module_name} from" in text


def imports_styles_binding(text: str, ref: AssetRef) -> bool:
    """``import styles from`` in a text that also names the file."""
    return "import styles from" in text and ref.basename in text


CSS_MODULE_MATCHERS = (
    imports_module_binding,
    imports_styles_binding,
)


def any_matcher(text: str, ref: AssetRef, matchers) -> bool:
    return any(matcher(text, ref) for matcher in matchers)


# ---------------------------------------------------------------------------
# Import bindings
# ---------------------------------------------------------------------------


def is_import_used(text: str, name: str) -> bool:
    """Whether *name* appears as a whole word outside import statements.

    Any line containing ``import `` is skipped, and so is the rest of a
    braced binding list opened on such a line, up to its closing ``}``.  A
    binding used only inside an import statement counts as unused.
    """
    if not name:
        return True
    pattern = re.compile(r"(?<![\w$])" + re.escape(name) + r"(?![\w$])")
    in_bindings = False
    for line in text.splitlines():
        if in_bindings:
            if "}" in line:
                in_bindings = False
            continue
        if "import " in line:
            in_bindings = "{" in line and "}" not in line
            continue
        if pattern.search(line):
            return True
    return False
