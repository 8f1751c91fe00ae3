"""Tests for the textual reference matchers, one reference form at a time."""

from __future__ import annotations

import pytest

from sweep.detectors.matchers import (
    AssetRef,
    at_imports,
    imports_module_binding,
    imports_quoted_path,
    imports_styles_binding,
    is_import_used,
    links_stylesheet,
    mentions_basename,
    mentions_quoted_path,
    mentions_relative_path,
    mentions_rooted_path,
    mentions_stem,
    requires_path,
)


class TestAssetRef:
    def test_names(self):
        ref = AssetRef("src/assets/hero.png")
        assert ref.basename == "hero.png"
        assert ref.stem == "hero"

    def test_partial_import_names(self):
        ref = AssetRef("styles/_variables.scss")
        assert "variables" in ref.import_names
        assert "variables.scss" in ref.import_names
        assert "_variables" in ref.import_names

    def test_css_module(self):
        ref = AssetRef("src/Card.module.scss")
        assert ref.is_css_module
        assert ref.module_name == "Card"
        assert not AssetRef("src/card.scss").is_css_module


class TestImageForms:
    ref = AssetRef("public/img/hero.png")

    def test_basename(self):
        assert mentions_basename('<img src="/static/hero.png">', self.ref)
        assert not mentions_basename("hero.jpg", self.ref)

    def test_stem(self):
        assert mentions_stem("images[`hero`]", self.ref)

    def test_relative_path(self):
        assert mentions_relative_path("see public/img/hero.png", self.ref)

    def test_rooted_path(self):
        assert mentions_rooted_path("url(/public/img/hero.png)", self.ref)
        assert not mentions_rooted_path("public/img/hero.png", self.ref)

    def test_quoted_path(self):
        assert mentions_quoted_path("src='public/img/hero.png'", self.ref)
        assert mentions_quoted_path('src="public/img/hero.png"', self.ref)
        assert not mentions_quoted_path("src=public/img/hero.png", self.ref)


class TestStyleForms:
    ref = AssetRef("styles/theme.css")

    @pytest.mark.parametrize(
        "text",
        [
            "import 'styles/theme.css';",
            'import "styles/theme.css";',
            "import './styles/theme.css';",
            'import "./styles/theme.css";',
        ],
    )
    def test_quoted_import(self, text):
        assert imports_quoted_path(text, self.ref)

    def test_quoted_import_other_file(self):
        assert not imports_quoted_path("import './styles/other.css';", self.ref)

    @pytest.mark.parametrize(
        "text",
        [
            "@import 'styles/theme.css';",
            '@import "styles/theme.css";',
            "@import './theme';",
            '@import "theme";',
            "@import url('theme.css');",
            "@import url(../styles/theme.css);",
            "@import '~styles/theme.css';",
        ],
    )
    def test_at_import(self, text):
        assert at_imports(text, self.ref)

    def test_at_import_partial(self):
        assert at_imports("@import 'variables';", AssetRef("styles/_variables.scss"))

    def test_at_import_no_substring_collision(self):
        assert not at_imports("@import 'dark-theme';", self.ref)

    def test_link_tag(self):
        html = '<link rel="stylesheet" href="/css/theme.css">'
        assert links_stylesheet(html, self.ref)
        assert not links_stylesheet("<a href='theme.css'>", self.ref)

    @pytest.mark.parametrize("text", ["require('styles/theme.css')", 'require("./styles/theme.css")'])
    def test_require(self, text):
        assert requires_path(text, self.ref)


class TestCssModuleForms:
    ref = AssetRef("src/Card.module.css")

    def test_module_binding(self):
        assert imports_module_binding("import Card from './x';", self.ref)

    def test_styles_binding_needs_filename(self):
        assert imports_styles_binding("import styles from './Card.module.css';", self.ref)
        assert not imports_styles_binding("import styles from './Other.module.css';", self.ref)


class TestImportUsage:
    def test_used_in_call(self):
        assert is_import_used("import { fmt } from './f';\nfmt(1);\n", "fmt")

    def test_used_as_member_and_jsx(self):
        assert is_import_used("import * as u from './u';\nu.run();\n", "u")
        assert is_import_used("import { Card } from './Card';\nreturn <Card />;\n", "Card")

    def test_import_lines_ignored(self):
        assert not is_import_used("import { fmt } from './f';\n", "fmt")

    def test_whole_word_only(self):
        assert not is_import_used("import { fmt } from './f';\nformat(1); fmtx(); $fmt;\n", "fmt")

    def test_name_with_dollar(self):
        assert is_import_used("import { $ } from 'jquery';\n$('#a');\n", "$")

    def test_multiline_binding_list(self):
        text = "import {\n  used,\n  unused,\n} from './b';\nused();\n"
        assert is_import_used(text, "used")
        assert not is_import_used(text, "unused")

    def test_code_after_multiline_import_is_scanned(self):
        text = "import {\n  a,\n} from './a';\nconst b = { a };\n"
        assert is_import_used(text, "a")
