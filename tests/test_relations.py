"""Tests for relative import specifier resolution."""

from __future__ import annotations

import pytest

from sweep.index.relations import is_relative_specifier, normalize_path, resolve_import_path


class TestNonRelative:
    @pytest.mark.parametrize("spec", ["react", "@scope/pkg", "lodash/fp", "", "/abs/path"])
    def test_package_specifiers_unresolved(self, spec):
        assert resolve_import_path("src/a.ts", spec) is None

    def test_is_relative(self):
        assert is_relative_specifier("./a")
        assert is_relative_specifier("../a")
        assert not is_relative_specifier("a")


class TestBestEffort:
    """Without a known file set the first candidate extension is used."""

    def test_sibling(self):
        assert resolve_import_path("src/a.ts", "./b") == "src/b.js"

    def test_parent_directory(self):
        assert resolve_import_path("src/deep/a.ts", "../b") == "src/b.js"

    def test_known_extension_stripped_then_reapplied(self):
        assert resolve_import_path("src/a.ts", "./b.tsx") == "src/b.js"

    def test_trailing_slash_means_index(self):
        assert resolve_import_path("src/a.ts", "./components/") == "src/components/index.js"

    def test_dot_means_index(self):
        assert resolve_import_path("src/lib/a.ts", ".") == "src/lib/index.js"

    def test_root_level_importer(self):
        assert resolve_import_path("a.js", "./b") == "b.js"

    def test_escaping_root_is_unresolved(self):
        assert resolve_import_path("a.js", "../outside") is None
        assert resolve_import_path("src/a.js", "../../outside") is None

    def test_query_and_hash_stripped(self):
        assert resolve_import_path("src/a.ts", "./logo.svg?url") == "src/logo.svg"

    def test_backslashes_normalised(self):
        assert resolve_import_path("src\\a.ts", ".\\b") == "src/b.js"


class TestAssets:
    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("./styles.css", "src/styles.css"),
            ("../assets/logo.png", "assets/logo.png"),
            ("./Card.module.scss", "src/Card.module.scss"),
            ("./Widget.vue", "src/Widget.vue"),
            ("./data.json", "src/data.json"),
        ],
    )
    def test_asset_extensions_resolve_verbatim(self, spec, expected):
        assert resolve_import_path("src/a.ts", spec) == expected


class TestKnownFiles:
    def test_probes_extensions_in_order(self):
        known = {"src/b.ts", "src/b.tsx"}
        assert resolve_import_path("src/a.ts", "./b", known) == "src/b.ts"

    def test_probes_index_files(self):
        known = {"src/components/index.tsx"}
        assert resolve_import_path("src/a.ts", "./components", known) == "src/components/index.tsx"

    def test_extension_in_specifier_finds_real_file(self):
        known = {"src/b.ts"}
        assert resolve_import_path("src/a.ts", "./b.js", known) == "src/b.ts"

    def test_dotted_basename(self):
        known = {"src/user.service.ts"}
        assert resolve_import_path("src/a.ts", "./user.service", known) == "src/user.service.ts"

    def test_falls_back_when_nothing_matches(self):
        assert resolve_import_path("src/a.ts", "./missing", {"src/other.ts"}) == "src/missing.js"


class TestNormalize:
    def test_collapses_dots(self):
        assert normalize_path("src/./a/../b.js") == "src/b.js"
