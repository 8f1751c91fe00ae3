"""Tests for file discovery and exclude-glob matching."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))
from conftest import write_files

from sweep.exit_codes import ConfigError
from sweep.index.discovery import (
    _matches_exclude,
    discover_files,
    load_ignore_file,
    matches_glob,
    validate_exclude_patterns,
)

# -----------------------------------------------------------------------
# 1. Glob matching
# -----------------------------------------------------------------------


class TestMatchesGlob:
    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("node_modules/react/index.js", "node_modules"),
            ("packages/app/node_modules/x/a.js", "node_modules"),
            ("node_modules/react/index.js", "node_modules/**"),
            ("dist/bundle.js", "dist/"),
            ("src/a.min.js", "*.min.js"),
            ("src/a.test.ts", "**/*.test.ts"),
            ("a.test.ts", "**/*.test.ts"),
            ("src/components/Button.tsx", "**/components/**/*.tsx"),
            ("components/Button.tsx", "**/components/**/*.tsx"),
            ("src/components/ui/Button.tsx", "**/components/**/*.tsx"),
            ("src/components/Button.ts", "**/components/**/*.{js,ts,tsx}"),
            ("src/generated/api.ts", "src/generated/*"),
        ],
    )
    def test_matches(self, path, pattern):
        assert matches_glob(path, pattern)

    @pytest.mark.parametrize(
        "path,pattern",
        [
            ("src/distance.js", "dist"),
            ("src/dist.js", "dist/"),
            ("src/a.js", "*.min.js"),
            ("src/Button.tsx", "**/components/**/*.tsx"),
            ("src/components/Button.css", "**/components/**/*.{js,ts,tsx}"),
            ("lib/generated/api.ts", "src/generated/*"),
        ],
    )
    def test_does_not_match(self, path, pattern):
        assert not matches_glob(path, pattern)

    def test_case_sensitive(self):
        assert not matches_glob("src/LOGO.PNG", "**/*.png")

    def test_matches_exclude_any(self):
        assert _matches_exclude("build/a.js", ["dist", "build"])
        assert not _matches_exclude("src/a.js", ["dist", "build"])


# -----------------------------------------------------------------------
# 2. Pattern validation
# -----------------------------------------------------------------------


class TestValidatePatterns:
    def test_cleans_and_dedupes(self):
        assert validate_exclude_patterns([" dist ", "./build", "dist"]) == ["dist", "build"]

    @pytest.mark.parametrize("bad", ["", "   ", ".", "/etc/passwd", "C:/code", "../up", "a/{b,c", 3])
    def test_invalid_patterns_raise(self, bad):
        with pytest.raises(ConfigError):
            validate_exclude_patterns([bad])

    def test_config_error_exit_code(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_exclude_patterns([""])
        assert exc_info.value.exit_code == 3


# -----------------------------------------------------------------------
# 3. Ignore file
# -----------------------------------------------------------------------


class TestIgnoreFile:
    def test_missing_returns_empty(self, tmp_path):
        assert load_ignore_file(tmp_path) == []

    def test_comments_and_blanks_skipped(self, tmp_path):
        (tmp_path / ".cleanupignore").write_text("# generated\n\n  legacy/  \n*.stories.tsx\n")
        assert load_ignore_file(tmp_path) == ["legacy/", "*.stories.tsx"]

    def test_custom_name(self, tmp_path):
        (tmp_path / ".myignore").write_text("tmp\n")
        assert load_ignore_file(tmp_path, ".myignore") == ["tmp"]


# -----------------------------------------------------------------------
# 4. Discovery
# -----------------------------------------------------------------------


class TestDiscoverFiles:
    def test_sorted_forward_slash_paths(self, tmp_path):
        write_files(tmp_path, {"src/b.ts": "", "src/a.ts": "", "README.md": ""})
        assert discover_files(tmp_path) == ["README.md", "src/a.ts", "src/b.ts"]

    def test_dependency_directory_always_excluded(self, tmp_path):
        write_files(tmp_path, {"node_modules/pkg/index.js": "", "src/a.js": ""})
        assert discover_files(tmp_path, []) == ["src/a.js"]

    def test_vcs_directories_skipped(self, tmp_path):
        write_files(tmp_path, {".git/HEAD": "ref", "a.js": ""})
        assert discover_files(tmp_path) == ["a.js"]

    def test_exclude_patterns_applied(self, tmp_path):
        write_files(
            tmp_path,
            {
                "dist/bundle.js": "",
                "src/a.js": "",
                "src/a.test.js": "",
                "legacy/old.js": "",
            },
        )
        files = discover_files(tmp_path, ["dist", "**/*.test.js", "legacy/"])
        assert files == ["src/a.js"]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            discover_files(tmp_path / "nope")

    def test_file_root_raises(self, tmp_path):
        f = tmp_path / "a.js"
        f.write_text("")
        with pytest.raises(ConfigError):
            discover_files(f)

    def test_invalid_pattern_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            discover_files(tmp_path, ["/abs"])
