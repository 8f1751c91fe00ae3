"""Scan configuration.

Values come from three places, later ones adding to earlier ones:

* ``.sweep.yml`` / ``.sweep.yaml`` in the project root (keys ``exclude``,
  ``only``, ``threshold``),
* the ignore file (default ``.cleanupignore``; one glob per line, ``#``
  starts a comment),
* command-line options.

Exclude patterns from all three are merged; ``only`` and ``threshold`` on
the command line replace the file's values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from sweep.exit_codes import ConfigError
from sweep.index.discovery import (
    DEFAULT_EXCLUDES,
    DEPENDENCY_EXCLUDE,
    load_ignore_file,
    validate_exclude_patterns,
)

CATEGORIES = ("exports", "components", "dead", "images", "styles")

CONFIG_FILES = (".sweep.yml", ".sweep.yaml")
DEFAULT_IGNORE_FILE = ".cleanupignore"
DEFAULT_THRESHOLD = 70


@dataclass(frozen=True)
class ScanConfig:
    project_root: Path
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDES + (DEPENDENCY_EXCLUDE,)
    categories: tuple[str, ...] = ()
    threshold: int = DEFAULT_THRESHOLD

    @property
    def active_categories(self) -> tuple[str, ...]:
        """Requested categories, or all of them when none were named."""
        return self.categories or CATEGORIES


def split_list(value) -> list[str]:
    """Accept ``"a,b"``, ``["a", "b"]`` or None."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(f"Expected a string, got {item!r}")
            items.extend(item.split(","))
    else:
        raise ConfigError(f"Expected a list or comma-separated string, got {value!r}")
    return [item.strip() for item in items if item.strip()]


def validate_categories(categories) -> tuple[str, ...]:
    cats = tuple(dict.fromkeys(c.strip().lower() for c in categories))
    unknown = [c for c in cats if c not in CATEGORIES]
    if unknown:
        raise ConfigError(f"Unknown category: {', '.join(unknown)} (choose from {', '.join(CATEGORIES)})")
    return cats


def validate_threshold(value) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Threshold must be a number between 0 and 100, got {value!r}")
    try:
        threshold = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Threshold must be a number between 0 and 100, got {value!r}") from exc
    if not 0 <= threshold <= 100:
        raise ConfigError(f"Threshold must be between 0 and 100, got {threshold}")
    return threshold


def find_config_file(root: Path) -> Path | None:
    for name in CONFIG_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict:
    """Parse a YAML config file.  An empty file is an empty mapping."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    unknown = sorted(set(data) - {"exclude", "only", "threshold"})
    if unknown:
        raise ConfigError(f"Unknown key(s) in {path.name}: {', '.join(map(str, unknown))}")
    return data


def load_config(
    path=".",
    exclude=None,
    only=None,
    threshold=None,
    ignore_file: str | None = DEFAULT_IGNORE_FILE,
) -> ScanConfig:
    """Resolve the scan configuration for the project at *path*.

    *exclude* and *only* accept lists or comma-separated strings.  When
    *exclude* is None the default excludes apply.  The dependency-directory
    exclusion is always appended.

    Raises ConfigError for a missing root, a malformed config file, an
    unknown category, a bad threshold or an invalid exclude pattern.
    """
    root = Path(path).expanduser().resolve()
    if not root.is_dir():
        raise ConfigError(f"Project root is not a directory: {root}")

    file_cfg: dict = {}
    cfg_path = find_config_file(root)
    if cfg_path is not None:
        file_cfg = read_config_file(cfg_path)

    patterns: list[str] = list(DEFAULT_EXCLUDES) if exclude is None else split_list(exclude)
    patterns.extend(split_list(file_cfg.get("exclude")))
    if ignore_file:
        patterns.extend(load_ignore_file(root, ignore_file))
    patterns.append(DEPENDENCY_EXCLUDE)

    categories = split_list(only) if only is not None else split_list(file_cfg.get("only"))

    if threshold is None:
        threshold = file_cfg.get("threshold", DEFAULT_THRESHOLD)

    return ScanConfig(
        project_root=root,
        exclude_patterns=tuple(validate_exclude_patterns(patterns)),
        categories=validate_categories(categories),
        threshold=validate_threshold(threshold),
    )
