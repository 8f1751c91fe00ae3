"""Plain-text and JSON formatting of scan output."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

# Envelope schema versioning (semver: major.minor.patch)
ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "sweep-envelope-v1"

KIND_ABBREV = {
    "function": "fn",
    "class": "cls",
    "variable": "var",
    "default": "default",
    "specifier": "spec",
    "named": "named",
    "namespace": "ns",
}

# Section titles for the file-type vocabulary
FILE_TYPE_TITLES = {
    "scripts": "Unused scripts",
    "components": "Unused components",
    "images": "Unused images",
    "media": "Unused media",
    "styles": "Unused styles",
}


def abbrev_kind(kind: str) -> str:
    return KIND_ABBREV.get(kind, kind)


def loc(path: str, line: int | None = None) -> str:
    if line is not None:
        return f"{path}:{line}"
    return path


def format_size(size: int) -> str:
    """Human-readable byte count (``512 B``, ``1.5 KB``, ``2.0 MB``)."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def section(title: str, lines: list[str], budget: int = 0) -> str:
    out = [title]
    if budget and len(lines) > budget:
        out.extend(lines[:budget])
        out.append(f"  (+{len(lines) - budget} more)")
    else:
        out.extend(lines)
    return "\n".join(out)


def format_table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    if not rows:
        return "(none)"
    widths = [len(h) for h in headers]
    num_cols = len(widths)
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                widths[i] = max(widths[i], len(str(cell)))
    lines = []
    header_line = "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    lines.append(header_line.rstrip())
    lines.append("  ".join("-" * w for w in widths))
    display_rows = rows
    if budget and len(rows) > budget:
        display_rows = rows[:budget]
    for row in display_rows:
        line = "  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
        lines.append(line.rstrip())
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering.

    Uses ``sort_keys=True`` so that identical data always produces
    byte-identical output.
    """
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    The timestamp lives in a ``_meta`` sub-dict so the content keys stay
    identical across runs on an unchanged tree::

        {
            "schema":         "sweep-envelope-v1",
            "schema_version": "1.0.0",
            "command":        "scan",
            "version":        "<current>",
            "summary":        { ... },
            "_meta":          {"timestamp": "2026-02-12T14:30:00Z"},
            ...payload
        }
    """
    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {"timestamp": ts}
    return out


def _get_version() -> str:
    from sweep import __version__

    return __version__


# ---------------------------------------------------------------------------
# Scan result rendering
# ---------------------------------------------------------------------------


def format_unused_files(files, budget: int = 0) -> list[str]:
    """One table per file type, in vocabulary order; empty types are omitted."""
    by_type: dict[str, list] = {}
    for f in files:
        by_type.setdefault(f.file_type, []).append(f)
    blocks = []
    for file_type, title in FILE_TYPE_TITLES.items():
        group = by_type.get(file_type)
        if not group:
            continue
        rows = [[f"{f.confidence}%", format_size(f.size), f.path] for f in group]
        blocks.append(f"{title} ({len(group)}):\n" + format_table(["conf", "size", "path"], rows, budget))
    return blocks


def format_scan_result(result, threshold: int, budget: int = 0) -> str:
    """Render a (threshold-filtered) ScanResult as plain-text tables."""
    lines = [f"Project: {result.project_root}"]
    lines.append(f"Categories: {', '.join(result.categories)}")
    lines.append(f"Findings at or above {threshold}%: {result.total}")
    if result.total == 0:
        lines.append("")
        lines.append("Nothing unused found.")
        return "\n".join(lines)

    for block in format_unused_files(result.unused_files, budget):
        lines.append("")
        lines.append(block)

    if result.unused_exports:
        rows = [
            [f"{e.confidence}%", abbrev_kind(e.kind), e.name, loc(e.file_path)]
            for e in result.unused_exports
        ]
        lines.append("")
        lines.append(f"Unused exports ({len(rows)}):")
        lines.append(format_table(["conf", "kind", "name", "file"], rows, budget))

    if result.unused_imports:
        rows = [
            [f"{i.confidence}%", abbrev_kind(i.kind), i.name, i.source, loc(i.file_path)]
            for i in result.unused_imports
        ]
        lines.append("")
        lines.append(f"Unused imports ({len(rows)}):")
        lines.append(format_table(["conf", "kind", "name", "from", "file"], rows, budget))

    return "\n".join(lines)
