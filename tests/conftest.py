"""Shared test fixtures and helpers for sweep tests.

Provides:
- CliRunner fixtures: cli_runner, invoke_cli()
- Factory fixture: project_factory for custom file combinations
- Graph helper: graph_from_edges() for usage/detector tests
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False):
    """Invoke the sweep CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["scan"])
        cwd: directory to run in
        json_mode: if True, prepend --json flag
    Returns:
        click.testing.Result
    """
    from sweep.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args)
    finally:
        os.chdir(old_cwd)

    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing the test with context."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the sweep envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert data.get("schema") == "sweep-envelope-v1"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    assert isinstance(data["summary"], dict)


# ===========================================================================
# Project fixtures
# ===========================================================================


def write_files(root, files):
    """Write {relative_path: content} under *root*; bytes are written raw."""
    for rel_path, content in files.items():
        fp = root / rel_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            fp.write_bytes(content)
        else:
            fp.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def project_factory(tmp_path_factory):
    """Factory fixture for creating custom project layouts.

    Usage:
        def test_something(project_factory):
            proj = project_factory({
                "src/app.ts": "import { a } from './a';",
                "src/a.ts": "export const a = 1;",
            })

    Returns a callable that accepts a dict of {relative_path: content}
    and returns the project path.
    """

    def _create(files):
        proj = tmp_path_factory.mktemp("project")
        return write_files(proj, files)

    return _create


def graph_from_edges(edges, nodes=(), exports=None):
    """Build a frozen DependencyGraph from (importer, imported) pairs."""
    from sweep.graph.model import DependencyGraph

    graph = DependencyGraph()
    for node in nodes:
        graph.add_node(node)
    for importer, imported in edges:
        graph.add_import(importer, imported)
    for path, names in (exports or {}).items():
        graph.add_exports(path, names)
    return graph.freeze()


def make_context(root, graph=None, files=None):
    """ScanContext over *root*, discovering files and building the graph if omitted."""
    from sweep.config import load_config
    from sweep.detectors.base import ScanContext
    from sweep.scanner import prepare_context

    if graph is None and files is None:
        return prepare_context(load_config(root, ignore_file=None))
    return ScanContext(root=root, graph=graph, files=list(files or []))
