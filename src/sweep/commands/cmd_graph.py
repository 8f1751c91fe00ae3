"""Show the module dependency graph: size, orphans and entry points."""

from __future__ import annotations

import click

from sweep.config import load_config
from sweep.graph.usage import get_entry_points, get_orphans
from sweep.output.formatter import format_table, json_envelope, section, to_json
from sweep.scanner import prepare_context


@click.command("graph")
@click.option("--path", "path", default=".", type=click.Path(file_okay=False),
              help="Project root to analyse")
@click.option("--exclude", "exclude", default=None,
              help="Comma-separated exclude globs (default: node_modules,dist,build,.git)")
@click.option("--orphans", "orphans_only", is_flag=True,
              help="List only files nothing imports")
@click.option("--budget", "budget", default=0, type=int,
              help="Max rows per section (0 = unlimited)")
@click.pass_context
def graph_cmd(ctx, path, exclude, orphans_only, budget):
    """Summarise the import graph the detectors work from."""
    json_mode = ctx.obj.get('json') if ctx.obj else False

    config = load_config(path, exclude=exclude)
    scan_ctx = prepare_context(config)
    graph = scan_ctx.graph

    orphans = get_orphans(graph)
    entry_points = get_entry_points(graph)
    summary = {
        "files": len(scan_ctx.files),
        "nodes": len(graph),
        "edges": graph.edge_count(),
        "orphans": len(orphans),
        "entry_points": len(entry_points),
    }

    if json_mode:
        payload = {"orphans": orphans, "entry_points": entry_points}
        if not orphans_only:
            payload["nodes"] = [
                {
                    "path": node,
                    "imports": sorted(graph.imports(node)),
                    "imported_by": sorted(graph.imported_by(node)),
                    "exports": sorted(graph.exports(node)),
                }
                for node in graph.nodes
            ]
        click.echo(to_json(json_envelope("graph", summary=summary, **payload)))
        return

    if orphans_only:
        click.echo(section(f"Orphans ({len(orphans)}):", [f"  {o}" for o in orphans], budget))
        return

    click.echo(f"Graph: {summary['nodes']} nodes, {summary['edges']} edges "
               f"({summary['files']} files scanned)")
    click.echo("")
    rows = [
        [node, str(graph.out_degree(node)), str(graph.in_degree(node)), str(len(graph.exports(node)))]
        for node in graph.nodes
    ]
    click.echo(format_table(["file", "imports", "imported by", "exports"], rows, budget))
    click.echo("")
    click.echo(section(f"Orphans ({len(orphans)}):", [f"  {o}" for o in orphans], budget))
    click.echo("")
    click.echo(section(f"Entry points ({len(entry_points)}):", [f"  {e}" for e in entry_points], budget))
