"""Scan a project for unused files, exports and imports."""

from __future__ import annotations

import click

from sweep.config import CATEGORIES, DEFAULT_IGNORE_FILE, DEFAULT_THRESHOLD, load_config
from sweep.exit_codes import GateFailureError
from sweep.output.formatter import format_scan_result, json_envelope, to_json
from sweep.scanner import scan_project


def _summary(result, shown) -> dict:
    by_type = {t: len(files) for t, files in shown.files_by_type().items()}
    return {
        "total": result.total,
        "shown": shown.total,
        "unused_files": len(shown.unused_files),
        "unused_exports": len(shown.unused_exports),
        "unused_imports": len(shown.unused_imports),
        "by_type": by_type,
    }


@click.command()
@click.option("--path", "path", default=".", type=click.Path(file_okay=False),
              help="Project root to scan")
@click.option("--exclude", "exclude", default=None,
              help="Comma-separated exclude globs (default: node_modules,dist,build,.git)")
@click.option("--only", "only", default=None,
              help=f"Comma-separated categories to run ({','.join(CATEGORIES)})")
@click.option("--threshold", "threshold", default=None, type=int,
              help=f"Hide findings below this confidence (0-100, default {DEFAULT_THRESHOLD})")
@click.option("--ignore-file", "ignore_file", default=DEFAULT_IGNORE_FILE, show_default=True,
              help="File in the project root with extra exclude globs")
@click.option("--all", "show_all", is_flag=True, help="Include findings below the threshold")
@click.option("--fail-on-findings", "fail_on_findings", is_flag=True,
              help="Exit with code 5 when findings at or above the threshold exist")
@click.pass_context
def scan(ctx, path, exclude, only, threshold, ignore_file, show_all, fail_on_findings):
    """Find files, exports and imports nothing uses."""
    json_mode = ctx.obj.get('json') if ctx.obj else False

    config = load_config(path, exclude=exclude, only=only, threshold=threshold, ignore_file=ignore_file)
    result = scan_project(config)
    shown = result if show_all else result.filtered(config.threshold)

    if json_mode:
        payload = shown.to_dict()
        click.echo(to_json(json_envelope(
            "scan",
            summary=_summary(result, shown),
            threshold=config.threshold,
            **payload,
        )))
    else:
        click.echo(format_scan_result(shown, 0 if show_all else config.threshold))
        hidden = result.total - shown.total
        if hidden:
            click.echo(f"\n({hidden} findings below {config.threshold}% hidden, use --all to show)")

    gated = result.filtered(config.threshold)
    if fail_on_findings and gated.total:
        raise GateFailureError(f"{gated.total} unused items at or above {config.threshold}% confidence.")
