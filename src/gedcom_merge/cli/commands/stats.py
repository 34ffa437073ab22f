
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gedcom_merge.cli.utils import build_context, err_console
from gedcom_merge.core.pipeline import read_master
from gedcom_merge.identity.allocator import scan_max_ids
from gedcom_merge.loader.segmenter import segment_document
from gedcom_merge.merge.references import duplicate_xrefs, find_dangling_references
from gedcom_merge.records.classifier import classify_records

console = Console()


def stats_command(
    master: Optional[Path] = typer.Option(
        None,
        "--master",
        "-m",
        help="Master GEDCOM file (default: paths.master from config)",
    ),
):
    """
    Show record counts and the highest ids in the master file.
    """
    ctx = build_context(master=master)
    if not ctx.master_path.is_file():
        err_console.print(f"[red]Master file not found:[/red] {ctx.master_path}")
        raise typer.Exit(code=2)

    text = read_master(ctx.master_path)
    doc = segment_document(text)
    counts = classify_records(doc.records).counts()
    ids = scan_max_ids(text)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Kind", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Highest id", justify="right")

    table.add_row("Individuals", str(counts["individuals"]), f"I{ids.individual}")
    table.add_row("Families", str(counts["families"]), f"F{ids.family}")
    table.add_row("Sources", str(counts["sources"]), f"S{ids.source}")
    table.add_row("Other", str(counts["other"]), "-")

    console.print(table)

    dupes = duplicate_xrefs(doc)
    if dupes:
        console.print(f"[yellow]Duplicate xrefs:[/yellow] {', '.join(dupes)}")
    dangling = find_dangling_references(text)
    if dangling:
        console.print(f"[yellow]Unresolved references:[/yellow] {len(dangling)}")
