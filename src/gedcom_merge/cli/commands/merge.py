from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_merge.cli.utils import build_context, console, err_console, print_counters
from gedcom_merge.core.exceptions import GedcomMergeError, MissingInput
from gedcom_merge.core.pipeline import MergePipeline

EXIT_FAILURE = 1
EXIT_MISSING_INPUT = 2


def merge_command(
    incoming: Path = typer.Argument(..., help="GEDCOM file to merge into the master"),
    no_cite: bool = typer.Option(
        False,
        "--no-cite",
        help="Do not add @S1@/@S2@ citations to imported events",
    ),
    master: Optional[Path] = typer.Option(
        None,
        "--master",
        "-m",
        help="Master GEDCOM file (default: paths.master from config)",
    ),
):
    """
    Merge a standalone GEDCOM file into the master file.
    """
    ctx = build_context(master=master, incoming=incoming, add_citations=not no_cite)

    try:
        result = MergePipeline(ctx).run()
    except MissingInput as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_MISSING_INPUT)
    except GedcomMergeError as exc:
        err_console.print(f"[red]Merge failed:[/red] {exc}")
        raise typer.Exit(code=EXIT_FAILURE)

    console.print(f"Merged into {ctx.master_path}")
    print_counters(result.counters)
