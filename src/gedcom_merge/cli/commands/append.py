from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gedcom_merge.append.session import ConsoleInput
from gedcom_merge.cli.utils import build_context, console, err_console
from gedcom_merge.core.exceptions import GedcomMergeError
from gedcom_merge.core.pipeline import AppendPipeline


def append_command(
    master: Optional[Path] = typer.Option(
        None,
        "--master",
        "-m",
        help="Master GEDCOM file (default: paths.master from config)",
    ),
):
    """
    Interactively add a person (and optional spouse) to the master file.
    """
    ctx = build_context(master=master)

    try:
        result = AppendPipeline(ctx, ConsoleInput(console)).run()
    except GedcomMergeError as exc:
        err_console.print(f"[red]Append failed:[/red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"\nSaved updates to: {ctx.master_path}")
    console.print(
        f"Individuals now up to I{result.counters.individual}, "
        f"families up to F{result.counters.family}"
    )
    console.print("\nDone.")
