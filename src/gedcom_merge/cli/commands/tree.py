from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from gedcom_merge.cli.utils import err_console
from gedcom_merge.exporter import export_tree_json, serialize_tree_to_json_string
from gedcom_merge.tree.adapter import to_tree_data
from gedcom_merge.tree.schema import GraphData

console = Console()


def tree_command(
    data: Path = typer.Argument(..., exists=True, readable=True, help="Person/source JSON file"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Convert application person/source JSON into the renderer's family tree.
    """
    try:
        graph = GraphData.model_validate(json.loads(data.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        err_console.print(f"[red]Invalid person data:[/red] {exc}")
        raise typer.Exit(code=1)

    tree = to_tree_data(graph)

    if verbose:
        console.log(f"Built tree: {len(tree.indis)} individuals, {len(tree.fams)} families")

    indent = 2 if pretty else None
    if out:
        export_tree_json(tree, out, indent=indent)
    else:
        print(serialize_tree_to_json_string(tree, indent=indent))
