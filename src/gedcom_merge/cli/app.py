
from __future__ import annotations

import typer

from gedcom_merge.cli.commands.append import append_command
from gedcom_merge.cli.commands.merge import merge_command
from gedcom_merge.cli.commands.stats import stats_command
from gedcom_merge.cli.commands.tree import tree_command

app = typer.Typer(
    name="gedcom-tree",
    help="Merge, append to, and inspect the master family-tree GEDCOM",
    add_completion=False,
)

app.command("merge")(merge_command)
app.command("append")(append_command)
app.command("stats")(stats_command)
app.command("tree")(tree_command)


def main():
    app()


if __name__ == "__main__":
    main()
