
"""
CLI command modules for gedcom_merge.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_merge.cli.commands.append import append_command
from gedcom_merge.cli.commands.merge import merge_command
from gedcom_merge.cli.commands.stats import stats_command
from gedcom_merge.cli.commands.tree import tree_command

__all__ = [
    "append_command",
    "merge_command",
    "stats_command",
    "tree_command",
]
