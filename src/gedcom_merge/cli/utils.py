
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console

from gedcom_merge.config import get_config
from gedcom_merge.core.context import MergeContext
from gedcom_merge.identity.allocator import MaxIds
from gedcom_merge.logging import get_logger

console = Console()
err_console = Console(stderr=True)


def build_context(
    *,
    master: Optional[Path] = None,
    incoming: Optional[Path] = None,
    add_citations: bool = True,
    today: Optional[date] = None,
) -> MergeContext:
    """
    Context for one CLI run; the master defaults to ``paths.master``.
    """
    cfg = get_config()
    return MergeContext(
        config=cfg,
        logger=get_logger("cli"),
        master_path=master or cfg.master_path,
        input_path=incoming,
        add_citations=add_citations,
        today=today,
        debug=cfg.debug,
    )


def print_counters(counters: MaxIds) -> None:
    console.print(f"Now up to: {counters.describe()}")

