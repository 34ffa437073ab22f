from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class MergeContext:
    """
    Shared pipeline context.
    This object is passed between the pipeline states.
    """

    config: Any
    logger: Any

    master_path: Optional[Path] = None
    input_path: Optional[Path] = None

    add_citations: bool = True
    today: Optional[date] = None

    state: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    debug: bool = False
