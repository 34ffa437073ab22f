from __future__ import annotations

from .allocator import (
    RESERVED_SOURCE_IDS,
    IdAllocator,
    MaxIds,
    is_reserved_source,
    scan_max_ids,
    scan_prefix_maxima,
)

__all__ = [
    "RESERVED_SOURCE_IDS",
    "IdAllocator",
    "MaxIds",
    "is_reserved_source",
    "scan_max_ids",
    "scan_prefix_maxima",
]
