"""
Merge stack: remapping, citation injection, assembly and the pure merge.
"""

from __future__ import annotations

from .assembler import (
    assemble,
    ensure_head,
    ensure_reserved_sources,
    ensure_trailer,
    prepare_master,
    strip_trailer,
)
from .citations import inject_citations
from .merger import MergeResult, build_id_maps, merge_documents, remap_and_cite
from .references import find_dangling_references
from .remap import IdMaps, remap_record, remap_text

__all__ = [
    "IdMaps",
    "MergeResult",
    "assemble",
    "build_id_maps",
    "ensure_head",
    "ensure_reserved_sources",
    "ensure_trailer",
    "find_dangling_references",
    "inject_citations",
    "merge_documents",
    "prepare_master",
    "remap_and_cite",
    "remap_record",
    "remap_text",
    "strip_trailer",
]
