# src/gedcom_merge/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_merge.loader import (
        Token,
        GedcomSyntaxError,
        Record,
        GedcomDocument,
        tokenize_line,
        read_text,
        segment_document,
        segment_records,
    )
"""

from __future__ import annotations
from .tokenizer import (
    GedcomSyntaxError,
    Token,
    normalize_newlines,
    normalize_text,
    read_text,
    tokenize_line,
)
from .segmenter import GedcomDocument, Record, line_level, segment_document, segment_records


__all__ = [
    "Token",
    "GedcomSyntaxError",
    "Record",
    "GedcomDocument",
    "line_level",
    "normalize_newlines",
    "normalize_text",
    "read_text",
    "tokenize_line",
    "segment_document",
    "segment_records",
]
