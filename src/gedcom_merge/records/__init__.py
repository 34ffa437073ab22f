from __future__ import annotations

from .classifier import (
    ClassifiedRecords,
    RecordKind,
    classify_record,
    classify_records,
    kind_pattern,
)

__all__ = [
    "ClassifiedRecords",
    "RecordKind",
    "classify_record",
    "classify_records",
    "kind_pattern",
]
