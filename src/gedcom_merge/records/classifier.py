from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from gedcom_merge.loader.segmenter import Record


class RecordKind(Enum):
    """Record kinds with their xref prefix letter and level-0 tag."""

    INDIVIDUAL = ("I", "INDI")
    FAMILY = ("F", "FAM")
    SOURCE = ("S", "SOUR")
    OTHER = (None, None)

    def __init__(self, prefix: Optional[str], tag: Optional[str]):
        self.prefix = prefix
        self.tag = tag

    @classmethod
    def numbered(cls) -> List["RecordKind"]:
        """Kinds with their own id counter."""
        return [cls.INDIVIDUAL, cls.FAMILY, cls.SOURCE]

    @classmethod
    def for_prefix(cls, prefix: str) -> Optional["RecordKind"]:
        for kind in cls.numbered():
            if kind.prefix == prefix:
                return kind
        return None


_KIND_PATTERNS = {
    kind: re.compile(rf"^0\s+@({kind.prefix}\d+)@\s+{kind.tag}\b")
    for kind in RecordKind.numbered()
}


def kind_pattern(kind: RecordKind) -> re.Pattern:
    return _KIND_PATTERNS[kind]


def classify_record(record: Record) -> RecordKind:
    """
    Determine a record's kind from its level-0 line.

    Anything that is not ``@I<n>@ INDI``, ``@F<n>@ FAM`` or ``@S<n>@ SOUR``
    is OTHER and passes through a merge without its own numbering.
    """
    first = record.first_line
    for kind, pattern in _KIND_PATTERNS.items():
        if pattern.match(first):
            return kind
    return RecordKind.OTHER


@dataclass
class ClassifiedRecords:
    individuals: List[Record] = field(default_factory=list)
    families: List[Record] = field(default_factory=list)
    sources: List[Record] = field(default_factory=list)
    other: List[Record] = field(default_factory=list)

    def bucket(self, kind: RecordKind) -> List[Record]:
        return {
            RecordKind.INDIVIDUAL: self.individuals,
            RecordKind.FAMILY: self.families,
            RecordKind.SOURCE: self.sources,
            RecordKind.OTHER: self.other,
        }[kind]

    def counts(self) -> dict:
        return {
            "individuals": len(self.individuals),
            "families": len(self.families),
            "sources": len(self.sources),
            "other": len(self.other),
        }


def classify_records(records: Iterable[Record]) -> ClassifiedRecords:
    """Bucket records by kind, keeping input order within each bucket."""
    out = ClassifiedRecords()
    for record in records:
        out.bucket(classify_record(record)).append(record)
    return out
