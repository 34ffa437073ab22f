# src/gedcom_merge/identity/allocator.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from gedcom_merge.loader.segmenter import Record
from gedcom_merge.records.classifier import RecordKind


# The two testimony sources. Never renumbered, never allocated.
RESERVED_SOURCE_IDS = ("S1", "S2")
RESERVED_SOURCE_FLOOR = 2

_MAX_ID_PATTERNS = {
    RecordKind.INDIVIDUAL: re.compile(r"^0\s+@I(\d+)@\s+INDI\s*$", re.MULTILINE),
    RecordKind.FAMILY: re.compile(r"^0\s+@F(\d+)@\s+FAM\s*$", re.MULTILINE),
    RecordKind.SOURCE: re.compile(r"^0\s+@S(\d+)@\s+SOUR\s*$", re.MULTILINE),
}

_LEVEL0_XREF_RE = re.compile(r"^0\s+@([^@\s]+)@", re.MULTILINE)
_PREFIXED_ID_RE = re.compile(r"^([A-Za-z_]+)(\d+)$")


def is_reserved_source(xref_id: Optional[str]) -> bool:
    return xref_id in RESERVED_SOURCE_IDS


def split_prefixed_id(xref_id: str) -> Optional[tuple]:
    """'N12' -> ('N', 12); None when the id has no <letters><digits> shape."""
    m = _PREFIXED_ID_RE.match(xref_id or "")
    if not m:
        return None
    return m.group(1), int(m.group(2))


@dataclass(frozen=True)
class MaxIds:
    individual: int = 0
    family: int = 0
    source: int = 0

    def for_kind(self, kind: RecordKind) -> int:
        return {
            RecordKind.INDIVIDUAL: self.individual,
            RecordKind.FAMILY: self.family,
            RecordKind.SOURCE: self.source,
        }[kind]

    def describe(self) -> str:
        return f"I{self.individual} / F{self.family} / S{self.source}"


def scan_max_ids(text: str) -> MaxIds:
    """
    Highest numeric suffix per kind among level-0 lines, 0 when absent.
    """
    found = {}
    for kind, pattern in _MAX_ID_PATTERNS.items():
        found[kind] = max((int(m.group(1)) for m in pattern.finditer(text or "")), default=0)
    return MaxIds(
        individual=found[RecordKind.INDIVIDUAL],
        family=found[RecordKind.FAMILY],
        source=found[RecordKind.SOURCE],
    )


def scan_prefix_maxima(*texts: str) -> Dict[str, int]:
    """Highest numeric suffix per xref prefix over every level-0 xref."""
    maxima: Dict[str, int] = {}
    for text in texts:
        for m in _LEVEL0_XREF_RE.finditer(text or ""):
            parts = split_prefixed_id(m.group(1))
            if parts is None:
                continue
            prefix, number = parts
            maxima[prefix] = max(maxima.get(prefix, 0), number)
    return maxima


@dataclass
class IdAllocator:
    """
    Explicit per-kind "next id" state, seeded once from the master document.

    Every id handed out is strictly greater than the pre-merge maximum of its
    kind. Source ids start above the reserved testimony sources even when
    those are absent from the scanned text.
    """

    last: Dict[RecordKind, int] = field(default_factory=dict)
    prefix_last: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, *extra_texts: str) -> "IdAllocator":
        ids = scan_max_ids(text)
        return cls(
            last={
                RecordKind.INDIVIDUAL: ids.individual,
                RecordKind.FAMILY: ids.family,
                RecordKind.SOURCE: max(ids.source, RESERVED_SOURCE_FLOOR),
            },
            prefix_last=scan_prefix_maxima(text, *extra_texts),
        )

    def allocate(self, kind: RecordKind) -> int:
        if kind not in self.last:
            raise ValueError(f"No id counter for {kind}")
        self.last[kind] += 1
        return self.last[kind]

    def allocate_id(self, kind: RecordKind) -> str:
        return f"{kind.prefix}{self.allocate(kind)}"

    def allocate_prefixed(self, prefix: str) -> str:
        """
        New id for an arbitrary prefix. I/F/S go through the kind counters so
        they never clash with kind allocation.
        """
        kind = RecordKind.for_prefix(prefix)
        if kind is not None:
            number = self.allocate(kind)
            self.prefix_last[prefix] = max(self.prefix_last.get(prefix, 0), number)
            return f"{prefix}{number}"
        number = self.prefix_last.get(prefix, 0) + 1
        self.prefix_last[prefix] = number
        return f"{prefix}{number}"

    def build_id_map(self, records: Iterable[Record], kind: RecordKind) -> Dict[str, str]:
        """
        Map each record's old id to a newly allocated one, in input order.

        Reserved sources are skipped entirely.
        """
        id_map: Dict[str, str] = {}
        for record in records:
            old_id = record.xref_id
            if not old_id:
                continue
            if kind is RecordKind.SOURCE and is_reserved_source(old_id):
                continue
            id_map[old_id] = self.allocate_id(kind)
        return id_map

    def counters(self) -> MaxIds:
        return MaxIds(
            individual=self.last.get(RecordKind.INDIVIDUAL, 0),
            family=self.last.get(RecordKind.FAMILY, 0),
            source=self.last.get(RecordKind.SOURCE, 0),
        )
