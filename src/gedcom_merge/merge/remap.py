"""
Cross-reference remapping.

Every ``@<id>@`` in a record body is looked up in the map for its kind
(``I``, ``F`` or ``S`` prefix) and replaced when an entry exists. Ids without
an entry pass through untouched: references to reserved sources, to records
in the master, or anything with an unrecognised shape.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from gedcom_merge.loader.segmenter import Record
from gedcom_merge.records.classifier import RecordKind

_REF_RE = re.compile(r"@([A-Za-z_]+)(\d+)@")


@dataclass
class IdMaps:
    individual: Dict[str, str] = field(default_factory=dict)
    family: Dict[str, str] = field(default_factory=dict)
    source: Dict[str, str] = field(default_factory=dict)
    # Colliding ids of OTHER records (NOTE, REPO, OBJE, ...)
    other: Dict[str, str] = field(default_factory=dict)

    def for_kind(self, kind: RecordKind) -> Dict[str, str]:
        return {
            RecordKind.INDIVIDUAL: self.individual,
            RecordKind.FAMILY: self.family,
            RecordKind.SOURCE: self.source,
            RecordKind.OTHER: self.other,
        }[kind]

    def lookup(self, old_id: str, prefix: str) -> Optional[str]:
        kind = RecordKind.for_prefix(prefix)
        if kind is not None and old_id in self.for_kind(kind):
            return self.for_kind(kind)[old_id]
        return self.other.get(old_id)

    def __len__(self) -> int:
        return len(self.individual) + len(self.family) + len(self.source) + len(self.other)


def remap_text(text: str, maps: IdMaps) -> str:
    """Rewrite delimited references in one pass."""

    def _sub(m: re.Match) -> str:
        old_id = m.group(1) + m.group(2)
        new_id = maps.lookup(old_id, m.group(1))
        return f"@{new_id}@" if new_id else m.group(0)

    return _REF_RE.sub(_sub, text)


def remap_record(record: Record, maps: IdMaps) -> Record:
    if not len(maps):
        return Record(lines=list(record.lines))
    return Record(lines=[remap_text(line, maps) for line in record.lines])
