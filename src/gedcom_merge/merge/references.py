"""
Reference checking over assembled GEDCOM text.

Dangling references are reported, never repaired: a reference that points
at no level-0 record passes through a merge unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Set

from gedcom_merge.loader.segmenter import GedcomDocument, segment_document

_DECLARED_RE = re.compile(r"^0\s+(@[^@\s]+@)\s+\S", re.MULTILINE)
# Whole-value pointers such as the one in "1 FAMS @F1@" or "2 SOUR @S1@".
_POINTER_RE = re.compile(r"^@[^@\s#]+@$")


@dataclass(frozen=True)
class DanglingReference:
    owner: str
    line: str
    pointer: str


def declared_xrefs(text: str) -> Set[str]:
    return set(_DECLARED_RE.findall(text or ""))


def duplicate_xrefs(doc: GedcomDocument) -> List[str]:
    """Xrefs declared by more than one level-0 record, in first-seen order."""
    seen: Set[str] = set()
    dupes: List[str] = []
    for xref in doc.xrefs():
        if xref in seen and xref not in dupes:
            dupes.append(xref)
        seen.add(xref)
    return dupes


def find_dangling_references(text: str) -> List[DanglingReference]:
    declared = declared_xrefs(text)
    dangling: List[DanglingReference] = []
    for record in segment_document(text).records:
        owner = record.xref or record.first_line
        for token in record.tokens():
            if token.level == 0:
                continue
            pointer = token.value.strip()
            if _POINTER_RE.match(pointer) and pointer not in declared:
                dangling.append(DanglingReference(owner=owner, line=token.raw, pointer=pointer))
    return dangling
