"""
Citation injection for imported records.

BIRT, DEAT and MARR blocks receive ``2 SOUR @S1@`` / ``2 SOUR @S2@`` lines
for whichever testimony source is not cited yet. The new lines go right
after the event's contiguous child lines.

Two presence scopes:

    record  A citation anywhere in the record counts, and a record that
            already cites both sources is left alone.
    event   Only citations inside the event block count.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from gedcom_merge.identity.allocator import RESERVED_SOURCE_IDS
from gedcom_merge.loader.segmenter import Record, line_level

CITED_EVENT_TAGS = ("BIRT", "DEAT", "MARR")
SCOPE_RECORD = "record"
SCOPE_EVENT = "event"

_CITE_RES = {
    sid: re.compile(rf"^2\s+SOUR\s+@{sid}@") for sid in RESERVED_SOURCE_IDS
}
_EVENT_RES = {tag: re.compile(rf"^1\s+{tag}\b") for tag in CITED_EVENT_TAGS}


def citation_line(source_id: str) -> str:
    return f"2 SOUR @{source_id}@"


def _cites(lines: Sequence[str], source_id: str) -> bool:
    pattern = _CITE_RES[source_id]
    return any(pattern.match(line) for line in lines)


def event_span(lines: Sequence[str], tag: str) -> Optional[Tuple[int, int]]:
    """
    (start, end) of the first level-1 ``tag`` block: ``start`` is the event
    line, ``end`` the index just past its contiguous child lines.
    """
    pattern = _EVENT_RES[tag]
    for start, line in enumerate(lines):
        if not pattern.match(line):
            continue
        end = start + 1
        while end < len(lines):
            level = line_level(lines[end])
            if level is None or level < 2:
                break
            end += 1
        return start, end
    return None


def inject_citations(record: Record, enabled: bool = True, scope: str = SCOPE_RECORD) -> Record:
    """
    Return a copy of ``record`` with missing testimony citations added.

    Running it again on its own output changes nothing.
    """
    if not enabled:
        return record
    if scope not in (SCOPE_RECORD, SCOPE_EVENT):
        raise ValueError(f"Unknown citation scope: {scope!r}")

    lines: List[str] = list(record.lines)
    if scope == SCOPE_RECORD and all(_cites(lines, sid) for sid in RESERVED_SOURCE_IDS):
        return Record(lines=lines)

    for tag in CITED_EVENT_TAGS:
        span = event_span(lines, tag)
        if span is None:
            continue
        start, end = span
        for sid in RESERVED_SOURCE_IDS:
            scope_lines = lines if scope == SCOPE_RECORD else lines[start + 1:end]
            if _cites(scope_lines, sid):
                continue
            lines.insert(end, citation_line(sid))
            end += 1

    return Record(lines=lines)
