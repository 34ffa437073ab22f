# src/gedcom_merge/loader/segmenter.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .tokenizer import GedcomSyntaxError, Token, normalize_text, tokenize_line


LEVEL0_RE = re.compile(r"^0\s+")
_XREF_LINE_RE = re.compile(r"^0\s+(@[^@\s]+@)\s+(\S+)")
_TAG_LINE_RE = re.compile(r"^0\s+(\S+)")
_LEVEL_RE = re.compile(r"^\s*(\d+)(?:\s|$)")


def line_level(line: str) -> Optional[int]:
    """Return the level number of a raw line, or None if it has none."""
    m = _LEVEL_RE.match(line)
    return int(m.group(1)) if m else None


@dataclass
class Record:
    """
    One level-0 GEDCOM record kept as its raw lines.

    Nesting is positional: a line belongs to the nearest earlier line with a
    lower level. Transformations work on contiguous line ranges, so no tree is
    built here.

    Attributes:
        lines: Raw lines, first one at level 0 (unless the text had stray
            lines before its first record).
    """

    lines: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "Record":
        lines = normalize_text(text).split("\n")
        while lines and not lines[-1].strip():
            lines.pop()
        return cls(lines=lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def first_line(self) -> str:
        return self.lines[0] if self.lines else ""

    @property
    def xref(self) -> Optional[str]:
        """The record's own @XREF@, e.g. '@I1@'."""
        m = _XREF_LINE_RE.match(self.first_line)
        return m.group(1) if m else None

    @property
    def xref_id(self) -> Optional[str]:
        """The xref without delimiters, e.g. 'I1'."""
        xref = self.xref
        return xref[1:-1] if xref else None

    @property
    def tag(self) -> Optional[str]:
        m = _XREF_LINE_RE.match(self.first_line)
        if m:
            return m.group(2)
        m = _TAG_LINE_RE.match(self.first_line)
        return m.group(1) if m else None

    def tokens(self) -> List[Token]:
        """Parse lines into Tokens, skipping any that do not parse."""
        out: List[Token] = []
        for lineno, line in enumerate(self.lines, start=1):
            if not line.strip():
                continue
            try:
                out.append(tokenize_line(line, lineno=lineno))
            except GedcomSyntaxError:
                continue
        return out

    def __repr__(self) -> str:
        return f"<Record {self.first_line!r} lines={len(self.lines)}>"


@dataclass
class GedcomDocument:
    """
    An ordered GEDCOM document: optional HEAD, general records, optional TRLR.
    """

    records: List[Record] = field(default_factory=list)
    head: Optional[Record] = None
    trailer: Optional[Record] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def xrefs(self) -> List[str]:
        return [r.xref for r in self.records if r.xref]

    def to_text(self) -> str:
        """Reassemble the document, one newline after every record."""
        blocks: List[Record] = []
        if self.head is not None:
            blocks.append(self.head)
        blocks.extend(self.records)
        if self.trailer is not None:
            blocks.append(self.trailer)
        return "".join(f"{r.text}\n" for r in blocks)


def _split_blocks(text: str) -> Iterable[List[str]]:
    cur: List[str] = []
    for line in normalize_text(text).split("\n"):
        if LEVEL0_RE.match(line):
            if cur:
                yield cur
            cur = [line]
        else:
            cur.append(line)
    if cur:
        yield cur


def segment_document(text: str) -> GedcomDocument:
    """
    Split GEDCOM text into level-0 records.

    Rules:
        - A new record begins at every line matching ``^0\\s+``.
        - All following lines up to the next level-0 line belong to it.
        - Trailing blank lines of a record are dropped; all-blank blocks too.
        - HEAD and TRLR are set aside on the document, not in ``records``.
    """
    doc = GedcomDocument()
    if not text:
        return doc

    for block in _split_blocks(text):
        while block and not block[-1].strip():
            block.pop()
        if not block:
            continue

        record = Record(lines=block)
        tag = record.tag if LEVEL0_RE.match(record.first_line) else None
        if tag == "HEAD":
            if doc.head is None:
                doc.head = record
        elif tag == "TRLR":
            doc.trailer = record
        else:
            doc.records.append(record)

    return doc


def segment_records(text: str) -> List[Record]:
    """
    Convenience wrapper: the general record sequence, HEAD/TRLR excluded.
    """
    return segment_document(text).records
