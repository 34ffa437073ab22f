"""
Document assembly: header, trailer, testimony sources and record
concatenation.

All functions take and return whole-document text. The master body is never
re-tokenized here; records are appended after it.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from gedcom_merge.config import get_config
from gedcom_merge.dates.normalizer import today_ged_date
from gedcom_merge.identity.allocator import RESERVED_SOURCE_IDS
from gedcom_merge.loader.segmenter import Record
from gedcom_merge.loader.tokenizer import normalize_text
from gedcom_merge.logging import get_logger

log = get_logger(__name__)

TRAILER_LINE = "0 TRLR"

_HEAD_RE = re.compile(r"^0\s+HEAD", re.MULTILINE)
_TRAILER_END_RE = re.compile(r"\n0\s+TRLR\s*\Z")


def _chomp(text: str) -> str:
    """Drop at most one trailing newline."""
    return text[:-1] if text.endswith("\n") else text


def _reserved_source_re(source_id: str) -> re.Pattern:
    return re.compile(rf"^0\s+@{source_id}@\s+SOUR", re.MULTILINE)


def header_lines(config=None) -> List[str]:
    cfg = config or get_config()
    header = cfg.header
    return [
        "0 HEAD",
        f"1 SOUR {header.get('tool', 'GedcomMergeTool')}",
        f"2 VERS {header.get('version', '1.0')}",
        f"2 NAME {header.get('name', 'GEDCOM Merge Tool')}",
        "1 GEDC",
        "2 VERS 5.5.1",
        "2 FORM LINEAGE-LINKED",
        "1 CHAR UTF-8",
    ]


def has_head(text: str) -> bool:
    return bool(_HEAD_RE.search(text or ""))


def ensure_head(text: str, config=None) -> str:
    """Prepend a minimal header when the document has none."""
    if has_head(text):
        return text
    log.info("No HEAD record found; adding default header")
    return "\n".join(header_lines(config)) + "\n" + (text or "")


def has_trailer(text: str) -> bool:
    return bool(_TRAILER_END_RE.search(text or ""))


def ensure_trailer(text: str) -> str:
    """Append ``0 TRLR`` when the document does not end with it."""
    if has_trailer(text):
        return text
    return _chomp(text or "") + f"\n{TRAILER_LINE}\n"


def strip_trailer(text: str) -> str:
    return _TRAILER_END_RE.sub("\n", text or "")


def reserved_source_record(index: int, today: str, config=None) -> Record:
    """Default record for testimony source ``index`` (0 -> @S1@, 1 -> @S2@)."""
    cfg = config or get_config()
    source_id = RESERVED_SOURCE_IDS[index]
    entries = cfg.reserved_sources
    entry = entries[index] if index < len(entries) else {}
    title = entry.get("title") or f"Testimony source {index + 1}"
    author = entry.get("author") or "Unknown informant"
    note = entry.get("note") or "First-hand family information"
    return Record(
        lines=[
            f"0 @{source_id}@ SOUR",
            f"1 TITL {title}",
            f"1 AUTH {author}",
            f"1 NOTE {note} (created {today}).",
        ]
    )


def missing_reserved_sources(text: str) -> List[str]:
    return [sid for sid in RESERVED_SOURCE_IDS if not _reserved_source_re(sid).search(text or "")]


def ensure_reserved_sources(text: str, today: Optional[str] = None, config=None) -> str:
    """Add @S1@ / @S2@ before the trailer when either is missing."""
    missing = missing_reserved_sources(text)
    if not missing:
        return text

    today = today or today_ged_date()
    added = ""
    for index, source_id in enumerate(RESERVED_SOURCE_IDS):
        if source_id in missing:
            log.info(f"Creating reserved source @{source_id}@")
            added += reserved_source_record(index, today, config).text + "\n"
    return strip_trailer(ensure_trailer(text)) + added + f"{TRAILER_LINE}\n"


def prepare_master(text: str, today: Optional[str] = None, config=None) -> str:
    """
    Make the master well formed (LF line endings, no BOM, HEAD, reserved
    sources) and return it without its trailer, ready for records to be
    appended.
    """
    base = ensure_trailer(ensure_head(normalize_text(text), config))
    base = ensure_reserved_sources(base, today, config)
    return strip_trailer(base)


def append_block(base: str, record: Record) -> str:
    """Append one record followed by a blank line."""
    return base + _chomp(record.text) + "\n\n"


def finalize(base: str) -> str:
    """Collapse trailing whitespace and close with exactly one trailer."""
    return base.rstrip() + f"\n{TRAILER_LINE}\n"


def assemble(
    base: str,
    sources: Iterable[Record] = (),
    individuals: Iterable[Record] = (),
    families: Iterable[Record] = (),
    other: Iterable[Record] = (),
) -> str:
    """
    Concatenate the prepared master body with imported records:
    sources, individuals, families, then everything else.
    """
    out = base
    for group in (sources, individuals, families, other):
        for record in group:
            out = append_block(out, record)
    return finalize(out)
