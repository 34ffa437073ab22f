"""
merger.py
Pure merge of an incoming GEDCOM document into a master document.

    master text + incoming text -> merged text

``merge_into`` runs the steps on a prepared master and reports each one
through a callback, which the file pipeline turns into state changes.
``merge_documents`` prepares the master first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Union

from gedcom_merge.config import get_config
from gedcom_merge.dates.normalizer import format_ged_date, today_ged_date
from gedcom_merge.identity.allocator import (
    IdAllocator,
    MaxIds,
    is_reserved_source,
    scan_max_ids,
    split_prefixed_id,
)
from gedcom_merge.loader.segmenter import segment_records
from gedcom_merge.logging import get_logger
from gedcom_merge.merge.assembler import assemble, prepare_master
from gedcom_merge.merge.citations import inject_citations
from gedcom_merge.merge.references import DanglingReference, declared_xrefs, find_dangling_references
from gedcom_merge.merge.remap import IdMaps, remap_record
from gedcom_merge.records.classifier import ClassifiedRecords, RecordKind, classify_records

log = get_logger(__name__)


@dataclass
class MergeResult:
    text: str
    counters: MaxIds
    incoming: Dict[str, int] = field(default_factory=dict)
    imported: Dict[str, int] = field(default_factory=dict)
    id_maps: IdMaps = field(default_factory=IdMaps)
    dangling: List[DanglingReference] = field(default_factory=list)


def ged_today(today: Union[date, str, None] = None) -> str:
    if today is None:
        return today_ged_date()
    if isinstance(today, date):
        return format_ged_date(today)
    return today


def build_id_maps(base: str, classified: ClassifiedRecords, allocator: IdAllocator) -> IdMaps:
    """
    Allocate new ids for incoming INDI/FAM/SOUR records (reserved sources
    excluded) and for OTHER records whose xref is already taken.
    """
    maps = IdMaps(
        individual=allocator.build_id_map(classified.individuals, RecordKind.INDIVIDUAL),
        family=allocator.build_id_map(classified.families, RecordKind.FAMILY),
        source=allocator.build_id_map(classified.sources, RecordKind.SOURCE),
    )

    taken = {xref[1:-1] for xref in declared_xrefs(base)}
    for kind in RecordKind.numbered():
        taken.update(maps.for_kind(kind).values())

    for record in classified.other:
        old_id = record.xref_id
        if not old_id:
            continue
        if old_id not in taken:
            taken.add(old_id)
            continue
        parts = split_prefixed_id(old_id)
        if parts is None:
            log.warning(f"Cannot renumber colliding record @{old_id}@; kept as-is")
            continue
        new_id = allocator.allocate_prefixed(parts[0])
        log.info(f"Record @{old_id}@ collides with an existing xref; renumbered to @{new_id}@")
        maps.other[old_id] = new_id
        taken.add(new_id)

    return maps


def remap_and_cite(
    classified: ClassifiedRecords,
    maps: IdMaps,
    add_citations: bool = True,
    scope: str = "record",
) -> ClassifiedRecords:
    """
    Remap every incoming record; INDI and FAM records also get testimony
    citations. Reserved sources are dropped: the master already has them.
    """
    out = ClassifiedRecords()
    for record in classified.sources:
        if is_reserved_source(record.xref_id):
            log.debug(f"Skipping reserved source {record.xref}")
            continue
        out.sources.append(remap_record(record, maps))
    for record in classified.individuals:
        out.individuals.append(inject_citations(remap_record(record, maps), add_citations, scope))
    for record in classified.families:
        out.families.append(inject_citations(remap_record(record, maps), add_citations, scope))
    for record in classified.other:
        out.other.append(remap_record(record, maps))
    return out


def merge_into(
    base: str,
    incoming: str,
    add_citations: bool = True,
    scope: str = "record",
    on_step: Optional[Callable[[str], None]] = None,
) -> MergeResult:
    """
    Merge ``incoming`` into a master already run through ``prepare_master``.

    ``on_step`` is called with the name of each step (Tokenize, Classify,
    Allocate, RemapAndCite, Assemble) before it runs.
    """
    step = on_step or (lambda name: None)

    step("Tokenize")
    records = segment_records(incoming)

    step("Classify")
    classified = classify_records(records)
    log.info(f"Incoming records: {classified.counts()}")

    step("Allocate")
    allocator = IdAllocator.from_text(base, incoming)
    maps = build_id_maps(base, classified, allocator)

    step("RemapAndCite")
    prepared = remap_and_cite(classified, maps, add_citations, scope)

    step("Assemble")
    text = assemble(
        base,
        sources=prepared.sources,
        individuals=prepared.individuals,
        families=prepared.families,
        other=prepared.other,
    )

    dangling = find_dangling_references(text)
    for ref in dangling:
        log.warning(f"Unresolved reference {ref.pointer} in {ref.owner}: {ref.line.strip()}")

    return MergeResult(
        text=text,
        counters=scan_max_ids(text),
        incoming=classified.counts(),
        imported=prepared.counts(),
        id_maps=maps,
        dangling=dangling,
    )


def merge_documents(
    master: str,
    incoming: str,
    add_citations: bool = True,
    today: Union[date, str, None] = None,
    config=None,
) -> MergeResult:
    """
    Merge ``incoming`` into ``master`` and return the new master text.

    Never raises on malformed records; unknown blocks are passed through.
    """
    cfg = config or get_config()
    base = prepare_master(master, ged_today(today), cfg)
    return merge_into(base, incoming, add_citations, cfg.citation_scope)
