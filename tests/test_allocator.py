# tests/test_allocator.py

from __future__ import annotations

from gedcom_merge.identity import IdAllocator, MaxIds, scan_max_ids, scan_prefix_maxima
from gedcom_merge.identity.allocator import split_prefixed_id
from gedcom_merge.loader import segment_records
from gedcom_merge.records import RecordKind, classify_records


def test_scan_max_ids_reads_level0_lines_only(master_text: str) -> None:
    ids = scan_max_ids(master_text + "0 @X1@ NOTE\n1 FAMS @F9@\n")
    assert ids == MaxIds(individual=5, family=1, source=3)
    assert ids.describe() == "I5 / F1 / S3"


def test_scan_max_ids_of_empty_text_is_zero() -> None:
    assert scan_max_ids("") == MaxIds(0, 0, 0)


def test_allocation_is_monotonic_above_existing_maximum(master_text: str) -> None:
    allocator = IdAllocator.from_text(master_text)
    allocated = [allocator.allocate(RecordKind.INDIVIDUAL) for _ in range(5)]

    assert len(set(allocated)) == 5
    assert all(n > 5 for n in allocated)
    assert allocated == sorted(allocated)


def test_source_ids_start_above_reserved_sources() -> None:
    allocator = IdAllocator.from_text("")
    assert allocator.allocate_id(RecordKind.SOURCE) == "S3"
    assert allocator.allocate_id(RecordKind.INDIVIDUAL) == "I1"
    assert allocator.counters() == MaxIds(individual=1, family=0, source=3)


def test_build_id_map_skips_reserved_sources(master_text: str, incoming_text: str) -> None:
    classified = classify_records(segment_records(incoming_text))
    allocator = IdAllocator.from_text(master_text)

    assert allocator.build_id_map(classified.sources, RecordKind.SOURCE) == {"S7": "S4"}
    assert allocator.build_id_map(classified.individuals, RecordKind.INDIVIDUAL) == {
        "I1": "I6",
        "I2": "I7",
        "I3": "I8",
    }


def test_allocate_prefixed_uses_all_scanned_texts(master_text: str, incoming_text: str) -> None:
    allocator = IdAllocator.from_text(master_text, incoming_text)
    assert scan_prefix_maxima(incoming_text)["N"] == 1
    assert allocator.allocate_prefixed("N") == "N2"
    assert allocator.allocate_prefixed("N") == "N3"
    # I/F/S share the kind counters
    assert allocator.allocate_prefixed("F") == "F2"
    assert allocator.allocate_id(RecordKind.FAMILY) == "F3"


def test_split_prefixed_id() -> None:
    assert split_prefixed_id("N12") == ("N", 12)
    assert split_prefixed_id("ABC") is None
