# tests/test_classifier.py

from __future__ import annotations

from gedcom_merge.loader import Record, segment_records
from gedcom_merge.records import RecordKind, classify_record, classify_records


def _kind(line: str) -> RecordKind:
    return classify_record(Record(lines=[line]))


def test_classify_numbered_kinds() -> None:
    assert _kind("0 @I12@ INDI") is RecordKind.INDIVIDUAL
    assert _kind("0 @F3@ FAM") is RecordKind.FAMILY
    assert _kind("0 @S7@ SOUR") is RecordKind.SOURCE


def test_anything_else_is_other() -> None:
    assert _kind("0 @N1@ NOTE Imported note") is RecordKind.OTHER
    assert _kind("0 @R1@ REPO") is RecordKind.OTHER
    assert _kind("0 @X1@ INDI") is RecordKind.OTHER
    assert _kind("0 @I1@ INDIVIDUAL") is RecordKind.OTHER


def test_classify_records_keeps_input_order(incoming_text: str) -> None:
    classified = classify_records(segment_records(incoming_text))

    assert [r.xref_id for r in classified.individuals] == ["I1", "I2", "I3"]
    assert [r.xref_id for r in classified.sources] == ["S1", "S7"]
    assert classified.counts() == {
        "individuals": 3,
        "families": 1,
        "sources": 2,
        "other": 1,
    }


def test_kind_prefix_lookup() -> None:
    assert RecordKind.for_prefix("F") is RecordKind.FAMILY
    assert RecordKind.for_prefix("N") is None
    assert RecordKind.INDIVIDUAL.tag == "INDI"
