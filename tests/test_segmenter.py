# tests/test_segmenter.py

from __future__ import annotations

from gedcom_merge.loader import Record, line_level, segment_document, segment_records
from gedcom_merge.utils import mock_file_path


def test_mock_file_exists() -> None:
    path = mock_file_path("master_small.ged")
    assert path.is_file(), f"Expected GEDCOM file at: {path}"


def test_segment_document_sets_head_and_trailer_aside(master_text: str) -> None:
    doc = segment_document(master_text)

    assert doc.head is not None and doc.head.tag == "HEAD"
    assert doc.trailer is not None and doc.trailer.tag == "TRLR"
    assert doc.xrefs() == ["@S1@", "@S2@", "@S3@", "@I1@", "@I2@", "@I5@", "@F1@"]
    assert all(r.first_line.startswith("0 ") for r in doc.records)


def test_reassembly_without_changes_is_byte_equivalent(master_text: str) -> None:
    assert segment_document(master_text).to_text() == master_text


def test_records_keep_their_child_lines(master_text: str) -> None:
    records = {r.xref_id: r for r in segment_records(master_text)}
    john = records["I1"]
    assert john.lines[0] == "0 @I1@ INDI"
    assert "2 PLAC Springfield, Greene County, Missouri" in john.lines
    assert john.lines[-1] == "1 FAMS @F1@"


def test_blank_lines_between_records_are_dropped() -> None:
    records = segment_records("0 @I1@ INDI\n1 NAME A /B/\n\n\n0 @F1@ FAM\n1 HUSB @I1@\n\n")
    assert [r.lines for r in records] == [
        ["0 @I1@ INDI", "1 NAME A /B/"],
        ["0 @F1@ FAM", "1 HUSB @I1@"],
    ]


def test_record_properties() -> None:
    note = Record.from_text("0 @N1@ NOTE Imported note\n")
    assert note.xref == "@N1@"
    assert note.xref_id == "N1"
    assert note.tag == "NOTE"

    head = Record.from_text("0 HEAD\n1 CHAR UTF-8")
    assert head.xref is None
    assert head.tag == "HEAD"
    assert [t.tag for t in head.tokens()] == ["HEAD", "CHAR"]


def test_line_level() -> None:
    assert line_level("2 DATE 1900") == 2
    assert line_level("  1 BIRT") == 1
    assert line_level("continuation text") is None


def test_empty_text_gives_empty_document() -> None:
    doc = segment_document("")
    assert len(doc) == 0
    assert doc.head is None and doc.trailer is None


def test_leading_bom_does_not_hide_the_header() -> None:
    doc = segment_document("\ufeff0 HEAD\r\n1 CHAR UTF-8\r\n0 @I1@ INDI\r\n0 TRLR\r\n")
    assert doc.head is not None and doc.head.lines == ["0 HEAD", "1 CHAR UTF-8"]
    assert doc.xrefs() == ["@I1@"]
    assert doc.trailer is not None
