# tests/test_assembler.py

from __future__ import annotations

from gedcom_merge.loader import Record
from gedcom_merge.merge import (
    assemble,
    ensure_head,
    ensure_reserved_sources,
    ensure_trailer,
    prepare_master,
    strip_trailer,
)
from gedcom_merge.merge.assembler import finalize, missing_reserved_sources

TODAY = "01 JAN 2025"


def test_ensure_head_adds_minimal_header(config) -> None:
    text = ensure_head("0 @I1@ INDI\n", config)
    assert text.startswith("0 HEAD\n1 SOUR GedcomMergeTool\n")
    assert "1 CHAR UTF-8" in text
    assert text.endswith("0 @I1@ INDI\n")


def test_ensure_head_keeps_existing_header(master_text: str, config) -> None:
    assert ensure_head(master_text, config) == master_text


def test_trailer_helpers() -> None:
    assert ensure_trailer("0 HEAD\n") == "0 HEAD\n0 TRLR\n"
    assert ensure_trailer("0 HEAD\n0 TRLR\n") == "0 HEAD\n0 TRLR\n"
    assert strip_trailer("0 HEAD\n0 TRLR\n") == "0 HEAD\n"


def test_reserved_sources_created_once(config) -> None:
    text = ensure_reserved_sources("0 HEAD\n0 @S1@ SOUR\n1 TITL Mine\n0 TRLR\n", TODAY, config)

    assert text.count("0 @S1@ SOUR") == 1
    assert text.count("0 @S2@ SOUR") == 1
    assert f"(created {TODAY})." in text
    assert text.endswith("0 TRLR\n")
    assert missing_reserved_sources(text) == []
    assert ensure_reserved_sources(text, TODAY, config) == text


def test_prepare_master_on_empty_text(config) -> None:
    base = prepare_master("", TODAY, config)
    assert base.startswith("0 HEAD\n")
    assert "0 @S1@ SOUR" in base and "0 @S2@ SOUR" in base
    assert "TRLR" not in base
    assert base.endswith("\n")


def test_prepare_master_leaves_well_formed_body_alone(master_text: str, config) -> None:
    assert prepare_master(master_text, TODAY, config) == master_text[: -len("0 TRLR\n")]


def test_finalize_collapses_trailing_blank_lines() -> None:
    assert finalize("0 HEAD\n\n\n") == "0 HEAD\n0 TRLR\n"


def test_assemble_orders_sources_individuals_families_other() -> None:
    text = assemble(
        "0 HEAD\n",
        other=[Record(lines=["0 @N1@ NOTE x"])],
        families=[Record(lines=["0 @F1@ FAM"])],
        individuals=[Record(lines=["0 @I1@ INDI"])],
        sources=[Record(lines=["0 @S3@ SOUR"])],
    )
    assert text == (
        "0 HEAD\n"
        "0 @S3@ SOUR\n\n"
        "0 @I1@ INDI\n\n"
        "0 @F1@ FAM\n\n"
        "0 @N1@ NOTE x\n"
        "0 TRLR\n"
    )
