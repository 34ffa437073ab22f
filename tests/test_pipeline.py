# tests/test_pipeline.py

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

import pytest

from gedcom_merge.append import ScriptedInput
from gedcom_merge.core import GedcomMergeError, MergeContext, MissingInput, WriteFailure
from gedcom_merge.core.pipeline import AppendPipeline, MergePipeline, read_master
from gedcom_merge.logging import get_logger
from gedcom_merge.utils import mock_file_path


def _context(config, master: Path, incoming: Path | None = None, **kwargs) -> MergeContext:
    return MergeContext(
        config=config,
        logger=get_logger("tests.pipeline"),
        master_path=master,
        input_path=incoming,
        today=date(2025, 1, 1),
        **kwargs,
    )


def test_merge_pipeline_writes_master(config, master_file: Path) -> None:
    ctx = _context(config, master_file, mock_file_path("incoming_family.ged"))
    result = MergePipeline(ctx).run()

    assert master_file.read_text(encoding="utf-8") == result.text
    assert result.counters.describe() == "I8 / F2 / S4"
    assert ctx.state == "Report"
    assert ctx.errors == []
    assert not master_file.with_name(master_file.name + ".tmp").exists()


def test_merge_pipeline_honours_no_cite(config, master_file: Path, master_text: str) -> None:
    ctx = _context(config, master_file, mock_file_path("incoming_family.ged"), add_citations=False)
    result = MergePipeline(ctx).run()
    assert result.text.count("2 SOUR @S2@") == master_text.count("2 SOUR @S2@")


def test_missing_incoming_leaves_master_untouched(config, master_file: Path, master_text: str) -> None:
    ctx = _context(config, master_file, master_file.parent / "missing.ged")

    with pytest.raises(MissingInput):
        MergePipeline(ctx).run()

    assert ctx.state == "Failed"
    assert ctx.errors and ctx.errors[0].startswith("LoadIncoming")
    assert master_file.read_text(encoding="utf-8") == master_text


def test_empty_incoming_is_rejected(config, master_file: Path, tmp_path: Path) -> None:
    incoming = tmp_path / "empty.ged"
    incoming.write_text("  \n\n", encoding="utf-8")
    ctx = _context(config, master_file, incoming)

    with pytest.raises(MissingInput):
        MergePipeline(ctx).run()
    assert ctx.errors[0].startswith("ValidateNonEmpty")


def test_write_failure_keeps_previous_master(config, master_file, master_text, monkeypatch) -> None:
    def refuse(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr(os, "replace", refuse)
    ctx = _context(config, master_file, mock_file_path("incoming_family.ged"))

    with pytest.raises(WriteFailure):
        MergePipeline(ctx).run()

    assert ctx.state == "Failed"
    assert master_file.read_text(encoding="utf-8") == master_text
    assert not master_file.with_name(master_file.name + ".tmp").exists()


def test_append_pipeline_creates_new_master(config, tmp_path: Path) -> None:
    master = tmp_path / "public" / "data" / "family.ged"
    answers = ["Solo", "", "Person", "", "1999-12-31", "", "", "", "n"]
    ctx = _context(config, master)

    result = AppendPipeline(ctx, ScriptedInput(answers)).run()

    assert master.is_file()
    text = master.read_text(encoding="utf-8")
    assert text == result.text
    assert text.startswith("0 HEAD\n")
    assert "0 @S1@ SOUR" in text and "0 @S2@ SOUR" in text
    assert "2 DATE 31 DEC 1999" in text
    assert "(created 01 JAN 2025)." in text
    assert result.person_id == "I1"
    assert ctx.state == "Report"


def test_read_master_of_missing_file_is_empty(tmp_path: Path) -> None:
    assert read_master(tmp_path / "nothing.ged") == ""


def test_unreadable_master_is_not_reported_as_missing_input(config, tmp_path: Path) -> None:
    master = tmp_path / "family.ged"
    master.mkdir()
    ctx = _context(config, master, mock_file_path("incoming_family.ged"))

    with pytest.raises(GedcomMergeError) as excinfo:
        MergePipeline(ctx).run()

    assert not isinstance(excinfo.value, MissingInput)
    assert ctx.errors[0].startswith("LoadMaster")


def test_merge_pipeline_walks_every_state(config, master_file: Path) -> None:
    ctx = _context(config, master_file, mock_file_path("incoming_family.ged"))
    seen = []
    pipeline = MergePipeline(ctx)
    enter = pipeline._enter
    pipeline._enter = lambda state: (seen.append(state.value), enter(state))

    pipeline.run()

    assert seen == [
        "LoadMaster",
        "EnsureWellFormed",
        "LoadIncoming",
        "ValidateNonEmpty",
        "Tokenize",
        "Classify",
        "Allocate",
        "RemapAndCite",
        "Assemble",
        "Persist",
        "Report",
    ]
    assert ctx.stats["incoming"]["individuals"] == 3
