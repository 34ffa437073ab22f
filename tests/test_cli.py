# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from gedcom_merge.cli import app
from gedcom_merge.utils import mock_file_path

runner = CliRunner()


def test_merge_command_reports_counters(master_file: Path) -> None:
    result = runner.invoke(
        app, ["merge", str(mock_file_path("incoming_family.ged")), "--master", str(master_file)]
    )

    assert result.exit_code == 0, result.output
    assert "Merged into" in result.stdout
    assert "Now up to: I8 / F2 / S4" in result.stdout
    assert "0 @I8@ INDI" in master_file.read_text(encoding="utf-8")


def test_merge_command_missing_input_exits_2(master_file: Path, master_text: str) -> None:
    result = runner.invoke(
        app, ["merge", str(master_file.parent / "missing.ged"), "--master", str(master_file)]
    )

    assert result.exit_code == 2
    assert master_file.read_text(encoding="utf-8") == master_text


def test_merge_command_no_cite(master_file: Path, master_text: str) -> None:
    result = runner.invoke(
        app,
        [
            "merge",
            str(mock_file_path("incoming_family.ged")),
            "--no-cite",
            "--master",
            str(master_file),
        ],
    )

    assert result.exit_code == 0, result.output
    text = master_file.read_text(encoding="utf-8")
    assert text.count("2 SOUR @S1@") == master_text.count("2 SOUR @S1@")


def test_append_command_prompts_and_saves(master_file: Path) -> None:
    answers = "\n".join(["Carl", "", "Doe", "M", "1980-02-29", "Austin, Texas", "", "", "n"]) + "\n"
    result = runner.invoke(app, ["append", "--master", str(master_file)], input=answers)

    assert result.exit_code == 0, result.output
    assert "Individuals now up to I6, families up to F1" in result.stdout
    text = master_file.read_text(encoding="utf-8")
    assert "1 NAME Carl /Doe/" in text
    assert "2 DATE 29 FEB 1980" in text


def test_stats_command(master_file: Path) -> None:
    result = runner.invoke(app, ["stats", "--master", str(master_file)])

    assert result.exit_code == 0, result.output
    assert "Individuals" in result.stdout
    assert "I5" in result.stdout


def test_stats_command_missing_master(tmp_path: Path) -> None:
    result = runner.invoke(app, ["stats", "--master", str(tmp_path / "none.ged")])
    assert result.exit_code == 2


def test_tree_command_writes_json(tmp_path: Path) -> None:
    out = tmp_path / "tree.json"
    result = runner.invoke(app, ["tree", str(mock_file_path("people.json")), "--out", str(out), "--pretty"])

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [i["id"] for i in data["indis"]] == ["p-john", "p-mary", "p-alice"]
    assert len(data["fams"]) == 1
    john = data["indis"][0]
    assert john["firstName"] == "John"
    assert john["numberOfChildren"] == 1
    assert "first_name" not in john
    assert "famc" not in john


def test_tree_command_prints_to_stdout() -> None:
    result = runner.invoke(app, ["tree", str(mock_file_path("people.json"))])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["indis"][2]["hideId"] is True
    assert data["fams"][0]["children"] == ["p-alice"]


def test_tree_command_rejects_invalid_data(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"people": [{"id": "x"}]}', encoding="utf-8")

    result = runner.invoke(app, ["tree", str(bad)])
    assert result.exit_code == 1


def test_merge_command_unreadable_master_exits_1(tmp_path: Path) -> None:
    master = tmp_path / "family.ged"
    master.mkdir()
    result = runner.invoke(
        app, ["merge", str(mock_file_path("incoming_family.ged")), "--master", str(master)]
    )
    assert result.exit_code == 1
