# tests/test_session.py

from __future__ import annotations

from gedcom_merge.append import ScriptedInput, collect_request
from gedcom_merge.append.session import PERSON_PROMPTS, SPOUSE_PROMPTS

PERSON = ["Carl", "Otto", "Doe", "m", "1980-02-29", "Austin, Texas", "", ""]


def test_person_only() -> None:
    source = ScriptedInput(PERSON + ["n"])
    request = collect_request(source)

    assert request.spouse is None
    assert request.marriage is None
    assert request.person.given == "Carl"
    assert request.person.sex == "M"
    assert request.person.death_date == ""
    assert source.prompts == list(PERSON_PROMPTS.values()) + [
        "Add a spouse and link with a family record?"
    ]


def test_person_with_spouse_and_marriage() -> None:
    spouse = ["Dana", "", "Roe", "f", "", "", "", ""]
    source = ScriptedInput(PERSON + ["yes"] + spouse + ["2005-06-10", " Austin, Texas "])
    request = collect_request(source)

    assert request.spouse is not None
    assert request.spouse.surname == "Roe"
    assert request.spouse.sex == "F"
    assert request.marriage.date == "2005-06-10"
    assert request.marriage.place == "Austin, Texas"
    assert source.prompts[9:17] == list(SPOUSE_PROMPTS.values())
    assert source.prompts[-2:] == ["Marriage date (optional)", "Marriage place (optional)"]


def test_running_out_of_answers_gives_blanks() -> None:
    request = collect_request(ScriptedInput(["Only"]))
    assert request.person.given == "Only"
    assert request.person.surname == ""
    assert request.person.sex == "U"
    assert request.spouse is None
