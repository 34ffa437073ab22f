"""
Prompt sequence for the interactive append flow.

The flow talks to an ``InputSource`` rather than the terminal, so tests can
feed it a fixed list of answers.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Protocol

from rich.console import Console
from rich.prompt import Confirm, Prompt

from gedcom_merge.append.builder import AppendRequest, MarriageInput, PersonInput, normalize_sex

YES_ANSWERS = {"y", "yes"}

# Dict order is prompt order.
PERSON_PROMPTS = {
    "given": "Given (first) name",
    "middle": "Middle name(s)",
    "surname": "Surname (last)",
    "sex": "Sex (M/F, blank = unknown)",
    "birth_date": "Birth date (YYYY-MM-DD or DD MMM YYYY)",
    "birth_place": "Birth place (City, County, State, Country)",
    "death_date": "Death date (optional)",
    "death_place": "Death place (optional)",
}

SPOUSE_PROMPTS = {
    "given": "Spouse given (first) name",
    "middle": "Spouse middle name(s)",
    "surname": "Spouse surname (last)",
    "sex": "Spouse sex (M/F, blank = unknown)",
    "birth_date": "Spouse birth date",
    "birth_place": "Spouse birth place",
    "death_date": "Spouse death date (optional)",
    "death_place": "Spouse death place (optional)",
}


class InputSource(Protocol):
    def ask(self, prompt: str) -> str:
        ...

    def confirm(self, prompt: str) -> bool:
        ...

    def say(self, message: str) -> None:
        ...


class ConsoleInput:
    """Blocking prompts on the terminal via rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, default="", show_default=False, console=self.console)

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, default=False, console=self.console)

    def say(self, message: str) -> None:
        self.console.print(message)


class ScriptedInput:
    """Answers prompts from a fixed sequence; blank once it runs out."""

    def __init__(self, answers: Iterable[str]):
        self._answers: Iterator[str] = iter(answers)
        self.prompts: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return next(self._answers, "")

    def confirm(self, prompt: str) -> bool:
        return self.ask(prompt).strip().lower() in YES_ANSWERS

    def say(self, message: str) -> None:
        pass


def _ask(source: InputSource, prompt: str) -> str:
    return (source.ask(prompt) or "").strip()


def collect_person(source: InputSource, prompts: Dict[str, str] = PERSON_PROMPTS) -> PersonInput:
    """Name parts, sex, birth and death for one person."""
    answers = {name: _ask(source, prompt) for name, prompt in prompts.items()}
    answers["sex"] = normalize_sex(answers["sex"])
    return PersonInput(**answers)


def collect_request(source: InputSource) -> AppendRequest:
    """
    Full prompt sequence: the person, then optionally a spouse and the
    marriage. Blank answers skip a field.
    """
    source.say("Add a person to the master GEDCOM. Leave fields blank to skip.")
    person = collect_person(source)

    if not source.confirm("Add a spouse and link with a family record?"):
        return AppendRequest(person=person)

    source.say("-- Spouse --")
    spouse = collect_person(source, SPOUSE_PROMPTS)
    marriage = MarriageInput(
        date=_ask(source, "Marriage date (optional)"),
        place=_ask(source, "Marriage place (optional)"),
    )
    return AppendRequest(person=person, spouse=spouse, marriage=marriage)
