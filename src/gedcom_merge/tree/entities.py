from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


# -----------------------------
# Small atoms
# -----------------------------

@dataclass(slots=True)
class TreeDate:
    """
    Either structured (year/month/day, each optional) or free text when the
    input was not an ISO date.
    """
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    text: Optional[str] = None


@dataclass(slots=True)
class TreeEvent:
    type: Optional[str] = None
    date: Optional[TreeDate] = None
    place: Optional[str] = None
    confirmed: Optional[bool] = None
    notes: Optional[List[str]] = None


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class TreeIndividual:
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    sex: Optional[str] = None  # 'M' / 'F' / None

    birth: Optional[TreeEvent] = None
    death: Optional[TreeEvent] = None
    notes: Optional[List[str]] = None

    number_of_children: Optional[int] = None
    number_of_marriages: Optional[int] = None

    # Family membership
    famc: Optional[str] = None
    fams: Optional[List[str]] = None

    hide_id: bool = False


@dataclass(slots=True)
class TreeFamily:
    id: str
    husb: Optional[str] = None
    wife: Optional[str] = None
    children: Optional[List[str]] = None


# -----------------------------
# Tree
# -----------------------------

@dataclass(slots=True)
class TreeData:
    """
    GEDCOM-shaped in-memory tree handed to the chart renderer.
    """
    indis: List[TreeIndividual] = field(default_factory=list)
    fams: List[TreeFamily] = field(default_factory=list)

    def individuals_by_id(self) -> Dict[str, TreeIndividual]:
        return {i.id: i for i in self.indis}

    def families_by_id(self) -> Dict[str, TreeFamily]:
        return {f.id: f for f in self.fams}

    def get_individual(self, pointer: str) -> Optional[TreeIndividual]:
        return self.individuals_by_id().get(pointer)

    def get_family(self, pointer: str) -> Optional[TreeFamily]:
        return self.families_by_id().get(pointer)
