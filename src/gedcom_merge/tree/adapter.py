"""
adapter.py
One-way adapter: application person/source data -> GEDCOM-shaped tree.

    GraphData(people, sources) -> TreeData(indis, fams)

Families are not stored in the application data; they are derived from
parent pairs and spouse lists. One family exists per unordered pair.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Union

from gedcom_merge.logging import get_logger
from gedcom_merge.tree.entities import TreeData, TreeDate, TreeEvent, TreeFamily, TreeIndividual
from gedcom_merge.tree.schema import Event, GraphData, Person

log = get_logger(__name__)

ISO_DATE_RE = re.compile(r"^(\d{4})(?:-(\d{2}))?(?:-(\d{2}))?$")


@dataclass
class _FamilyBuilder:
    id: str
    husb: Optional[str] = None
    wife: Optional[str] = None
    children: Set[str] = field(default_factory=set)

    def to_family(self) -> TreeFamily:
        return TreeFamily(
            id=self.id,
            husb=self.husb,
            wife=self.wife,
            children=sorted(self.children) if self.children else None,
        )


def to_sex(gender: Optional[str]) -> Optional[str]:
    if gender == "male":
        return "M"
    if gender == "female":
        return "F"
    return None


def parse_iso_date(value: Optional[str]) -> Optional[TreeDate]:
    """'1996-01-03' / '1996-01' / '1996' -> structured; other text -> text."""
    if not value:
        return None
    trimmed = value.strip()
    m = ISO_DATE_RE.match(trimmed)
    if not m:
        return TreeDate(text=trimmed)
    year, month, day = m.groups()
    return TreeDate(
        year=int(year),
        month=int(month) if month else None,
        day=int(day) if day else None,
    )


def to_tree_event(event: Optional[Event]) -> Optional[TreeEvent]:
    if event is None:
        return None

    details: List[str] = []
    if event.note:
        details.append(event.note)
    if event.date is not None and event.date.note:
        details.append(event.date.note)
    if event.place is not None and event.place.note:
        details.append(event.place.note)

    out = TreeEvent(type=event.type)
    if event.place is not None and event.place.value:
        out.place = event.place.value
    if event.date is not None:
        out.date = parse_iso_date(event.date.value)
        if event.date.confidence is not None:
            out.confirmed = event.date.confidence >= 1
    if details:
        out.notes = details
    return out


def family_key(a: Optional[str], b: Optional[str]) -> Optional[str]:
    """Order-independent key for a pair of people; None when both are absent."""
    if not a and not b:
        return None
    first, second = sorted([a or "", b or ""])
    return f"{first}__{second}"


def assign_partner(
    fam: _FamilyBuilder,
    person_id: Optional[str],
    gender: Optional[str],
    spouse_families: Optional[Dict[str, Set[str]]] = None,
) -> None:
    """
    Put a person into the family's HUSB or WIFE slot.

    Males and unknowns prefer HUSB, females WIFE; the other slot is used
    when the preferred one is taken by someone else.
    """
    if not person_id:
        return

    preferred, fallback = ("wife", "husb") if gender == "female" else ("husb", "wife")
    assigned = False
    if getattr(fam, preferred) is None:
        setattr(fam, preferred, person_id)
        assigned = True
    elif getattr(fam, preferred) == person_id:
        assigned = True
    elif getattr(fam, fallback) is None:
        setattr(fam, fallback, person_id)
        assigned = True

    if assigned and spouse_families is not None:
        spouse_families.setdefault(person_id, set()).add(fam.id)


def person_display_name(person: Person) -> str:
    return f"{person.given or ''} {person.surname or ''}".strip() or person.id


def to_tree_data(data: Union[GraphData, Dict[str, Any]]) -> TreeData:
    """
    Build the renderer tree from validated application data.

    Accepts a ``GraphData`` model or its raw JSON dict.
    """
    if not isinstance(data, GraphData):
        data = GraphData.model_validate(data)

    families: Dict[str, _FamilyBuilder] = {}
    child_families: Dict[str, str] = {}
    spouse_families: Dict[str, Set[str]] = {}
    by_id = {p.id: p for p in data.people}

    def ensure_family(a: Optional[str], b: Optional[str]) -> Optional[_FamilyBuilder]:
        key = family_key(a, b)
        if key is None:
            return None
        if key not in families:
            families[key] = _FamilyBuilder(id=f"fam-{key}")
        return families[key]

    # Parent pairs -> families with children
    for person in data.people:
        parents = person.parents
        father_id = parents.father_id if parents else None
        mother_id = parents.mother_id if parents else None
        if not (father_id or mother_id):
            continue
        fam = ensure_family(father_id, mother_id)
        father = by_id.get(father_id) if father_id else None
        mother = by_id.get(mother_id) if mother_id else None
        assign_partner(fam, father_id, father.gender if father else None, spouse_families)
        assign_partner(fam, mother_id, mother.gender if mother else None, spouse_families)
        fam.children.add(person.id)
        child_families[person.id] = fam.id

    # Spouse pairs, once per pair
    for person in data.people:
        for spouse_id in person.spouses or []:
            if spouse_id not in by_id:
                log.debug(f"Spouse {spouse_id} of {person.id} not found; skipped")
                continue
            if person.id < spouse_id:
                fam = ensure_family(person.id, spouse_id)
                assign_partner(fam, person.id, person.gender, spouse_families)
                assign_partner(fam, spouse_id, by_id[spouse_id].gender, spouse_families)

    indis: List[TreeIndividual] = []
    for person in data.people:
        notes: List[str] = []
        if person.note:
            notes.append(person.note)
        tag_notes = [t for t in (person.tags or []) if not t.startswith("focus")]
        if tag_notes:
            notes.append(f"Tags: {', '.join(tag_notes)}")

        life = person.life
        fams = spouse_families.get(person.id)
        indis.append(
            TreeIndividual(
                id=person.id,
                first_name=person.given,
                last_name=person.surname,
                sex=to_sex(person.gender),
                birth=to_tree_event(life.birth if life else None),
                death=to_tree_event(life.death if life else None),
                notes=notes or None,
                number_of_children=len(person.children) if person.children is not None else None,
                number_of_marriages=len(person.spouses) if person.spouses is not None else None,
                famc=child_families.get(person.id),
                fams=sorted(fams) if fams else None,
                hide_id=bool(person.is_living),
            )
        )

    return TreeData(indis=indis, fams=[f.to_family() for f in families.values()])
