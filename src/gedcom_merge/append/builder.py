"""
Record construction from structured field input.

Used by the interactive ``append`` command: a person, optionally a spouse,
and the family that links them. Every BIRT/DEAT/MARR block built here cites
both testimony sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

from gedcom_merge.config import get_config
from gedcom_merge.identity.allocator import RESERVED_SOURCE_IDS, IdAllocator, MaxIds, scan_max_ids
from gedcom_merge.dates.normalizer import to_ged_date
from gedcom_merge.loader.segmenter import Record
from gedcom_merge.logging import get_logger
from gedcom_merge.merge.assembler import append_block, finalize, prepare_master
from gedcom_merge.merge.merger import ged_today
from gedcom_merge.normalization.place import normalize_place
from gedcom_merge.records.classifier import RecordKind

log = get_logger(__name__)


@dataclass
class PersonInput:
    given: str = ""
    middle: str = ""
    surname: str = ""
    sex: str = "U"
    birth_date: str = ""
    birth_place: str = ""
    death_date: str = ""
    death_place: str = ""
    note: str = ""


@dataclass
class MarriageInput:
    date: str = ""
    place: str = ""


@dataclass
class AppendRequest:
    person: PersonInput
    spouse: Optional[PersonInput] = None
    marriage: Optional[MarriageInput] = None


@dataclass
class AppendResult:
    text: str
    counters: MaxIds
    person_id: str
    spouse_id: Optional[str] = None
    family_id: Optional[str] = None


def normalize_sex(raw: Optional[str]) -> str:
    """'m' -> 'M', 'f' -> 'F', anything else -> 'U'."""
    value = (raw or "").strip().upper()
    return value if value in ("M", "F") else "U"


def build_name(given: str, middle: str, surname: str) -> str:
    """'John', 'Henry', 'Doe' -> 'John Henry /Doe/'."""
    first = " ".join(p for p in (given, middle) if p).strip()
    return f"{first} /{surname}/"


def event_lines(tag: str, when: Optional[str], where: Optional[str]) -> List[str]:
    """Level-1 event block with both testimony citations, or [] when empty."""
    if not when and not where:
        return []
    lines = [f"1 {tag}"]
    if when:
        lines.append(f"2 DATE {to_ged_date(when)}")
    if where:
        lines.append(f"2 PLAC {normalize_place(where)}")
    lines.extend(f"2 SOUR @{sid}@" for sid in RESERVED_SOURCE_IDS)
    return lines


def build_individual_record(
    individual_id: Union[int, str],
    person: PersonInput,
    fams_id: Union[int, str, None] = None,
    famc_id: Union[int, str, None] = None,
) -> Record:
    lines = [f"0 @{_xref_id('I', individual_id)}@ INDI"]
    lines.append(f"1 NAME {build_name(person.given, person.middle, person.surname)}")
    if person.sex:
        lines.append(f"1 SEX {normalize_sex(person.sex)}")
    lines.extend(event_lines("BIRT", person.birth_date, person.birth_place))
    lines.extend(event_lines("DEAT", person.death_date, person.death_place))
    if fams_id:
        lines.append(f"1 FAMS @{_xref_id('F', fams_id)}@")
    if famc_id:
        lines.append(f"1 FAMC @{_xref_id('F', famc_id)}@")
    if person.note:
        lines.append(f"1 NOTE {person.note}")
    return Record(lines=lines)


def build_family_record(
    family_id: Union[int, str],
    husband_id: Union[int, str, None] = None,
    wife_id: Union[int, str, None] = None,
    marriage: Optional[MarriageInput] = None,
    children: Iterable[Union[int, str]] = (),
    note: Optional[str] = None,
) -> Record:
    lines = [f"0 @{_xref_id('F', family_id)}@ FAM"]
    if husband_id:
        lines.append(f"1 HUSB @{_xref_id('I', husband_id)}@")
    if wife_id:
        lines.append(f"1 WIFE @{_xref_id('I', wife_id)}@")
    for child_id in children:
        lines.append(f"1 CHIL @{_xref_id('I', child_id)}@")
    if marriage is not None:
        lines.extend(event_lines("MARR", marriage.date, marriage.place))
    if note:
        lines.append(f"1 NOTE {note}")
    return Record(lines=lines)


def assign_partner_roles(
    primary_id: str,
    primary_sex: str,
    spouse_id: str,
    spouse_sex: str,
) -> Tuple[Optional[str], Optional[str]]:
    """
    (husband, wife) for a couple. Males take HUSB, females WIFE; a partner
    whose preferred role is taken, or whose sex is unknown, takes the free one.
    """
    roles = {"HUSB": None, "WIFE": None}
    for pid, sex in ((primary_id, normalize_sex(primary_sex)), (spouse_id, normalize_sex(spouse_sex))):
        preferred = "WIFE" if sex == "F" else "HUSB"
        other = "HUSB" if preferred == "WIFE" else "WIFE"
        if roles[preferred] is None:
            roles[preferred] = pid
        elif roles[other] is None:
            roles[other] = pid
    return roles["HUSB"], roles["WIFE"]


def append_people(
    master: str,
    request: AppendRequest,
    today: Union[date, str, None] = None,
    config=None,
) -> AppendResult:
    """
    Add a person (and optionally a spouse plus their family) to ``master``.

    Ids come from the master as it stands: primary person first, then the
    family, then the spouse. The spouse record is written before the
    primary one so the couple reads as a unit.
    """
    cfg = config or get_config()
    base = prepare_master(master, ged_today(today), cfg)
    allocator = IdAllocator.from_text(base)

    person_id = allocator.allocate_id(RecordKind.INDIVIDUAL)
    family_id = spouse_id = None
    if request.spouse is not None:
        family_id = allocator.allocate_id(RecordKind.FAMILY)
        spouse_id = allocator.allocate_id(RecordKind.INDIVIDUAL)

    out = base
    if request.spouse is not None:
        out = append_block(out, build_individual_record(spouse_id, request.spouse, fams_id=family_id))

    out = append_block(out, build_individual_record(person_id, request.person, fams_id=family_id))

    if request.spouse is not None:
        husband, wife = assign_partner_roles(
            person_id, request.person.sex, spouse_id, request.spouse.sex
        )
        out = append_block(
            out,
            build_family_record(family_id, husband, wife, marriage=request.marriage or MarriageInput()),
        )

    text = finalize(out)
    log.info(f"Appended @{person_id}@" + (f" with spouse @{spouse_id}@ in @{family_id}@" if spouse_id else ""))
    return AppendResult(
        text=text,
        counters=scan_max_ids(text),
        person_id=person_id,
        spouse_id=spouse_id,
        family_id=family_id,
    )


def _xref_id(prefix: str, value: Union[int, str]) -> str:
    """3 -> 'I3'; 'I3' stays 'I3'."""
    if isinstance(value, int):
        return f"{prefix}{value}"
    return value
