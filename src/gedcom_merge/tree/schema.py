"""
Application person/source JSON schema consumed by the tree adapter.

Field names follow the JSON (camelCase aliases); Python code uses the
snake_case attribute names.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field

SourceType = Literal["certificate", "census", "directory", "obituary", "headstone", "dna", "other"]
EventType = Literal["birth", "death", "marriage", "residence", "census", "other"]
Gender = Literal["male", "female", "unknown"]


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Source(_Model):
    id: str
    title: str
    url: Optional[AnyUrl] = None
    citation: Optional[str] = None
    type: Optional[SourceType] = None


class SourceRef(_Model):
    source_id: str = Field(alias="sourceId")
    detail: Optional[str] = None


class Uncertain(_Model):
    """A value with an optional note and a 0..1 confidence."""

    value: Optional[str] = None
    note: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0, le=1)


class Event(_Model):
    type: EventType
    date: Optional[Uncertain] = None
    place: Optional[Uncertain] = None
    note: Optional[str] = None
    sources: Optional[List[SourceRef]] = None


class Life(_Model):
    birth: Optional[Event] = None
    death: Optional[Event] = None


class Parents(_Model):
    father_id: Optional[str] = Field(default=None, alias="fatherId")
    mother_id: Optional[str] = Field(default=None, alias="motherId")


class Person(_Model):
    id: str
    given: str
    surname: str
    aka: Optional[List[str]] = None
    gender: Optional[Gender] = None
    life: Optional[Life] = None
    parents: Optional[Parents] = None
    spouses: Optional[List[str]] = None
    children: Optional[List[str]] = None
    is_living: Optional[bool] = Field(default=None, alias="isLiving")
    note: Optional[str] = None
    tags: Optional[List[str]] = None
    sources: Optional[List[SourceRef]] = None


class GraphData(_Model):
    people: List[Person]
    sources: List[Source] = Field(default_factory=list)
