"""
Renderer-facing tree: application JSON schema and the adapter that turns it
into GEDCOM-shaped individuals and families.
"""

from __future__ import annotations

from .adapter import person_display_name, to_tree_data
from .entities import TreeData, TreeDate, TreeEvent, TreeFamily, TreeIndividual
from .schema import Event, GraphData, Person, Source, SourceRef, Uncertain

__all__ = [
    "Event",
    "GraphData",
    "Person",
    "Source",
    "SourceRef",
    "TreeData",
    "TreeDate",
    "TreeEvent",
    "TreeFamily",
    "TreeIndividual",
    "Uncertain",
    "person_display_name",
    "to_tree_data",
]
