"""
Interactive append: build new INDI/FAM records from prompted fields.
"""

from __future__ import annotations

from .builder import (
    AppendRequest,
    AppendResult,
    MarriageInput,
    PersonInput,
    append_people,
    assign_partner_roles,
    build_family_record,
    build_individual_record,
    build_name,
)
from .session import ConsoleInput, InputSource, ScriptedInput, collect_request

__all__ = [
    "AppendRequest",
    "AppendResult",
    "ConsoleInput",
    "InputSource",
    "MarriageInput",
    "PersonInput",
    "ScriptedInput",
    "append_people",
    "assign_partner_roles",
    "build_family_record",
    "build_individual_record",
    "build_name",
    "collect_request",
]
