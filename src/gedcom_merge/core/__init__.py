"""
Orchestration layer: context, exceptions and the merge/append pipelines.
"""

from gedcom_merge.core.context import MergeContext
from gedcom_merge.core.exceptions import GedcomMergeError, MissingInput, WriteFailure

__all__ = [
    "GedcomMergeError",
    "MergeContext",
    "MissingInput",
    "WriteFailure",
]
