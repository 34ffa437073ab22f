"""
json_exporter.py
Structured JSON exporter for the renderer tree.

This exporter:
- Converts dataclasses and objects to dictionaries (NOT strings)
- Uses the renderer's camelCase key names (firstName, hideId, ...)
- Leaves out fields that are None, the way the renderer expects absent keys
- Is deterministic: same tree, same JSON
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from gedcom_merge.logging import get_logger

log = get_logger("json_exporter")

# Attribute name -> renderer key. Names not listed are already the same.
JSON_KEYS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "number_of_children": "numberOfChildren",
    "number_of_marriages": "numberOfMarriages",
    "hide_id": "hideId",
}


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - dataclasses → dict with renderer key names, None fields dropped
    - dict → dict (recursively)
    - list / tuple / set → list (recursively)
    - Unknown objects → __dict__ if present, else str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj):
        out = {}
        for f in fields(obj):
            value = getattr(obj, f.name)
            if value is None:
                continue
            out[JSON_KEYS.get(f.name, f.name)] = _to_json_compatible(value)
        return out

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    if hasattr(obj, "__dict__"):
        return {k: _to_json_compatible(v) for k, v in obj.__dict__.items()}

    return str(obj)


def build_tree_dict(tree: Any) -> Dict[str, Any]:
    """
    Convert the in-memory tree into a JSON-safe dict.
    """
    return {
        "indis": [_to_json_compatible(i) for i in (getattr(tree, "indis", []) or [])],
        "fams": [_to_json_compatible(f) for f in (getattr(tree, "fams", []) or [])],
    }


def serialize_tree_to_json_string(tree: Any, indent: int | None = 2) -> str:
    if indent is None:
        return json.dumps(build_tree_dict(tree), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(build_tree_dict(tree), indent=indent, ensure_ascii=False)


def export_tree_json(tree: Any, output_path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting tree JSON to: %s (INDI=%d, FAM=%d)",
        output_path,
        len(getattr(tree, "indis", []) or []),
        len(getattr(tree, "fams", []) or []),
    )

    json_str = serialize_tree_to_json_string(tree, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
