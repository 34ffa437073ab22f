# src/gedcom_merge/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


_NEWLINE_RE = re.compile(r"\r\n?")
BOM = "\ufeff"


@dataclass(frozen=True)
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based line number in the original text.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        pointer: Optional cross-reference identifier, e.g. "@I1@" or None.
        tag: GEDCOM tag, e.g. "INDI", "FAM", "HEAD", "BIRT", "SOUR".
        value: The raw line value (payload) as a string (may be empty).
        raw: The original line content without trailing newline characters.
    """
    lineno: int
    level: int
    pointer: Optional[str]
    tag: str
    value: str
    raw: str


class GedcomSyntaxError(ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax."""


def normalize_newlines(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return _NEWLINE_RE.sub("\n", text)


def normalize_text(text: str) -> str:
    """LF line endings and no leading UTF-8 BOM."""
    text = normalize_newlines(text or "")
    return text[1:] if text.startswith(BOM) else text


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def tokenize_line(line: str, lineno: int = 0) -> Token:
    """
    Parse a single GEDCOM line into a Token.

    Strict about the required order:
        <level> [<pointer>] <tag> [<value>]

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "2 SOUR @S1@"
    """
    raw = _strip_eol(line)

    if not raw.strip():
        raise GedcomSyntaxError(f"Empty or whitespace-only line at {lineno}")

    # Handle optional UTF-8 BOM on the very first line.
    if lineno == 1 and raw.startswith(BOM):
        raw = raw.lstrip(BOM)

    # --- 1. Extract level -------------------------------------------------
    parts = raw.lstrip(" ").split(" ", 1)
    if len(parts) == 1:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag (only level found) -> {raw!r}"
        )

    level_str, rest = parts[0], parts[1]
    if not level_str.isdigit():
        raise GedcomSyntaxError(
            f"Line {lineno}: level is not numeric -> {level_str!r} in {raw!r}"
        )

    level = int(level_str)
    rest = rest.lstrip(" ")

    if not rest:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag after level -> {raw!r}"
        )

    # --- 2. Extract optional pointer -------------------------------------
    pointer: Optional[str] = None

    if rest.startswith("@"):
        try:
            space_index = rest.index(" ")
        except ValueError:
            raise GedcomSyntaxError(
                f"Line {lineno}: pointer present but no tag -> {raw!r}"
            ) from None

        pointer = rest[:space_index]
        rest = rest[space_index + 1 :].lstrip(" ")

        if not rest:
            raise GedcomSyntaxError(
                f"Line {lineno}: pointer present but missing tag -> {raw!r}"
            )

    # --- 3. Extract tag and optional value --------------------------------
    if " " in rest:
        tag, value = rest.split(" ", 1)
    else:
        tag, value = rest, ""

    if not tag:
        raise GedcomSyntaxError(
            f"Line {lineno}: empty tag after level/pointer -> {raw!r}"
        )

    return Token(
        lineno=lineno,
        level=level,
        pointer=pointer,
        tag=tag,
        value=value,
        raw=raw,
    )


def read_text(path: Union[str, Path]) -> str:
    """Read a GEDCOM file as text with normalized newlines."""
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("r", encoding="utf-8-sig", errors="replace") as f:
        return normalize_text(f.read())
