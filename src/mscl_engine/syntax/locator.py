"""Regex search for label and variable declaration sites."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Tuple

from mscl_engine.buffer import Cursor

from .lexer import SpanIndex, scan_spans

DefinitionRole = Literal["label", "variable"]

SIGIL = "$"
_SYMBOL_CHAR_RE = re.compile(r"[A-Za-z0-9_.$]")


@dataclass(frozen=True, slots=True)
class Definition:
    name: str
    role: DefinitionRole
    position: Cursor


def _label_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*({re.escape(name)}):", re.IGNORECASE)


def _declaration_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?<![\w.$])declare(?![\w.])[^\n]*?(?<![\w.$])\$?({re.escape(name)})(?![\w.])",
        re.IGNORECASE,
    )


def find_label(lines: Sequence[str], name: str) -> Optional[Cursor]:
    """Position of the first label called ``name``, or ``None``."""

    if not name:
        return None
    pattern = _label_pattern(name)
    for row, line in enumerate(lines):
        match = pattern.match(line)
        if match:
            return (row, match.start(1))
    return None


def find_variable_declarations(
    lines: Sequence[str], name: str, spans: Optional[SpanIndex] = None
) -> List[Cursor]:
    """Positions of every ``declare`` statement naming ``name``, in order."""

    name = name.lstrip(SIGIL)
    if not name:
        return []
    if spans is None:
        spans = scan_spans(lines)
    pattern = _declaration_pattern(name)
    positions: List[Cursor] = []
    for row, line in enumerate(lines):
        for match in pattern.finditer(line):
            if spans.is_comment_or_string(row, match.start()):
                continue
            if spans.is_comment_or_string(row, match.start(1)):
                continue
            positions.append((row, match.start(1)))
    return positions


def identifier_bounds(
    lines: Sequence[str], position: Cursor
) -> Optional[Tuple[int, int]]:
    """Column range of the symbol under, or just before, ``position``.

    One leading sigil is left out of the range.
    """

    row, column = position
    if not 0 <= row < len(lines):
        return None
    line = lines[row]
    column = max(0, min(column, len(line)))
    if column == len(line) or not _SYMBOL_CHAR_RE.match(line[column]):
        column -= 1
    if column < 0 or not _SYMBOL_CHAR_RE.match(line[column]):
        return None

    start = column
    while start > 0 and _SYMBOL_CHAR_RE.match(line[start - 1]):
        start -= 1
    end = column + 1
    while end < len(line) and _SYMBOL_CHAR_RE.match(line[end]):
        end += 1

    if line[start] == SIGIL:
        start += 1
    if start >= end:
        return None
    return (start, end)


def identifier_at_position(lines: Sequence[str], position: Cursor) -> Optional[str]:
    """Symbol under, or immediately before, ``position`` without its sigil."""

    bounds = identifier_bounds(lines, position)
    if bounds is None:
        return None
    start, end = bounds
    return lines[position[0]][start:end]


def find_definitions(
    lines: Sequence[str], name: str, spans: Optional[SpanIndex] = None
) -> List[Definition]:
    """Label and declaration sites for ``name``; empty when none exist."""

    name = name.lstrip(SIGIL)
    definitions: List[Definition] = []
    label = find_label(lines, name)
    if label is not None:
        definitions.append(Definition(name=name, role="label", position=label))
    seen = {label}
    for position in find_variable_declarations(lines, name, spans):
        if position in seen:
            continue
        seen.add(position)
        definitions.append(Definition(name=name, role="variable", position=position))
    return definitions


__all__ = [
    "Definition",
    "DefinitionRole",
    "find_definitions",
    "find_label",
    "find_variable_declarations",
    "identifier_at_position",
    "identifier_bounds",
]
