"""Line-level predicates the indentation engine is built from."""

from __future__ import annotations

import re
from enum import Enum
from typing import AbstractSet, List, Sequence

from .lexer import CONTINUATION_CHAR, SpanIndex

IDENTIFIER_PATTERN = r"[a-zA-Z][a-zA-Z0-9_.]*"
SYMBOL_CHARS = "A-Za-z0-9_."
STATEMENT_SEPARATOR = ":"

INCREASE_INDENT_BOL: frozenset[str] = frozenset({"if", "elseif", "while"})
INCREASE_INDENT_EOL: frozenset[str] = frozenset({"else"})
DECREASE_INDENT_BOL: frozenset[str] = frozenset(
    {"else", "elseif", "endif", "endwhile"}
)

LABEL_RE = re.compile(rf"^[ \t]*{IDENTIFIER_PATTERN}:")
# Leading digits are legacy line numbers and never part of the first token.
_FIRST_TOKEN_RE = re.compile(rf"^[\s0-9]*([{SYMBOL_CHARS}]*)")
_LAST_TOKEN_RE = re.compile(rf"([{SYMBOL_CHARS}]+)\s*$")


class LineKind(str, Enum):
    """Structural classification of a single line."""

    BLANK = "blank"
    LABEL = "label"
    CODE = "code"
    COMMENT = "comment-or-string"


def is_label_line(line: str) -> bool:
    return LABEL_RE.match(line) is not None


def ends_with_backslash(line: str) -> bool:
    return line.rstrip().endswith(CONTINUATION_CHAR)


def matches_keyword_set(word: str, keywords: AbstractSet[str]) -> bool:
    """Case-insensitive whole-word membership test."""

    return bool(word) and word.lower() in keywords


def first_token(line: str) -> str:
    match = _FIRST_TOKEN_RE.match(line)
    return match.group(1) if match else ""


def last_token(line: str) -> str:
    match = _LAST_TOKEN_RE.search(line)
    return match.group(1) if match else ""


def code_part(lines: Sequence[str], spans: SpanIndex, row: int) -> str:
    """Return ``lines[row]`` without its trailing comment."""

    if not 0 <= row < len(lines):
        return ""
    text = lines[row]
    start = spans.comment_start(row)
    return text if start is None else text[:start]


def is_continued(lines: Sequence[str], spans: SpanIndex, row: int) -> bool:
    return ends_with_backslash(code_part(lines, spans, row))


def statement_segments(lines: Sequence[str], spans: SpanIndex, row: int) -> List[str]:
    """Split the code part of ``lines[row]`` on statement separators.

    Separators inside string literals do not split.
    """

    text = code_part(lines, spans, row)
    segments: List[str] = []
    begin = 0
    for column, char in enumerate(text):
        if char == STATEMENT_SEPARATOR and not spans.is_comment_or_string(row, column):
            segments.append(text[begin:column])
            begin = column + 1
    segments.append(text[begin:])
    return segments


def classify_line(lines: Sequence[str], spans: SpanIndex, row: int) -> LineKind:
    if not 0 <= row < len(lines):
        return LineKind.BLANK
    text = lines[row]
    if not text.strip():
        return LineKind.BLANK
    if all(
        char.isspace() or spans.is_comment_or_string(row, column)
        for column, char in enumerate(text)
    ):
        return LineKind.COMMENT
    if is_label_line(text):
        return LineKind.LABEL
    return LineKind.CODE


__all__ = [
    "DECREASE_INDENT_BOL",
    "IDENTIFIER_PATTERN",
    "INCREASE_INDENT_BOL",
    "INCREASE_INDENT_EOL",
    "LABEL_RE",
    "LineKind",
    "STATEMENT_SEPARATOR",
    "classify_line",
    "code_part",
    "ends_with_backslash",
    "first_token",
    "is_continued",
    "is_label_line",
    "last_token",
    "matches_keyword_set",
    "statement_segments",
]
