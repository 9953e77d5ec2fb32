"""MSCL lexical classification, indentation and definition lookup."""

from .classifier import (
    DECREASE_INDENT_BOL,
    INCREASE_INDENT_BOL,
    INCREASE_INDENT_EOL,
    LineKind,
    classify_line,
    ends_with_backslash,
    first_token,
    is_label_line,
    matches_keyword_set,
)
from .formatter import (
    FormatReport,
    LineFormatter,
    format_buffer,
    format_lines,
    format_region,
    format_text,
    indent_line,
    indent_region,
)
from .indenter import IndentDecision, calculate_indent, explain_indent
from .lexer import Span, SpanIndex, scan_line, scan_spans
from .locator import (
    Definition,
    find_definitions,
    find_label,
    find_variable_declarations,
    identifier_at_position,
    identifier_bounds,
)
from .scanner import previous_code_line

__all__ = [
    "DECREASE_INDENT_BOL",
    "INCREASE_INDENT_BOL",
    "INCREASE_INDENT_EOL",
    "LineKind",
    "classify_line",
    "ends_with_backslash",
    "first_token",
    "is_label_line",
    "matches_keyword_set",
    "Span",
    "SpanIndex",
    "scan_line",
    "scan_spans",
    "previous_code_line",
    "IndentDecision",
    "calculate_indent",
    "explain_indent",
    "FormatReport",
    "LineFormatter",
    "format_buffer",
    "format_lines",
    "format_region",
    "format_text",
    "indent_line",
    "indent_region",
    "Definition",
    "find_definitions",
    "find_label",
    "find_variable_declarations",
    "identifier_at_position",
    "identifier_bounds",
]
