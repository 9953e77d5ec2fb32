import pytest

from mscl_engine.config import IndentConfig
from mscl_engine.syntax.indenter import (
    calculate_indent,
    explain_indent,
    indent_column,
    reindent,
)


def lines_of(text: str) -> list[str]:
    return text.split("\n")


def test_labels_are_flush_left_at_any_depth() -> None:
    lines = lines_of("while x\n    if y\n        retry:\n        z")

    assert calculate_indent(lines, 2) == 0
    decision = explain_indent(lines, 2)
    assert decision.label is True


def test_label_does_not_break_inheritance() -> None:
    lines = lines_of("while x\n    if y\nretry:\nz")

    assert calculate_indent(lines, 3) == 8


@pytest.mark.parametrize("opener", ["if a", "elseif a", "while a", "IF a", "10 while a"])
def test_line_after_block_opener_is_indented(opener: str) -> None:
    lines = ["    " + opener, "    x = 1"]

    assert calculate_indent(lines, 1) == 8


@pytest.mark.parametrize("closer", ["endif", "endwhile", "else", "elseif b", "ENDIF"])
def test_block_closer_is_dedented(closer: str) -> None:
    lines = ["if a", "        x = 1", closer]

    assert calculate_indent(lines, 2) == 4


def test_indent_never_goes_negative() -> None:
    lines = ["endif", "endwhile", "endif", "endif"]

    assert [calculate_indent(lines, row) for row in range(4)] == [0, 0, 0, 0]


def test_noise_between_code_lines_is_transparent() -> None:
    plain = ["if a", "x = 1"]
    noisy = ["if a", "", "   # comment", '"string only"', "here:", "x = 1"]

    assert calculate_indent(plain, 1) == calculate_indent(noisy, 5) == 4


def test_else_at_end_of_line_opens_block() -> None:
    lines = lines_of("if a\n    x\nelse # otherwise\ny")

    assert calculate_indent(lines, 2) == 0
    assert calculate_indent(lines, 3) == 4


def test_opener_and_closer_cancel() -> None:
    lines = ["loop:", "while true", "endwhile"]

    assert [calculate_indent(lines, row) for row in range(3)] == [0, 0, 0]
    decision = explain_indent(lines, 2)
    assert decision.increase and decision.decrease


def test_inline_closer_after_separator() -> None:
    lines = ["if a : x = 1 : endif", "y = 2"]

    assert calculate_indent(lines, 1) == 0


def test_separator_inside_string_is_ignored() -> None:
    lines = ['if a : print "x: endif"', "y = 2"]

    assert calculate_indent(lines, 1) == 4


def test_current_line_separators_are_not_examined() -> None:
    lines = ["if a", "x = 1 : endif"]

    assert calculate_indent(lines, 1) == 4


def test_continuation_indents_then_returns() -> None:
    lines = ["    x = 1 + \\", "        2", "    y = 3"]

    assert calculate_indent(lines, 1) == 8
    assert calculate_indent(lines, 2) == 4


def test_long_continuation_stays_at_one_level() -> None:
    lines = ["a = 1 + \\", "    2 + \\", "    3", "b = 4"]

    assert calculate_indent(lines, 1) == 4
    assert calculate_indent(lines, 2) == 4
    assert calculate_indent(lines, 3) == 0


def test_keyword_prefix_is_not_a_keyword() -> None:
    lines = ["ifx = 1", "whilex = 2", "endiff = 3"]

    assert calculate_indent(lines, 1) == 0
    assert calculate_indent(lines, 2) == 0


def test_offset_comes_from_config() -> None:
    lines = ["if a", "x"]

    assert calculate_indent(lines, 1, IndentConfig(indent_offset=2)) == 2
    assert calculate_indent(lines, 1, IndentConfig(indent_offset=8)) == 8


def test_degenerate_inputs_give_zero() -> None:
    assert calculate_indent([""], 0) == 0
    assert calculate_indent(["x"], 5) == 0
    assert calculate_indent([], 0) == 0
    assert calculate_indent(["if a"], 0) == 0


def test_first_line_closer_is_clamped() -> None:
    decision = explain_indent(["endif"], 0)

    assert decision.previous_row is None
    assert decision.column == 0


def test_indent_helpers() -> None:
    assert indent_column("   x") == 3
    assert indent_column("\tx") == 1
    assert indent_column("") == 0
    assert reindent("\t  x = 1", 4) == "    x = 1"
    assert reindent("x", 0) == "x"


def test_statement_after_continued_string_returns_to_base() -> None:
    lines = ['x = "abc \\', 'def"', "y = 1", "z = 2"]

    assert [calculate_indent(lines, row) for row in range(4)] == [0, 4, 0, 0]


def test_string_spanning_several_continued_lines() -> None:
    lines = ["while a", '    x = "one \\', "two \\", 'three"', "y = 1"]

    assert calculate_indent(lines, 4) == 4
