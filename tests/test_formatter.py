import pytest

from mscl_engine.buffer import Buffer
from mscl_engine.config import IndentConfig
from mscl_engine.syntax.formatter import (
    format_buffer,
    format_lines,
    format_region,
    format_text,
    indent_line,
    indent_region,
    region_rows,
)

PROGRAM = """main:
declare $count
count = 0
while count < 10
if count = 5
print "half: way"
elseif count > 8
print "almost" # endif
else
count = count + 1
endif
endwhile
done:
end"""

FORMATTED = """main:
declare $count
count = 0
while count < 10
    if count = 5
        print "half: way"
    elseif count > 8
        print "almost" # endif
    else
        count = count + 1
    endif
endwhile
done:
end"""

SAMPLES = [
    PROGRAM,
    "if a : x = 1 : endif\ny",
    "   x = 1 + \\\n2 + \\\n 3\n      if b\nendif\n\n\n",
    "endif\nendwhile\n  else\n",
    'x = "open \\\nstill string"\n  y\n',
    "loop:\n   while true\n      # comment\n  endwhile   \n",
]


def test_format_program() -> None:
    assert format_text(PROGRAM) == FORMATTED


def test_already_formatted_input_is_unchanged() -> None:
    config = IndentConfig(indent_offset=2)

    assert format_text("if x\n  declare y\nendif", config) == "if x\n  declare y\nendif"


def test_format_with_default_offset() -> None:
    assert format_text("if x\ndeclare y\nendif") == "if x\n    declare y\nendif"


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize(
    "config",
    [
        IndentConfig(),
        IndentConfig(indent_offset=2, delete_trailing_whitespace=True),
        IndentConfig(delete_trailing_blank_lines=False),
    ],
)
def test_format_is_idempotent(text: str, config: IndentConfig) -> None:
    once = format_text(text, config)

    assert format_text(once, config) == once


def test_continuation_formatting() -> None:
    lines = ["a = 1 + \\", "2 + \\", "3", "b = 4"]

    assert format_lines(lines) == ["a = 1 + \\", "    2 + \\", "    3", "b = 4"]


def test_trailing_whitespace_kept_by_default() -> None:
    assert format_lines(["if x   ", "y  "]) == ["if x   ", "    y  "]


def test_trailing_whitespace_deleted_when_configured() -> None:
    config = IndentConfig(delete_trailing_whitespace=True)

    assert format_lines(["if x   ", "  ", "y  "], config) == ["if x", "", "    y"]


def test_trailing_blank_lines_removed_for_whole_buffer() -> None:
    assert format_lines(["x", "", "  ", ""]) == ["x", ""]
    assert format_lines(["", "  "]) == [""]
    assert format_lines(["x"]) == ["x"]


def test_trailing_blank_lines_kept_when_disabled() -> None:
    config = IndentConfig(delete_trailing_blank_lines=False)

    assert format_lines(["x", "", "  ", ""], config) == ["x", "", "  ", ""]


def test_region_formatting_only_touches_region() -> None:
    lines = ["if a", "x", "y", "", ""]

    assert format_lines(lines, start=1, end=2) == ["if a", "    x", "y", "", ""]


def test_region_rows_excludes_row_ending_at_column_zero() -> None:
    assert region_rows((0, 0), (2, 0), 5) == range(0, 2)
    assert region_rows((0, 2), (2, 1), 5) == range(0, 3)
    assert region_rows((2, 1), (0, 2), 5) == range(0, 3)
    assert region_rows((1, 0), (1, 0), 5) == range(1, 2)
    assert region_rows((3, 0), (9, 4), 5) == range(3, 5)


def test_format_buffer_applies_edits() -> None:
    buffer = Buffer.from_text("if x\ny\nendif\n\n\n")

    report = format_buffer(buffer)

    assert buffer.text == "if x\n    y\nendif\n"
    assert report.rows == (1,)
    assert report.removed == 2
    assert report.changed


def test_format_buffer_twice_reports_no_changes() -> None:
    buffer = Buffer.from_text(PROGRAM)
    format_buffer(buffer)

    report = format_buffer(buffer)

    assert buffer.text == FORMATTED
    assert not report.changed


def test_format_region_on_buffer() -> None:
    buffer = Buffer.from_text("if x\ny   \nz   \n")
    config = IndentConfig(delete_trailing_whitespace=True)

    report = format_region(buffer, (1, 0), (2, 0), config)

    assert buffer.text == "if x\n    y\nz   \n"
    assert report.rows == (1,)
    assert report.removed == 0


def test_indent_region_does_not_trim() -> None:
    buffer = Buffer.from_text("while x\ny   \nendwhile")
    config = IndentConfig(delete_trailing_whitespace=True)

    indent_region(buffer, (0, 0), (2, 8), config)

    assert buffer.text == "while x\n    y   \nendwhile"


def test_indent_line_indents_blank_lines() -> None:
    buffer = Buffer.from_text("if x\n\nendif")

    column = indent_line(buffer, 1)

    assert column == 4
    assert buffer.document.get_line(1) == "    "


def test_indent_line_outside_buffer_is_noop() -> None:
    buffer = Buffer.from_text("x")

    assert indent_line(buffer, 3) == 0
    assert buffer.text == "x"


def test_string_continued_onto_next_line() -> None:
    text = 'x = "abc \\\ndef"\ny = 1\nz = 2'

    assert format_text(text) == text


def test_string_continuation_inside_block() -> None:
    text = 'if a\nx = "abc \\\n  def"\ny = 1\nendif'

    assert format_text(text) == 'if a\n    x = "abc \\\n  def"\n    y = 1\nendif'


def test_indent_line_leaves_string_continuation_alone() -> None:
    buffer = Buffer.from_text('x = "abc \\\n   def"')

    assert indent_line(buffer, 1) == 3
    assert buffer.document.get_line(1) == "   def\""
