from mscl_engine.syntax.lexer import Span, SpanIndex, scan_line, scan_spans


def test_scan_line_string_then_comment() -> None:
    spans, carried = scan_line('x = "a#b" # c')

    assert spans == (Span(4, 9, "string"), Span(10, 13, "comment"))
    assert carried is False


def test_scan_line_unterminated_string_ends_with_line() -> None:
    spans, carried = scan_line('print "oops')

    assert spans == (Span(6, 11, "string"),)
    assert carried is False


def test_scan_line_string_continued_by_backslash() -> None:
    spans, carried = scan_line('"abc \\')

    assert spans == (Span(0, 6, "string"),)
    assert carried is True


def test_scan_line_resumes_inside_string() -> None:
    spans, carried = scan_line('def" # tail', in_string=True)

    assert spans == (Span(0, 4, "string"), Span(5, 11, "comment"))
    assert carried is False


def test_span_index_queries() -> None:
    index = scan_spans(["x = 1 # one", 'y = "two"'])

    assert index.is_comment_or_string(0, 8) is True
    assert index.is_comment_or_string(0, 2) is False
    assert index.is_comment_or_string(1, 4) is True
    assert index.comment_start(0) == 6
    assert index.comment_start(1) is None


def test_span_index_unknown_positions_are_code() -> None:
    index = scan_spans(["# only comment"])

    assert index.is_comment_or_string(5, 0) is False
    assert index.is_comment_or_string(0, 99) is False
    assert index.is_comment_or_string(-1, 0) is False


def test_update_line_propagates_string_state() -> None:
    lines = ["x = 1", "y = 2", "z = 3"]
    index = SpanIndex.from_lines(lines)
    assert index.is_comment_or_string(1, 0) is False

    lines[0] = 'x = "open \\'
    index.update_line(lines, 0)

    assert index.is_comment_or_string(1, 0) is True
    assert index.is_comment_or_string(2, 0) is False

    lines[0] = "x = 1"
    index.update_line(lines, 0)

    assert index.is_comment_or_string(1, 0) is False


def test_delete_lines_keeps_index_aligned() -> None:
    lines = ["a", "# b", "c # d"]
    index = SpanIndex.from_lines(lines)

    del lines[1]
    index.delete_lines(lines, 1, 2)

    assert index.line_count == 2
    assert index.comment_start(1) == 2
    assert index.spans_for(0) == ()
    assert index.spans_for(1) == (Span(2, 5, "comment"),)


def test_insert_lines_rescans_new_rows_and_followers() -> None:
    lines = ["a", "b # c", "d"]
    index = SpanIndex.from_lines(lines)

    lines[1:1] = ['x = "open \\', "still"]
    index.insert_lines(lines, 1, 2)

    assert index.line_count == 5
    assert index.starts_in_string(2) is True
    assert index.spans_for(2) == (Span(0, 5, "string"),)
    assert index.starts_in_string(3) is False
    assert index.comment_start(3) == 2


def test_starts_in_string() -> None:
    index = scan_spans(['x = "a \\', 'b" + 1', 'y = "c"'])

    assert [index.starts_in_string(row) for row in range(3)] == [False, True, False]
    assert index.starts_in_string(7) is False
