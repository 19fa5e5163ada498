import re

import pytest

from sqlsplits import split
from sqlsplits.exc import ScannerAssumptionError
from sqlsplits.split import (
    BLOCK_COMMENT,
    DOLLAR_QUOTED_STRING,
    QUOTED_IDENTIFIER,
    QUOTED_STRING,
    Comment,
    ScanResult,
    Semicolon,
    non_empty_statements,
    scan,
)


def test_semicolons_are_split_points():
    assert scan("select 1; select 2;", True) == ScanResult([Semicolon(8), Semicolon(18)])


def test_nothing_special():
    result = scan("select 1", True)
    assert result.split_points == []
    assert result.unterminated is None


def test_empty_statements():
    sql = ";; ;;"
    assert scan(sql, True).split_points == [Semicolon(0), Semicolon(1), Semicolon(3), Semicolon(4)]
    assert non_empty_statements(sql, scan(sql, True).split_points) == []


def test_doubled_quotes_do_not_end_identifier():
    assert scan('select "we ""x"""', True) == ScanResult([])


def test_doubled_quotes_do_not_end_string():
    assert scan("select 'we ''x'''", True) == ScanResult([])


def test_semicolons_in_quotes_are_skipped():
    sql = "select 'we ''love; quotes'; select \"a;b\""
    result = scan(sql, True)
    assert result == ScanResult([Semicolon(26)])
    assert non_empty_statements(sql, result.split_points) == [
        "select 'we ''love; quotes'",
        'select "a;b"',
    ]


def test_backslash_is_plain_with_standard_conforming_strings():
    assert scan("select 'a\\'b'", True).unterminated == QUOTED_STRING


def test_backslash_escapes_in_escape_string():
    assert scan("select e'a\\'b'", True) == ScanResult([])
    assert scan("select E'a\\'b'; select 1", True) == ScanResult([Semicolon(14)])


def test_backslash_escapes_without_standard_conforming_strings():
    assert scan("select 'a\\'b'", False) == ScanResult([])


def test_backslash_escapes_any_character():
    assert scan("select e'a\\\\'; select 1", True) == ScanResult([Semicolon(13)])


def test_trailing_backslash_leaves_string_open():
    assert scan("select 'abc\\", False).unterminated == QUOTED_STRING


def test_backslash_never_escapes_identifier():
    result = scan('select "we \\"love; quotes"; select 1;', False)
    assert result.unterminated == QUOTED_IDENTIFIER


def test_run_on_string_across_newline():
    sql = "select e'x'\n 'we \\'love quotes'; select 1"
    result = scan(sql, True)
    assert result.unterminated is None
    assert non_empty_statements(sql, result.split_points) == [
        "select e'x'\n 'we \\'love quotes'",
        "select 1",
    ]


def test_run_on_string_with_doubled_quote():
    sql = "select 'a'\n'b''c;'; select 2"
    result = scan(sql, True)
    assert result == ScanResult([Semicolon(18)])
    assert non_empty_statements(sql, result.split_points) == ["select 'a'\n'b''c;'", "select 2"]


def test_run_on_ordinary_string_keeps_backslash_plain():
    assert scan("select 'x'\n 'we \\'love quotes'; select 1", True).unterminated == QUOTED_STRING


def test_adjacent_strings_without_newline_are_separate():
    assert scan("select e'x' 'we \\'love quotes';select 1", True).unterminated == QUOTED_STRING


def test_dollar_quoted_string():
    sql = "select $tag$a;b$tag$;"
    result = scan(sql, True)
    assert result == ScanResult([Semicolon(20)])
    assert non_empty_statements(sql, result.split_points) == ["select $tag$a;b$tag$"]


def test_empty_dollar_tag():
    sql = "select $$ab\"c;d'ef$$; select $X_Y$\n/* \n--\n */$X_Y$;"
    result = scan(sql, True)
    assert result.unterminated is None
    assert len(non_empty_statements(sql, result.split_points)) == 2


def test_unicode_dollar_tag():
    assert scan("select $ö$a;b$ö$;", True) == ScanResult([Semicolon(16)])


@pytest.mark.parametrize("sql", [
    "$$",
    "$$abc",
    "$tag$",
    "$tag$abc",
    "$$abc$",
    "$tag$abc$tag",
    "$tag$abc$TAG$",
    "select $tag$a;b$tag",
])
def test_unterminated_dollar_quote(sql):
    assert scan(sql, True).unterminated == DOLLAR_QUOTED_STRING


def test_dollar_after_identifier_is_identifier_text():
    assert scan("abc$$def$$", True) == ScanResult([])
    assert scan("select é$$x", True) == ScanResult([])


def test_dollar_after_digit_or_underscore_is_identifier_text():
    assert scan("select 1$a$x;", True) == ScanResult([Semicolon(12)])
    assert scan("select _$a$x;", True) == ScanResult([Semicolon(12)])


def test_dollar_after_high_character_is_identifier_text():
    sql = "select 😀$aaa$😀; select 1;"
    result = scan(sql, True)
    assert result == ScanResult([Semicolon(14), Semicolon(24)])
    assert non_empty_statements(sql, result.split_points) == [
        "select 😀$aaa$😀",
        "select 1",
    ]

    assert scan("select 😀$end$x;", True) == ScanResult([Semicolon(14)])


def test_dollar_tag_with_high_character():
    sql = "select $😀$;end;$😀$;"
    result = scan(sql, True)
    assert result == ScanResult([Semicolon(18)])
    assert non_empty_statements(sql, result.split_points) == ["select $😀$;end;$😀$"]

    assert scan("select $😀$end$id$end$;", True).unterminated == DOLLAR_QUOTED_STRING


def test_invalid_dollar_tag_is_plain_text():
    assert scan("select $11$abc$11$;", True) == ScanResult([Semicolon(18)])
    assert scan("select $1; select 2", True) == ScanResult([Semicolon(9)])


def test_nested_block_comment():
    assert scan("/* a /* b */ c */", True) == ScanResult([Comment(0, 17)])


def test_block_comment_left_open():
    result = scan("/* a */ b /* c", True)
    assert result.split_points == [Comment(0, 7)]
    assert result.unterminated == BLOCK_COMMENT


def test_nested_block_comment_left_open():
    assert scan("insert /*/* x */ y", True).unterminated == BLOCK_COMMENT


def test_line_comment_at_end_of_text():
    sql = "select 1 -- done"
    assert scan(sql, True) == ScanResult([Comment(9, len(sql))])


def test_line_comment_includes_newline():
    assert scan("select 1 -- x\nselect 2", True) == ScanResult([Comment(9, 14)])


def test_line_comment_hides_semicolon():
    sql = "-- abc; def"
    assert scan(sql, True) == ScanResult([Comment(0, 11)])
    assert non_empty_statements(sql, scan(sql, True).split_points) == []


def test_quote_chars_in_comments_are_ignored():
    sql = "select 1; /* it's */ select 2; -- \"\nselect 3"
    result = scan(sql, True)
    assert result.unterminated is None
    assert result.split_points == [
        Semicolon(8),
        Comment(10, 20),
        Semicolon(29),
        Comment(31, 36),
    ]


@pytest.mark.parametrize("sql,kind", [
    ('"', QUOTED_IDENTIFIER),
    ("'", QUOTED_STRING),
    ("/*", BLOCK_COMMENT),
    ('select "x', QUOTED_IDENTIFIER),
    ("update 'x", QUOTED_STRING),
    ("delete E' ", QUOTED_STRING),
    ("delete U&'hello\" ", QUOTED_STRING),
    ("insert /*x", BLOCK_COMMENT),
])
def test_unterminated(sql, kind):
    assert scan(sql, True).unterminated == kind


def test_split_points_before_unterminated_are_kept():
    result = scan("select 1; select 'oops", True)
    assert result == ScanResult([Semicolon(8)], QUOTED_STRING)


def test_everything_at_once():
    sql = "/**/select'\"--;/**/;--\"'/**/--"
    result = scan(sql, True)
    assert result == ScanResult([Comment(0, 4), Comment(24, 28), Comment(28, 30)])


def test_positions_increase():
    sql = "select 1; -- a\n/* b */ select $$;$$; select ';'--c"
    points = scan(sql, True).split_points

    positions = []
    for point in points:
        if isinstance(point, Semicolon):
            positions.append(point.position)
        else:
            positions.extend([point.start, point.end - 1])

    assert positions == sorted(set(positions))


def test_unknown_marker_is_an_assumption_error(monkeypatch):
    monkeypatch.setattr(split, "SPECIAL", re.compile("x"))

    with pytest.raises(ScannerAssumptionError):
        scan("select x", True)
