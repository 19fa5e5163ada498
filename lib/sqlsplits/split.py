import logging
from collections import namedtuple

from .exc import ScannerAssumptionError, UnterminatedError
from .match import SPECIAL, index_after, is_whitespace
from .quote import (
    allows_backslash,
    find_block_comment_end,
    find_dollar_quote_end,
    find_line_comment_end,
    find_quote_end,
    read_dollar_tag,
)


logger = logging.getLogger(__name__)


QUOTED_STRING = "quoted string"
QUOTED_IDENTIFIER = "quoted identifier"
DOLLAR_QUOTED_STRING = "dollar-quoted string"
BLOCK_COMMENT = "/* comment"


Semicolon = namedtuple("Semicolon", ["position"])
Comment = namedtuple("Comment", ["start", "end"])

ScanResult = namedtuple("ScanResult", ["split_points", "unterminated"], defaults=[None])


def scan(data, standard_conforming_strings):
    """Find the semicolons that separate statements in data, plus the
    comments, in a single forward pass.

    Semicolons inside quoted strings, quoted identifiers, dollar-quoted
    strings and comments are skipped. Scanning stops at the first construct
    that is never closed; its kind is returned as ``unterminated`` alongside
    the split points found before it.
    """

    split_points = []

    idx = 0
    length = len(data)

    while idx < length:

        idx = index_after(data, SPECIAL, idx)
        if idx == -1:
            break

        special_idx = idx - 1
        c = data[special_idx]

        if c == ";":
            split_points.append(Semicolon(special_idx))

        elif c in ("'", '"'):
            backslashing = allows_backslash(data, special_idx, standard_conforming_strings)

            idx = find_quote_end(data, idx, c, backslashing=backslashing)
            if idx == -1:
                if c == "'":
                    return unterminated(split_points, QUOTED_STRING)
                return unterminated(split_points, QUOTED_IDENTIFIER)

        elif c == "$":
            tag = read_dollar_tag(data, special_idx)
            if tag is None:
                continue

            end_idx = find_dollar_quote_end(data, special_idx + len(tag), tag)
            if end_idx == -1:
                return unterminated(split_points, DOLLAR_QUOTED_STRING)

            idx = end_idx

        elif c == "-":
            comment_start = special_idx - 1
            idx = find_line_comment_end(data, idx)
            split_points.append(Comment(comment_start, idx))

        elif c == "*":
            comment_start = special_idx - 1
            idx = find_block_comment_end(data, idx)
            if idx == -1:
                return unterminated(split_points, BLOCK_COMMENT)

            split_points.append(Comment(comment_start, idx))

        else:
            raise ScannerAssumptionError(
                "unexpected character {!r} at {}".format(c, special_idx)
            )

    logger.debug("scanned %d characters, %d split points", length, len(split_points))

    return ScanResult(split_points)


def unterminated(split_points, kind):
    logger.debug("unterminated %s after %d split points", kind, len(split_points))
    return ScanResult(split_points, kind)


def split_statements(data, split_points, strip_comments):
    """Cut data into statements at each semicolon in split_points, plus an
    implicit one at the end of data. Every statement is trimmed, so some may
    be empty. With strip_comments, comment text is left out.
    """

    statements = []

    start = 0
    statement = ""

    for point in [*split_points, Semicolon(len(data))]:

        if isinstance(point, Semicolon):
            statement += data[start:point.position]
            statements.append(statement.strip())

            statement = ""
            start = point.position + 1

        elif strip_comments:
            statement += data[start:point.start]
            start = point.end

            # a comment can be the only thing separating two tokens
            space_before = not statement or is_whitespace(statement[-1])
            space_after = start >= len(data) or is_whitespace(data[start])
            if not space_before and not space_after:
                statement += " "

    return statements


def non_empty_statements(data, split_points):
    """Statements with their comments, leaving out any that hold nothing but
    comments and whitespace."""

    with_comments = split_statements(data, split_points, False)
    sans_comments = split_statements(data, split_points, True)

    return [
        statement
        for statement, stripped in zip(with_comments, sans_comments)
        if stripped
    ]


def select_statements(data, split_points, strip_comments=False, keep_empty=False):
    if keep_empty:
        return split_statements(data, split_points, strip_comments)

    if strip_comments:
        return [
            statement
            for statement in split_statements(data, split_points, True)
            if statement
        ]

    return non_empty_statements(data, split_points)


def split_command(data, standard_conforming_strings=True, strip_comments=False, keep_empty=False):
    """Split data into statements, raising UnterminatedError if anything is
    left open."""

    split_points, kind = scan(data, standard_conforming_strings)
    if kind is not None:
        raise UnterminatedError(kind, split_points)

    return select_statements(
        data,
        split_points,
        strip_comments=strip_comments,
        keep_empty=keep_empty,
    )


def pending_state(data, standard_conforming_strings=True):
    return scan(data, standard_conforming_strings).unterminated


def is_complete(data, standard_conforming_strings=True):
    """True when data may be submitted as is: nothing left open, something
    to run, and nothing but whitespace or comments after the last
    semicolon."""

    split_points, kind = scan(data, standard_conforming_strings)
    if kind is not None:
        return False

    statements = split_statements(data, split_points, True)
    if statements[-1]:
        return False

    return any(statements[:-1])


def ends_in_line_comment(statement, standard_conforming_strings=True):
    """True when a -- comment runs to the end of statement, so a ; written
    straight after it would be commented out."""

    split_points = scan(statement, standard_conforming_strings).split_points
    if not split_points:
        return False

    last = split_points[-1]

    return (
        isinstance(last, Comment)
        and last.end == len(statement)
        and statement.startswith("--", last.start)
    )
