from .match import (
    COMMENT_OPEN_OR_CLOSE,
    DOLLAR_TAG,
    DOUBLE_QUOTE,
    SINGLE_QUOTE,
    SINGLE_QUOTE_OR_BACKSLASH,
    WHITESPACE_THEN_SINGLE_QUOTE,
    index_after,
    is_identifier_char,
    match_after,
)


def allows_backslash(data, quote_idx, standard_conforming_strings):
    # identifiers never allow backslash escaping
    if data[quote_idx] != "'":
        return False

    if not standard_conforming_strings:
        return True

    return quote_idx > 0 and data[quote_idx - 1] in ("E", "e")


def find_quote_end(data, idx, quote, backslashing=False):
    """Scan a quoted string or identifier whose opening quote sits just
    before idx. Return the index just past the closing quote, or -1 if the
    quote is never closed."""

    if quote == "'":
        if backslashing:
            pattern = SINGLE_QUOTE_OR_BACKSLASH
        else:
            pattern = SINGLE_QUOTE
    else:
        pattern = DOUBLE_QUOTE

    while True:
        idx = index_after(data, pattern, idx)
        if idx == -1:
            return -1

        if data[idx - 1] == "\\":
            # the escaped character is taken as is, whatever it is
            if idx >= len(data):
                return -1
            idx += 1
            continue

        # doubled quote: '' or ""
        if data.startswith(quote, idx):
            idx += 1
            continue

        if quote != "'":
            return idx

        continued = match_after(data, WHITESPACE_THEN_SINGLE_QUOTE, idx)
        if continued == -1:
            return idx

        idx = continued


def read_dollar_tag(data, dollar_idx):
    """Return the opening tag (e.g. $$ or $body$) starting at dollar_idx, or
    None if the $ does not open a dollar-quoted string."""

    if dollar_idx > 0 and is_identifier_char(data[dollar_idx - 1]):
        return None

    tag_end = match_after(data, DOLLAR_TAG, dollar_idx + 1)
    if tag_end == -1:
        return None

    return data[dollar_idx:tag_end]


def find_dollar_quote_end(data, idx, tag):
    # a plain substring search; the tag is not a pattern
    close_idx = data.find(tag, idx)
    if close_idx == -1:
        return -1

    return close_idx + len(tag)


def find_line_comment_end(data, idx):
    newline_idx = data.find("\n", idx)
    if newline_idx == -1:
        return len(data)

    # the newline belongs to the comment
    return newline_idx + 1


def find_block_comment_end(data, idx):
    """Scan a block comment whose /* ends just before idx, honouring nested
    comments. Return the index just past the matching */, or -1."""

    depth = 1

    while True:
        idx = index_after(data, COMMENT_OPEN_OR_CLOSE, idx)
        if idx == -1:
            return -1

        if data[idx - 1] == "*":
            depth += 1
        else:
            depth -= 1

        if depth == 0:
            return idx
