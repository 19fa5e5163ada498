import re


# the next character of interest: a statement separator, a quote opener or a
# comment opener. for the two-character openers the match ends on the second
# character, which is what the scanner dispatches on.
SPECIAL = re.compile(r"[;'\"$]|--|/\*")

DOUBLE_QUOTE = re.compile(r'"')
SINGLE_QUOTE = re.compile(r"'")
SINGLE_QUOTE_OR_BACKSLASH = re.compile(r"['\\]")

# adjacent string literals separated by a line break are one literal
WHITESPACE_THEN_SINGLE_QUOTE = re.compile(r"\s*\n\s*'")

COMMENT_OPEN_OR_CLOSE = re.compile(r"/\*|\*/")

# like an identifier, but no $ allowed inside the tag. any character from
# U+0080 up is legal in an identifier.
DOLLAR_TAG = re.compile(
    r"(?:[A-Za-z_\u0080-\U0010ffff][A-Za-z0-9_\u0080-\U0010ffff]*)?\$"
)


def index_after(data, pattern, start):
    """Return the index just past the next match of pattern at or after
    start, or -1 if there is none."""

    match = pattern.search(data, start)
    if match is None:
        return -1

    return match.end()


def match_after(data, pattern, start):
    """Like index_after, but the match must begin exactly at start."""

    match = pattern.match(data, start)
    if match is None:
        return -1

    return match.end()


def is_identifier_char(c):
    # $ is legal inside identifiers, so ab$$ is identifier text
    return c.isalnum() or c in ("_", "$") or c >= "\x80"


def is_whitespace(c):
    return c.isspace()
