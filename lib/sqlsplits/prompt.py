import re
import subprocess

from .config import config
from .split import (
    BLOCK_COMMENT,
    DOLLAR_QUOTED_STRING,
    QUOTED_IDENTIFIER,
    QUOTED_STRING,
    pending_state,
)


PENDING_MARKERS = {
    QUOTED_STRING: "'",
    QUOTED_IDENTIFIER: '"',
    DOLLAR_QUOTED_STRING: "$",
    BLOCK_COMMENT: "*",
}


def get_state_marker(text):
    """The psql %R marker for a partially typed buffer: = when idle, - when
    a statement is in progress, else the kind of construct left open."""

    if not text.strip():
        return "="

    kind = pending_state(text, config.standard_conforming_strings)
    if kind is None:
        return "-"

    return PENDING_MARKERS[kind]


def render_prompt(prompt_string, text=""):

    def replacer(match):
        if match.groups()[0] == "%/":
            return "sqlsplits"
        elif match.groups()[0] == "%R":
            return get_state_marker(text)
        elif match.groups()[0] == "%%":
            return "%"
        elif match.groups()[0].startswith("%`"):
            command = match.groups()[0]
            command = command[2:-1]

            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
            )

            value = result.stdout.decode("utf-8").strip()

            return value

    prompt = re.sub("(%([/R%])|%(`.+?`))", replacer, prompt_string)

    return prompt
