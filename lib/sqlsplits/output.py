import csv
import shlex
import subprocess
import sys

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import sql

from .config import config
from .split import Semicolon, ends_in_line_comment


def should_use_pager():

    is_tty = sys.stdin.isatty()

    use_pager = (
        config.pager
        and not config.format_ == "csv"
        and is_tty
    )

    return use_pager


def get_pager():
    args = shlex.split(config.pager)
    pager = subprocess.Popen(args, stdin=subprocess.PIPE, text=True)
    output = pager.stdin

    return pager, output


def get_output():

    pager = None

    if config.output is not None:
        output = config.output
    else:
        if should_use_pager():
            pager, output = get_pager()
        else:
            output = sys.stdout

    return pager, output


def colorize(statement):
    if not (config.syntax and config.color):
        return statement

    return highlight(statement, sql.PostgresLexer(), TerminalFormatter()).rstrip("\n")


def write(statements, split_points=None):

    pager, output = get_output()

    try:
        if config.format_ == "csv":
            write_csv(output, statements)
        elif config.format_ == "positions":
            write_positions(output, split_points or [])
        elif config.format_ == "count":
            write_count(output, statements)
        else:
            write_statements(output, statements)

        output.flush()
    finally:
        if pager is not None:
            output.close()
            pager.wait()


def write_statements(output, statements):
    for statement in statements:
        output.write(colorize(statement))
        if ends_in_line_comment(statement, config.standard_conforming_strings):
            output.write("\n")
        output.write(";")
        output.write(config.record_separator)


def write_csv(output, statements):
    writer = csv.writer(output, lineterminator=config.record_separator)

    if not config.tuples_only:
        writer.writerow(["index", "statement"])

    for idx, statement in enumerate(statements, start=1):
        writer.writerow([idx, statement])


def write_positions(output, split_points):
    for point in split_points:
        if isinstance(point, Semicolon):
            fields = ["semicolon", str(point.position)]
        else:
            fields = ["comment", str(point.start), str(point.end)]

        output.write(config.field_separator.join(fields))
        output.write(config.record_separator)


def write_count(output, statements):
    if config.tuples_only:
        output.write("{}".format(len(statements)))
    else:
        output.write("({} statement".format(len(statements)))
        if len(statements) != 1:
            output.write("s")
        output.write(")")

    output.write(config.record_separator)
