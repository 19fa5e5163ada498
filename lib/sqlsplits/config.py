import os
import re
import sys


class Configuration:

    def __init__(
        self,
        output=None,
        standard_conforming_strings=True,
        strip_comments=False,
        keep_empty=False,
        pager=None,
        syntax=False,
        color=False,
        history_size=500,
        verbosity=None,
        timing=False,
        prompt1="%/%R# ",
        prompt2="%/%R# ",
        quiet=False,
        tuples_only=False,
        format_="statements",
        field_separator="|",
        record_separator="\n",
        variables=None,
    ):

        self.output = output

        self.standard_conforming_strings = standard_conforming_strings
        self.strip_comments = strip_comments
        self.keep_empty = keep_empty

        if pager is None:
            pager = os.environ.get("PAGER")

        self.pager = pager
        self.syntax = syntax
        self.color = color
        self.history_size = history_size
        self.verbosity = verbosity
        self.timing = timing
        self.prompt1 = prompt1
        self.prompt2 = prompt2
        self.quiet = quiet
        self.tuples_only = tuples_only
        self.format_ = format_
        self.field_separator = field_separator
        self.record_separator = record_separator

        if variables is None:
            variables = {}

        self.variables = variables

    def load(self, filename=None):

        if filename is None:
            filename = os.path.expanduser("~/.sqlsplitsrc")

        if not os.path.exists(filename):
            return

        with open(filename, "rt") as fp:
            for line_number, line in enumerate(fp, start=1):
                line = line.strip()
                if line:
                    process_config_line(filename, line_number, line)


def trim_quotes(value):
    if isinstance(value, str):
        return value.strip("'")
    else:
        return value


def process_command_with_variable(command, line, default=None):
    if command is not None:
        remainder = line[len(command):].strip()
    else:
        remainder = line

    res = re.split(r"\s+", remainder, maxsplit=1)
    variable = res[0]
    if len(res) > 1:
        value = res[1]
    else:
        value = default

    return variable, trim_quotes(value)


def parse_boolean(value):
    if value in (True, "on", "true"):
        return True
    elif value in (False, "off", "false"):
        return False

    return None


def set_set(variable, value):
    if variable.lower() == "prompt1":
        config.prompt1 = value
    elif variable.lower() == "prompt2":
        config.prompt2 = value
    elif variable.lower() == "histsize":
        from .run import handle_invalid_command_value

        try:
            config.history_size = int(value)
        except (TypeError, ValueError):
            handle_invalid_command_value("set", value, expected="Integer expected")
    elif variable.lower() == "verbosity":
        config.verbosity = value
    else:
        config.variables[variable] = value


def write_toggle(name, value):
    if value:
        display_value = "on"
    else:
        display_value = "off"

    if not config.quiet:
        sys.stdout.write("{} is {}.\n".format(name, display_value))
        sys.stdout.flush()


def close_output():
    # only files opened by \o or -o are ever stored here
    if config.output is not None:
        config.output.close()

    config.output = None


def set_output(value):
    if not value:
        close_output()
        return

    value = os.path.expanduser(value)

    try:
        new_output = open(value, "wt")
    except OSError:
        sys.stdout.write("{}: No such file or directory\n".format(value))
        sys.stdout.flush()
        return

    close_output()

    config.output = new_output


def set_format(value):
    if value not in ("statements", "csv", "positions", "count"):
        sys.stderr.write("\\pset: allowed formats are count, csv, positions, statements\n")
        sys.stderr.flush()
        return

    config.format_ = value

    if not config.quiet:
        sys.stdout.write('Output format is "{}".\n'.format(value))
        sys.stdout.flush()


def set_timing(value):
    config.timing = value
    write_toggle("Timing", value)


def set_tuples_only(value):
    config.tuples_only = value
    write_toggle("Tuples only", value)


def set_strip_comments(value):
    config.strip_comments = value
    write_toggle("Strip comments", value)


def set_keep_empty(value):
    config.keep_empty = value
    write_toggle("Keep empty", value)


def set_standard_conforming_strings(value):
    config.standard_conforming_strings = value
    write_toggle("Standard conforming strings", value)


def set_field_separator(value):
    config.field_separator = value

    if not config.quiet:
        sys.stdout.write('Field separator is "{}".\n'.format(value))
        sys.stdout.flush()


def set_record_separator(value):
    config.record_separator = value

    if not config.quiet:
        sys.stdout.write('Record separator is "{}".\n'.format(value))
        sys.stdout.flush()


def set_syntax(value):
    from .lexer import lexer

    config.syntax = value
    lexer.set_selected(value)
    write_toggle("Syntax", value)


def set_color(value):
    config.color = value
    write_toggle("Color", value)


def process_config_line(filename, line_number, line):
    from .run import run_metacommand_line

    if line.startswith("--"):
        return

    if line.startswith("\\"):
        run_metacommand_line(line)
        return

    match = re.search(
        r"^set\s+standard_conforming_strings\s*(?:to|=)\s*'?(\w+)'?\s*;?$",
        line,
        flags=re.I,
    )
    if match:
        value = parse_boolean(match.groups()[0].lower())
        if value is not None:
            set_standard_conforming_strings(value)
            return

    sys.stderr.write(
        "{}:{}: unrecognized configuration line: {}\n"
        .format(filename, line_number, line)
    )
    sys.stderr.flush()


config = Configuration()
