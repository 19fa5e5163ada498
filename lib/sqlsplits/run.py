import copy
import re
import sys
import time

from .config import (
    config,
    parse_boolean,
    process_command_with_variable,
    set_color,
    set_field_separator,
    set_format,
    set_keep_empty,
    set_output,
    set_record_separator,
    set_set,
    set_standard_conforming_strings,
    set_strip_comments,
    set_syntax,
    set_timing,
    set_tuples_only,
)
from .exc import QuitException, UnterminatedError
from .output import get_pager, should_use_pager, write
from .split import scan, select_statements
from .time import write_time


def get_metacommand(command):

    if not command:
        return False

    command = command.strip()

    if command == "help":
        command = "\\??"

    if is_maybe_metacommand(command):
        match = re.search(r"^\s*\\([a-z?+!]+)(?:\s+(.+))?$", command)
        return match

    return False


def is_maybe_metacommand(command):
    if command.strip() == "help":
        return True

    return command.strip().startswith("\\")


def strip(v):
    if v is not None:
        v = v.strip()

    return v


def run_command(command):

    if is_maybe_metacommand(command):
        run_metacommand_line(command)
        return

    start_time = time.monotonic_ns()

    split_points, kind = scan(command, config.standard_conforming_strings)
    if kind is not None:
        raise UnterminatedError(kind, split_points)

    statements = select_statements(
        command,
        split_points,
        strip_comments=config.strip_comments,
        keep_empty=config.keep_empty,
    )

    total_time = time.monotonic_ns() - start_time

    try:
        write(statements, split_points)
    except BrokenPipeError:
        pass

    if config.timing:
        write_time(total_time)


def run_file(file):

    with open(file, "rt") as fp:
        command = fp.read()

    run_command(command)


def run_metacommand_line(line):
    match = get_metacommand(line)
    if not match:
        handle_invalid_command(line.strip())
        return

    metacommand, rest = match.groups()
    run_metacommand(metacommand, rest)


def run_metacommand(metacommand, rest):
    if metacommand == "i":
        if not strip(rest):
            sys.stderr.write("\\i: missing required argument\n")
            sys.stderr.flush()
            return
        run_file(strip(rest))
    elif metacommand == "o":
        set_output(strip(rest))
    elif metacommand == "f":
        if not strip(rest):
            sys.stdout.write('Field separator is "{}".\n'.format(config.field_separator))
            sys.stdout.flush()
        else:
            set_field_separator(strip(rest))
    elif metacommand == "?":
        metacommand_help()
    elif metacommand == "??":
        metacommand_help_main()
    elif metacommand == "q":
        raise QuitException()
    elif metacommand in ("timing", "t", "syntax", "color", "strip", "empty", "scs"):

        config_attr = {
            "timing": "timing",
            "t": "tuples_only",
            "syntax": "syntax",
            "color": "color",
            "strip": "strip_comments",
            "empty": "keep_empty",
            "scs": "standard_conforming_strings",
        }[metacommand]

        set_function = {
            "timing": set_timing,
            "t": set_tuples_only,
            "syntax": set_syntax,
            "color": set_color,
            "strip": set_strip_comments,
            "empty": set_keep_empty,
            "scs": set_standard_conforming_strings,
        }[metacommand]

        if not rest:
            value = not getattr(config, config_attr)
        else:
            value = parse_boolean(strip(rest))
            if value is None:
                handle_invalid_command_value(
                    metacommand,
                    strip(rest),
                    expected="Boolean expected",
                )
                set_function(getattr(config, config_attr))
                return

        set_function(value)
    elif metacommand == "set":
        metacommand_set(rest)
    elif metacommand == "unset":
        metacommand_unset(rest)
    elif metacommand == "pset":
        metacommand_pset(rest)
    else:
        handle_invalid_command("\\" + metacommand)


def handle_invalid_command(command):
    sys.stderr.write("invalid command ")
    sys.stderr.write(command)
    sys.stderr.write("\n")
    sys.stderr.write("Try \\? for help.\n")
    sys.stderr.flush()


def handle_invalid_command_value(command, value, expected=None):
    sys.stderr.write('unrecognized value "{}" for "\\{}"'.format(value, command))
    if expected:
        sys.stderr.write(": ")
        sys.stderr.write(expected)
    sys.stderr.write("\n")
    sys.stderr.flush()


def on_off(value):
    if value:
        return "on"
    return "off"


def metacommand_help():

    pager = None
    if should_use_pager():
        pager, output = get_pager()
    else:
        output = sys.stdout

    output.write("Splitting\n")
    output.write("  \\scs [on|off]          standard conforming strings, backslash is plain in '...' (currently {})\n".format(on_off(config.standard_conforming_strings)))
    output.write("  \\strip [on|off]        remove comments from statements (currently {})\n".format(on_off(config.strip_comments)))
    output.write("  \\empty [on|off]        keep statements that are empty or only comments (currently {})\n".format(on_off(config.keep_empty)))
    output.write("  \\syntax [on|off]       turn syntax highlighting on or off (currently {})\n".format(on_off(config.syntax)))
    output.write("  \\color [on|off]        turn color on or off (currently {})\n".format(on_off(config.color)))
    output.write("\n")

    output.write("Input/Output\n")
    output.write("  \\i FILE                split statements from file\n")
    output.write("  \\o [FILE]              send all output to file\n")
    output.write("\n")

    output.write("Formatting\n")
    output.write("  \\f [STRING]            show or set field separator for positions output\n")
    output.write("  \\pset [NAME [VALUE]]   set output option\n")
    output.write("                         fieldsep|fieldsep_zero|format|recordsep|recordsep_zero|tuples_only\n")
    output.write("  \\t [on|off]            show only rows (currently {})\n".format(on_off(config.tuples_only)))
    output.write("  \\timing [on|off]       toggle timing of splits (currently {})\n".format(on_off(config.timing)))
    output.write("\n")

    output.write("Variables\n")
    output.write("  \\set [NAME [VALUE]]    set internal variable, or list all if no parameters\n")
    output.write("  \\unset NAME            unset (delete) internal variable\n")
    output.flush()

    if pager is not None:
        output.close()
        pager.wait()


def metacommand_help_main():
    sys.stdout.write("You are using sqlsplits, the SQL statement splitter.\n")
    sys.stdout.write("Type:  \\? for help with sqlsplits commands\n")
    sys.stdout.write("       \\q to quit\n")
    sys.stdout.flush()


def metacommand_set(target):

    if not strip(target):
        values = copy.deepcopy(config.variables)
        values["prompt1"] = config.prompt1
        values["prompt2"] = config.prompt2
        values["histsize"] = config.history_size
        values["verbosity"] = config.verbosity
        names = sorted(list(values.keys()))

        for name in names:
            value = values[name]
            if value is None:
                continue

            if value is True:
                value = "on"
            elif value is False:
                value = "off"

            sys.stdout.write("{} = {!r}\n".format(name, value))
        sys.stdout.flush()
    else:
        variable, value = process_command_with_variable(None, strip(target))
        set_set(variable, value)


def metacommand_unset(rest):
    if strip(rest) in config.variables:
        del config.variables[strip(rest)]


def metacommand_pset(target):
    variable, value = process_command_with_variable(None, strip(target) or "")

    if variable == "format":
        set_format(value)
    elif variable == "tuples_only":
        if value is None:
            set_tuples_only(not config.tuples_only)
        else:
            set_tuples_only(bool(parse_boolean(value)))
    elif variable == "fieldsep":
        if value is None:
            sys.stdout.write('Field separator is "{}".\n'.format(config.field_separator))
            sys.stdout.flush()
        else:
            set_field_separator(value)
    elif variable == "fieldsep_zero":
        set_field_separator("\0")
    elif variable == "recordsep":
        if value is None:
            sys.stdout.write("Record separator is {!r}.\n".format(config.record_separator))
            sys.stdout.flush()
        else:
            set_record_separator(value)
    elif variable == "recordsep_zero":
        set_record_separator("\0")
    else:
        sys.stderr.write(
            "sqlsplits error: \\pset: unknown option: {}\n"
            .format(variable)
        )
        sys.stderr.flush()
