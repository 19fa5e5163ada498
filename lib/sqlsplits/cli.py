import argparse
import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.application.current import get_app
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.output.color_depth import ColorDepth

from .config import close_output, config
from .exc import QuitException, UnterminatedError
from .history import get_history
from .lexer import lexer
from .prompt import render_prompt
from .run import is_maybe_metacommand, run_command, run_file
from .split import is_complete
from .version import __version__


bindings = KeyBindings()


@bindings.add(Keys.Enter)
def _(event):

    text = event.current_buffer.text

    if is_maybe_metacommand(text):
        event.current_buffer.validate_and_handle()
        return

    if not is_complete(text, config.standard_conforming_strings):
        event.current_buffer.insert_text("\n")
        return

    event.current_buffer.validate_and_handle()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sqlsplits",
        description="Split SQL text into statements at the semicolons that separate them.",
    )

    parser.add_argument("-c", "--command", help="split only this text, then exit")
    parser.add_argument("-f", "--file", help="split statements from file, then exit")
    parser.add_argument("-o", "--output", help="send output to file")
    parser.add_argument("-q", "--quiet", action="store_true", help="run quietly (no messages, only output)")
    parser.add_argument("-X", "--no-sqlsplitsrc", action="store_true", help="do not read startup file (~/.sqlsplitsrc)")
    parser.add_argument("-A", "--no-align", action="store_true", help="write split positions instead of statements")
    parser.add_argument("--csv", action="store_true", help="CSV output mode")
    parser.add_argument("--count", action="store_true", help="only write the number of statements")
    parser.add_argument("-t", "--tuples-only", action="store_true", help="print rows only")
    parser.add_argument("-F", "--field-separator", help="field separator for positions output (default: \"|\")")
    parser.add_argument("-R", "--record-separator", help="record separator (default: newline)")
    parser.add_argument("-z", "--field-separator-zero", action="store_true", help="set field separator to zero byte")
    parser.add_argument("-0", "--record-separator-zero", action="store_true", help="set record separator to zero byte")
    parser.add_argument("--strip-comments", action="store_true", help="remove comments from statements")
    parser.add_argument("--keep-empty", action="store_true", help="keep statements that are empty or only comments")
    parser.add_argument(
        "--no-standard-conforming-strings",
        action="store_true",
        help="treat backslash as an escape in ordinary '...' strings",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debugging information to stderr")
    parser.add_argument("--set", action="append", metavar="NAME=VALUE", help="set variable NAME to VALUE")
    parser.add_argument("-V", "--version", action="store_true", help="output version information, then exit")

    return parser


def configure_logging(verbose):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s: %(levelname)s: %(message)s",
        )
    else:
        for name in ("prompt_toolkit", "pygments"):
            logging.getLogger(name).setLevel(logging.ERROR)


def apply_args(args):

    if args.quiet:
        config.quiet = args.quiet

    if args.verbose:
        config.verbosity = "verbose"

    if not args.no_sqlsplitsrc:
        config.load()

    if args.tuples_only:
        config.tuples_only = args.tuples_only

    if args.csv:
        config.format_ = "csv"

    if args.count:
        config.format_ = "count"

    if args.no_align:
        config.format_ = "positions"

    if args.strip_comments:
        config.strip_comments = True

    if args.keep_empty:
        config.keep_empty = True

    if args.no_standard_conforming_strings:
        config.standard_conforming_strings = False

    if args.field_separator:
        config.field_separator = args.field_separator

    if args.field_separator_zero:
        config.field_separator = "\0"

    if args.record_separator:
        config.record_separator = args.record_separator

    if args.record_separator_zero:
        config.record_separator = "\0"

    if args.output:
        config.output = open(args.output, "wt")

    if args.set:
        for entry in args.set:
            name, value = entry.split("=", 1)
            config.variables[name] = value


def write_error(message):
    sys.stderr.write("sqlsplits: error: {}\n".format(message))
    sys.stderr.flush()


def run(args):

    if args.version:
        sys.stdout.write("sqlsplits {}\n".format(__version__))
        sys.exit(0)

    configure_logging(args.verbose)
    apply_args(args)

    command = None

    if not sys.stdin.isatty():
        command = sys.stdin.read()

    if not command:
        command = args.command

    if command or args.file:
        try:
            if command:
                run_command(command)
            else:
                run_file(args.file)
        except UnterminatedError as exc:
            write_error(str(exc))
            sys.exit(1)
        except OSError as exc:
            write_error("{}: {}".format(exc.filename, exc.strerror))
            sys.exit(1)
        except QuitException:
            pass

        clean_exit()

    if not config.quiet:
        sys.stdout.write("sqlsplits ({})\n".format(__version__))
        sys.stdout.write('Type "help" for help.\n\n')
        sys.stdout.flush()

    lexer.set_selected(config.syntax)

    prompt_args = {
        "vi_mode": True,
        "enable_open_in_editor": True,
        "tempfile_suffix": ".sql",
        "key_bindings": bindings,
        "lexer": lexer,
    }

    if config.history_size:
        prompt_args["history"] = get_history()

    session = PromptSession(**prompt_args)

    def color_depth():
        if config.color:
            return ColorDepth.from_env()
        else:
            return ColorDepth.DEPTH_1_BIT
    session.app._color_depth = color_depth

    def prompt_continuation(width, line_number, is_soft_wrap):
        return render_prompt(config.prompt2, get_app().current_buffer.text)

    while True:
        try:
            text = session.prompt(
                render_prompt(config.prompt1),
                multiline=True,
                prompt_continuation=prompt_continuation,
            )

            if text.strip():
                run_command(text)

        except UnterminatedError as exc:
            sys.stdout.write("ERROR:  {}\n".format(exc))
            sys.stdout.flush()
        except OSError as exc:
            sys.stdout.write("{}: {}\n".format(exc.filename, exc.strerror))
            sys.stdout.flush()
        except EOFError:
            if not config.quiet:
                sys.stdout.write("\\q\n")
            clean_exit()
        except QuitException:
            clean_exit()
        except KeyboardInterrupt:
            pass


def clean_exit():
    close_output()
    sys.exit(0)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    run(args)
