import sys
from decimal import Decimal


def format_time(total_time):
    """Format a duration in nanoseconds as milliseconds, psql style."""
    return "{:.3f}".format(Decimal(total_time) / Decimal("1000000"))


def write_time(total_time, output=None):
    if output is None:
        output = sys.stdout

    output.write("Time: {} ms\n".format(format_time(total_time)))
    output.flush()
