"""
Multiplication tables, as a small tour of argosy.

Usage
    python -m argosy [-ht] [-s=<first multiplicand>] [-e=<last multiplicand>] multiplier

Flags
    -h, --help          show this help and exit
    -t, --show-table    print "n X i = p" instead of bare products
    -s, --start-at      first multiplicand (default 1)
    -e, --end-at        last multiplicand (default 10)
"""
import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from argosy import *

console = Console()
errors = Console(stderr=True)


def usage(stderr=False, /):
    """
    render the help text.
    """
    table = Table.grid(padding=(0, 4))
    table.add_column(style="bold #00E5FF")
    table.add_column(style="#C8C8D0")
    table.add_row("multiplier", "the number whose multiplication table is displayed")
    table.add_row("-h, --help", "display this help text")
    table.add_row("-t, --show-table", "show the multiplier and multiplicands with each product")
    table.add_row("-s, --start-at", "the first multiplicand (default 1)")
    table.add_row("-e, --end-at", "the last multiplicand (default 10)")

    (errors if stderr else console).print(
        Text("multiplication tables, powered by argosy\n", style="bold"),
        Text("usage: python -m argosy [-ht] [-s=<first multiplicand>] [-e=<last multiplicand>] multiplier\n"),
        table,
    )


def run(arguments, /):
    """
    parse `arguments` and return the table rows (help returns None).

    raises
    - ParseExit on unknown flags or badly typed values.
    - NoRemainingArgumentsError / NoArgumentOfRequiredTypeError when the
      multiplier is missing.
    """
    help = Flag("-h", "--help")
    show = Flag("-t", "--show-table")
    start = Option("-s", "--start-at", type=ValueKind.INT, default=1)
    end = Option("-e", "--end-at", type=ValueKind.INT, default=10)

    handler = ArgHandler(arguments).attach_flags(help, show, start, end)
    if handler.is_triggered(help):
        return None

    number = handler.next(ValueKind.INT)
    rows = []
    for multiplicand in range(handler.value_of(start), handler.value_of(end) + 1):
        product = number * multiplicand
        rows.append(f"{number} X {multiplicand} = {product}" if handler.is_triggered(show) else str(product))
    return rows


def main(arguments=None, /):
    try:
        rows = run(sys.argv[1:] if arguments is None else arguments)
    except ParseExit as exit:
        errors.print(exit)
        usage(True)
        return 1
    except (NoRemainingArgumentsError, NoArgumentOfRequiredTypeError):
        errors.print("you must enter the number whose multiplication table is to be printed!\n")
        usage(True)
        return 1

    if rows is None:
        usage()
        return 0

    for row in rows:
        console.print(row, highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
