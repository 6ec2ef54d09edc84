# Main.py
""""" Entry point for the FormulaEngine command line.

   Responsibilities:
   - Verify required files exist in development mode
   - Load configuration
   - Evaluate one formula, print a table of samples, or run the calculator loop

"""""
import re
import sys
import argparse
from pathlib import Path

import pyperclip

from FormulaEngine import config_manager as config_manager
from FormulaEngine import error as E
from FormulaEngine import MathEngine
from FormulaEngine import ScientificEngine
from FormulaEngine.arena import Arena
from FormulaEngine.Calculator import Calculator, calculate, format_result, formula_text, SYNTAX_ERROR


PROJECT_ROOT = Path(__file__).resolve().parent

# Lines starting with one of these continue from the previous answer
CHAIN_OPERATORS = ('+', '*', '/', '%', '^')

# Identifiers as the parser scans them; only a whole "ans" is the answer
IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    modules_dir = PROJECT_ROOT / "FormulaEngine"

    REQUIRED = [
        modules_dir / "arena.py",
        modules_dir / "AstNodes.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "Calculator.py",
        modules_dir / "Plotter.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print(E.ERROR_MESSAGES["1000"] + ", ".join(missing_files), file=sys.stderr)
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(
        description="FormulaEngine calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  main.py "2x^2 + sin(pi*x)" -x 0.5
  main.py "x^2 + y^2" -x 1 -y 2
  main.py "tan(x)" --table --x-min -3 --x-max 3 --steps 12
  main.py -- "-2^2"
  main.py                      (interactive calculator)
        """,
    )
    parser.add_argument("expression", nargs="?", help="formula to evaluate")
    parser.add_argument("-x", type=float, default=0.0, help="value of x (default 0)")
    parser.add_argument("-y", type=float, default=0.0, help="value of y (default 0)")
    parser.add_argument(
        "-T", "--table", action="store_true", help="print f(x) over a range of x instead"
    )
    parser.add_argument("--x-min", type=float, default=None, help="first x of the table")
    parser.add_argument("--x-max", type=float, default=None, help="last x of the table")
    parser.add_argument("--steps", type=int, default=None, help="number of table intervals")
    parser.add_argument(
        "-C", "--copy", action="store_true", help="copy the result to the clipboard"
    )
    parser.add_argument(
        "-D", "--debug", action="store_true", help="enable debug output"
    )
    return parser


def print_error(error):
    print(f"Error {error.code}: {error}", file=sys.stderr)


def copy_to_clipboard(text):
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        print(f"Error 4003: {E.ERROR_MESSAGES['4003']} ({e})", file=sys.stderr)
        return False
    return True


def run_expression(args, settings):
    try:
        value = calculate(args.expression, args.x, args.y)
    except E.MathError as e:
        print_error(e)
        return 1

    result = format_result(value, settings["display_precision"])
    print(result)
    if args.copy and not copy_to_clipboard(result):
        return 1
    return 0


def run_table(args, settings):
    x_min = settings["plot_x_min"] if args.x_min is None else args.x_min
    x_max = settings["plot_x_max"] if args.x_max is None else args.x_max
    steps = config_manager.load_int_setting("plot_steps", minimum=1) if args.steps is None else args.steps
    if steps < 1:
        print_error(E.ConfigurationError("Invalid setting: steps", code="5000"))
        return 1

    result = MathEngine.parse_formula(args.expression, Arena(config_manager.load_int_setting("arena_capacity")))
    if not result.valid:
        print_error(result.error)
        return 1

    for i in range(steps + 1):
        x = x_min + (x_max - x_min) * i / steps
        value = ScientificEngine.evaluate(result.ast, x, args.y)
        print(f"{x:>14.6g}  {format_result(value, settings['display_precision'])}")
    return 0


def replace_ans(command, value):
    answer = formula_text(value)
    if not answer.startswith("("):
        answer = f"({answer})"
    return IDENTIFIER.sub(lambda m: answer if m.group(0) == "ans" else m.group(0), command)


def run_repl():
    """Interactive calculator: one formula per line."""
    calculator = Calculator()
    print("Enter a formula (ans, history, copy, quit): ")

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        command = line.strip()
        if command == "":
            continue
        if command in ("quit", "exit"):
            break

        if command == "history":
            for entry in calculator.history:
                print(f"{entry.expr} = {entry.result}")
            continue

        if command == "copy":
            try:
                print(f"Copied: {calculator.copy_answer()}")
            except E.MathError as e:
                print_error(e)
            continue

        # ANS splices in the previous answer, an operator continues from it
        if not command.startswith(CHAIN_OPERATORS):
            calculator.clear()
        command = replace_ans(command, calculator.answer_value)
        if not calculator.insert(command):
            print("Formula too long.")
            continue

        entry = calculator.evaluate()
        if entry.result == SYNTAX_ERROR:
            print(f"{SYNTAX_ERROR}: {calculator.last_error}")
        else:
            print(f"= {entry.result}")
    return 0


def main(argv=None):

    """
    Load configuration and dispatch to one of the three modes.
    - Keep this thin: no business logic here.
    """

    args = build_parser().parse_args(argv)
    all_settings = config_manager.load_setting_value("all")

    if args.debug or all_settings["debug"]:
        MathEngine.debug = True
        print("Config loaded:", all_settings)

    try:
        if args.expression is None:
            return run_repl()
        if args.table:
            return run_table(args, all_settings)
        return run_expression(args, all_settings)
    except E.ConfigurationError as e:
        print_error(e)
        return 1


if __name__ == "__main__":
    check_files_exist()
    sys.exit(main())
