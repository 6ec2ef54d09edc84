# Calculator.py
"""""
Calculator session on top of MathEngine / ScientificEngine.

Responsibilities
----------------
- Keep the display buffer the user types into (bounded length)
- Evaluate the display with x = 0 and chain the result back into it
- Keep a history ring (newest first) and the last answer for ANS
- Render results as text ("Error" for NaN, integers without a fraction)

The session owns one Arena; it is reset before every evaluation, so an AST
never outlives the '=' press that produced it.
"""""

import math
from collections import deque

import pyperclip

from . import config_manager as config_manager
from . import error as E
from .arena import Arena
from .MathEngine import Parser
from . import ScientificEngine

HISTORY_LINE = 127  # longest expression text kept per history entry

SYNTAX_ERROR = E.ERROR_MESSAGES["4000"]
EVALUATION_ERROR = E.ERROR_MESSAGES["4001"]


def format_result(value, precision=10):
    """Render a value for the display.

    NaN becomes "Error", integral values below 1e15 are printed without a
    fraction, everything else uses `precision` significant digits.
    """
    if math.isnan(value):
        return EVALUATION_ERROR
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:.{precision}g}"


def formula_text(value):
    """Render a value as formula text that parses back to that number.

    The display form ("1e+20") is not a formula: the parser has no exponent
    notation and would read it as 1*e + 20. Exponents become "*10^k", and
    negative or non-finite values are parenthesised so they stay one operand.
    """
    if math.isnan(value):
        return "(0/0)"
    if math.isinf(value):
        return "(10^400)" if value > 0 else "(-10^400)"

    if value == int(value) and abs(value) < 1e15:
        text = str(int(value))
    else:
        text = repr(value)
        if "e" in text:
            mantissa, exponent = text.split("e")
            text = f"{mantissa}*10^{int(exponent)}"

    if value < 0 or "*" in text:
        return f"({text})"
    return text


def calculate(problem, x=0.0, y=0.0, arena=None):
    """Parse and evaluate one formula.

    Raises error.ParseError for invalid input; domain errors come back as NaN.
    """
    if arena is None:
        arena = Arena(config_manager.load_int_setting("arena_capacity"))
    arena.reset()
    parser = Parser(problem, arena)
    node = parser.parse()
    if parser.has_error:
        raise parser.error
    return ScientificEngine.evaluate(node, x, y)


class HistoryEntry:
    def __init__(self, expr, result, value=None):
        self.expr = expr
        self.result = result
        self.value = value

    @property
    def is_error(self):
        return self.result in (SYNTAX_ERROR, EVALUATION_ERROR)

    def __repr__(self):
        return f"HistoryEntry({self.expr!r} = {self.result!r})"


class Calculator:
    """One calculator display with its history, ANS value and Arena."""

    def __init__(self, capacity=None, history_size=None, precision=None, max_length=None):
        if capacity is None:
            capacity = config_manager.load_int_setting("arena_capacity")
        if history_size is None:
            history_size = config_manager.load_int_setting("history_size", minimum=1)
        if precision is None:
            precision = config_manager.load_int_setting("display_precision", minimum=1)
        if max_length is None:
            max_length = config_manager.load_int_setting("display_max_length", minimum=1)

        self.arena = Arena(capacity)
        self.precision = precision
        self.max_length = max_length
        self.display = ""
        self._history = deque(maxlen=history_size)
        self.last_answer = "0"
        self.answer_value = 0.0
        self.last_error = None
        # Result text at the start of the display that stands for answer_value
        self._chained = ""

    @property
    def history(self):
        """History entries, newest first."""
        return list(self._history)

    # -----------------------------
    # Display editing
    # -----------------------------

    def insert(self, text):
        """Append text to the display; refused as a whole when it would not fit."""
        if len(self.display) + len(text) > self.max_length:
            return False
        self.display += text
        return True

    def insert_answer(self):
        return self.insert(formula_text(self.answer_value))

    def backspace(self):
        self.display = self.display[:-1]
        if len(self.display) < len(self._chained):
            self._chained = ""

    def clear(self):
        self.display = ""
        self._chained = ""

    def _source(self):
        """The display as the parser should read it."""
        if self._chained and self.display.startswith(self._chained):
            return formula_text(self.answer_value) + self.display[len(self._chained):]
        return self.display

    # -----------------------------
    # Evaluation
    # -----------------------------

    def evaluate(self):
        """Evaluate the display, record it in the history and chain the result.

        Returns the new HistoryEntry, or None when the display is empty.
        """
        if self.display == "":
            return None

        self.arena.reset()
        parser = Parser(self._source(), self.arena)
        node = parser.parse()
        expr = self.display[:HISTORY_LINE]

        if parser.has_error:
            entry = HistoryEntry(expr, SYNTAX_ERROR)
            self.last_error = parser.error
            self.clear()
        else:
            value = ScientificEngine.evaluate_x(node, 0.0)
            result = format_result(value, self.precision)
            entry = HistoryEntry(expr, result, value)
            self.last_error = None
            self.last_answer = result
            self.answer_value = value
            # Result goes back into the display for chaining
            self.display = result[:self.max_length]
            self._chained = self.display

        self._history.appendleft(entry)
        return entry

    def copy_answer(self):
        """Copy the last answer to the system clipboard."""
        try:
            pyperclip.copy(self.last_answer)
        except pyperclip.PyperclipException as e:
            raise E.CalculationError(f"Clipboard unavailable: {e}", code="4003")
        return self.last_answer
