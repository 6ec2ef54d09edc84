# MathEngine.py
"""""
Formula parser for the calculator and the plot workspace.

Pipeline
--------
1) Parser: a tokenizer-free recursive descent reads the raw string directly and
   builds an AST (AstNodes) inside an Arena.
2) Evaluation is done separately by ScientificEngine.evaluate, as often as the
   caller needs (one call per pixel column, grid vertex or '=' press).

Grammar (loosest first)
-----------------------
    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary | IMPLICIT unary)*
    unary   := '-' unary | power
    power   := primary ('^' unary)?
    primary := NUMBER | '(' expr ')' | '|' expr '|' | IDENT ['(' expr ')']

Errors
------
Productions raise error.ParseError at the first failure. Parser.parse() is the
only place catching it: the first error is recorded and the parser is done.
"""""

import re
import string
from collections import namedtuple

from .arena import Arena
from .AstNodes import Number, Variable, Negate, BinaryOp, Call, NODE_SIZE
from . import error as E

# Debug toggle for optional prints in this module
debug = False

DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
IDENT_CHARS = LETTERS | DIGITS | {'_'}
WHITESPACE = (' ', '\t')

NUMBER_MAX = 63   # longest digit/dot run read as one literal
IDENT_MAX = 31    # longest identifier scanned in one go
ERROR_MAX = 127   # longest error_message kept

PI = 3.14159265358979323846
EULER = 2.71828182845904523536

# Longest prefix a C strtod would accept from a digit/dot run
_NUMBER_PREFIX = re.compile(r"\d+\.?\d*|\.\d+")

ParseResult = namedtuple("ParseResult", ["ast", "valid", "error", "generation"])


def number_value(literal):
    """Convert a scanned digit/dot run like strtod: '1.2.3' -> 1.2, '.' -> 0.0."""
    match = _NUMBER_PREFIX.match(literal)
    if match is None:
        return 0.0
    return float(match.group())


class Parser:
    """Recursive-descent parser bound to one input string and one Arena.

    The parser has two states: parsing, and failed. Once failed it stays
    failed and builds no further nodes.
    """

    def __init__(self, text, arena):
        self.text = text
        self.pos = 0
        self.arena = arena
        self.error = None
        self.has_error = False
        self._in_bars = False
        self._done = False
        self._root = None

    @property
    def error_message(self):
        if self.error is None:
            return ""
        return str(self.error)[:ERROR_MAX]

    @property
    def error_position(self):
        if self.error is None:
            return None
        return self.error.position

    # -----------------------------
    # Cursor helpers
    # -----------------------------

    def _current(self):
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ''

    def skip_ws(self):
        while self._current() in WHITESPACE:
            self.pos += 1

    def peek(self):
        self.skip_ws()
        return self._current()

    def advance(self):
        self.skip_ws()
        c = self._current()
        self.pos += 1
        return c

    def fail(self, code):
        raise E.ParseError(E.describe(code), code=code, position=self.pos, equation=self.text)

    def _reserve(self):
        if self.arena.alloc(NODE_SIZE) is None:
            self.fail("3200")

    def _node(self, node_type, *fields):
        self._reserve()
        return node_type(*fields)

    # -----------------------------
    # Entry point
    # -----------------------------

    def parse(self):
        """Parse the whole input; return the AST root or None on failure."""
        if self._done:
            return self._root
        self._done = True

        try:
            node = self.parse_expr()
            self.skip_ws()
            if self.pos < len(self.text):
                self.fail("3100")
        except E.ParseError as e:
            self._record(e)
            return None
        except RecursionError:
            self._record(E.ParseError(E.describe("3106"), code="3106",
                                      position=self.pos, equation=self.text))
            return None

        self._root = node
        if debug:
            print("Final AST:")
            print(node)
        return node

    def _record(self, e):
        # Only the first failure sticks
        if not self.has_error:
            self.error = e
            self.has_error = True
            if debug:
                print(f"Parse failed: {e}")

    # -----------------------------
    # Productions, loosest first
    # -----------------------------

    def parse_expr(self):
        """Addition and subtraction (left-associative)."""
        left = self.parse_term()
        while self.peek() in ('+', '-'):
            op = self.advance()
            right = self.parse_term()
            left = self._node(BinaryOp, op, left, right)
        return left

    def parse_term(self):
        """Multiplication, division, modulo and implicit multiplication."""
        left = self.parse_unary()
        while True:
            c = self.peek()
            if c in ('*', '/', '%'):
                op = self.advance()
                right = self.parse_unary()
                left = self._node(BinaryOp, op, left, right)

            # Implicit multiplication: 2x, 3sin(x), 2(x+1), (a)(b), 2|x|
            # Directly inside |...| a bar closes the group instead.
            elif c == '(' or c in LETTERS or (c == '|' and not self._in_bars):
                right = self.parse_unary()
                left = self._node(BinaryOp, '*', left, right)

            else:
                break
        return left

    def parse_unary(self):
        """Negation wraps the whole power: -x^2 == -(x^2)."""
        if self.peek() == '-':
            self.advance()
            operand = self.parse_unary()
            return self._node(Negate, operand)
        return self.parse_power()

    def parse_power(self):
        """Exponentiation, right-associative: 2^3^2 == 2^(3^2), 2^-1 == 0.5."""
        base = self.parse_primary()
        if self.peek() == '^':
            self.advance()
            exponent = self.parse_unary()
            return self._node(BinaryOp, '^', base, exponent)
        return base

    def parse_primary(self):
        """Numbers, (expr), |expr|, constants, variables and function calls."""
        self.skip_ws()
        c = self._current()

        if c in DIGITS or c == '.':
            return self._parse_number()

        if c == '(':
            self.pos += 1
            inner = self._parse_group(False)
            if self.peek() != ')':
                self.fail("3101")
            self.pos += 1
            return inner

        # Absolute value is sugar for abs(...)
        if c == '|':
            self.pos += 1
            inner = self._parse_group(True)
            self.skip_ws()
            if self._current() != '|':
                self.fail("3103")
            self.pos += 1
            return self._node(Call, "abs", inner)

        if c in LETTERS or c == '_':
            return self._parse_identifier()

        if c == '':
            self.fail("3105")
        self.fail("3100")

    def _parse_group(self, in_bars):
        outer = self._in_bars
        self._in_bars = in_bars
        try:
            return self.parse_expr()
        finally:
            self._in_bars = outer

    def _parse_number(self):
        self._reserve()
        start = self.pos
        while self._current() in DIGITS or self._current() == '.':
            if self.pos - start >= NUMBER_MAX:
                break
            self.pos += 1
        return Number(number_value(self.text[start:self.pos]))

    def _parse_identifier(self):
        start = self.pos
        while self._current() in IDENT_CHARS:
            if self.pos - start >= IDENT_MAX:
                break
            self.pos += 1
        name = self.text[start:self.pos]

        if name == "pi":
            return self._node(Number, PI)
        # 'e' is Euler's number unless it is called like a function
        if name == "e" and self.peek() != '(':
            return self._node(Number, EULER)

        if name in ('x', 'y'):
            return self._node(Variable, name)

        if self.peek() == '(':
            self.pos += 1
            arg = self._parse_group(False)
            if self.peek() != ')':
                self.fail("3102")
            self.pos += 1
            return self._node(Call, name, arg)

        self.fail("3104")


# -----------------------------
# Public entry point
# -----------------------------

def parse_formula(text, arena=None):
    """Parse text into a fresh AST generation.

    The arena is NOT reset here: callers sharing one Arena between several
    formulas reset it once and re-parse all of them.

    Returns:
        ParseResult(ast, valid, error, generation)
    """
    if arena is None:
        arena = Arena()
    parser = Parser(text, arena)
    node = parser.parse()
    return ParseResult(node, not parser.has_error, parser.error, arena.generation)
