# ScientificEngine
"""""
Tree-walking evaluator for the ASTs built by MathEngine.

evaluate(node, x, y) never raises: every domain error (division by zero,
log of a non-positive number, asin outside [-1, 1], unknown function, ...)
comes back as NaN, and an overflow comes back as a signed infinity, the same
values C's <math.h> would hand a plotter that lifts its pen on them.
"""""

import math

from .AstNodes import Number, Variable, Negate, BinaryOp, Call

NAN = float("nan")
INF = float("inf")


def _sign(a):
    # NaN compares false both ways and lands on 0
    if a > 0.0:
        return 1.0
    elif a < 0.0:
        return -1.0
    return 0.0


def _cot(a):
    s = math.sin(a)
    return math.cos(a) / s if s != 0.0 else NAN


def _sec(a):
    c = math.cos(a)
    return 1.0 / c if c != 0.0 else NAN


def _csc(a):
    s = math.sin(a)
    return 1.0 / s if s != 0.0 else NAN


def _floor(a):
    if not math.isfinite(a):
        return a
    return float(math.floor(a))


def _ceil(a):
    if not math.isfinite(a):
        return a
    return float(math.ceil(a))


def _round(a):
    """Round half away from zero, keeping the sign of zero like C round()."""
    if not math.isfinite(a):
        return a
    t = math.trunc(a)
    if abs(a - t) >= 0.5:
        t += 1 if a > 0 else -1
    return math.copysign(float(t), a)


# Exact-name dispatch table for Call nodes
FUNCTIONS = {
    # Trigonometric
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "cot": _cot,
    "sec": _sec,
    "csc": _csc,
    # Hyperbolic
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "asinh": math.asinh,
    "acosh": math.acosh,
    "atanh": math.atanh,
    # Powers / roots
    "sqrt": math.sqrt,
    "cbrt": math.cbrt,
    # Logarithms
    "log": math.log10,
    "ln": math.log,
    "log2": math.log2,
    "exp": math.exp,
    # Rounding / misc
    "abs": math.fabs,
    "floor": _floor,
    "ceil": _ceil,
    "round": _round,
    "sign": _sign,
    "sgn": _sign,
}

# Functions whose overflow keeps the sign of the argument
_ODD_OVERFLOW = ("sinh",)


def is_known_function(name):
    return name in FUNCTIONS


def apply_function(name, a):
    """Apply a named function to a, NaN for unknown names and domain errors."""
    func = FUNCTIONS.get(name)
    if func is None:
        return NAN
    if math.isnan(a):
        return _sign(a) if func is _sign else NAN
    try:
        return float(func(a))
    except ValueError:
        return NAN
    except OverflowError:
        if name in _ODD_OVERFLOW:
            return math.copysign(INF, a)
        return INF


def _is_odd_integer(value):
    value = float(value)
    return value.is_integer() and value % 2 == 1


def power(base, exponent):
    """C pow(): NaN for a negative base with a fractional exponent."""
    try:
        return math.pow(base, exponent)
    except ValueError:
        # pow(0, negative) is a pole, every other ValueError is a domain error
        if base == 0.0 and exponent < 0.0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -INF
            return INF
        return NAN
    except OverflowError:
        if base < 0.0 and _is_odd_integer(exponent):
            return -INF
        return INF


def binary(op, l, r):
    if op == '+':
        return l + r
    elif op == '-':
        return l - r
    elif op == '*':
        return l * r
    elif op == '/':
        return l / r if r != 0.0 else NAN
    elif op == '%':
        if r == 0.0:
            return NAN
        try:
            return math.fmod(l, r)
        except ValueError:
            return NAN
    elif op == '^':
        return power(l, r)
    return NAN


def _evaluate(node, x, y):
    if isinstance(node, Number):
        return node.value

    elif isinstance(node, Variable):
        if node.name == 'y':
            return y
        return x

    elif isinstance(node, Negate):
        return -_evaluate(node.operand, x, y)

    elif isinstance(node, BinaryOp):
        l = _evaluate(node.left, x, y)
        r = _evaluate(node.right, x, y)
        return binary(node.op, l, r)

    elif isinstance(node, Call):
        # The argument is always evaluated, even for unknown names
        a = _evaluate(node.arg, x, y)
        return apply_function(node.name, a)

    return NAN


def evaluate(node, x=0.0, y=0.0):
    """Evaluate an AST for the given x and y. Returns NaN on any error."""
    if node is None:
        return NAN
    try:
        return _evaluate(node, float(x), float(y))
    except RecursionError:
        return NAN


def evaluate_x(node, x):
    """Single-variable form used by the calculator and 2-D plots (y = 0)."""
    return evaluate(node, x, 0.0)
