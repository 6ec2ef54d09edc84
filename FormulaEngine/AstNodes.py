# AstNodes.py
"""""
AST node types produced by MathEngine and walked by ScientificEngine.

Nodes are plain data: built once by the parser, never mutated afterwards.
Every node accounts for NODE_SIZE bytes of its parser's Arena.
"""""

NODE_SIZE = 32
FUNC_NAME_MAX = 15

OPERATORS = ('+', '-', '*', '/', '%', '^')


class Number:
    """AST node for a numeric literal or a named constant."""
    def __init__(self, value):
        self.value = float(value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Variable:
    """AST node for one of the two free variables, 'x' or 'y'."""
    def __init__(self, name):
        if name not in ('x', 'y'):
            raise ValueError(f"Unknown variable: {name!r}")
        self.name = name

    def __repr__(self):
        return f"Variable('{self.name}')"


class Negate:
    """AST node for unary minus."""
    def __init__(self, operand):
        self.operand = operand

    def __repr__(self):
        return f"Negate({self.operand})"


class BinaryOp:
    """AST node for a binary operation: left <op> right."""
    def __init__(self, op, left, right):
        if op not in OPERATORS:
            raise ValueError(f"Unknown operator: {op!r}")
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self):
        return f"BinaryOp({self.op!r}, left={self.left}, right={self.right})"


class Call:
    """AST node for a named single-argument function call.

    Names longer than FUNC_NAME_MAX characters are silently truncated.
    """
    def __init__(self, name, arg):
        self.name = name[:FUNC_NAME_MAX]
        self.arg = arg

    def __repr__(self):
        return f"Call({self.name!r}, {self.arg})"
