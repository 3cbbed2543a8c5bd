"""
Expression Evaluator for CalcPad
Evaluates one pending "<operand> <operator> <operand>" calculation
"""
import math
import operator
import re

# Display glyphs -> Python operators
OPERATOR_MAP = {
    '×': '*',
    '÷': '/',
    '−': '-',
    '^': '**',
}

# Characters allowed through sanitisation. The exponent marker is kept so
# that results such as "1.2345678e-8" can be chained into a new calculation.
_DISALLOWED = re.compile(r'[^\d+\-*/.() e]')

_NUMBER = r'\(*\s*[+-]?\s*(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?\s*\)*'
_BINARY = re.compile(rf'^\s*({_NUMBER})\s*(\*\*|[+\-*/])\s*({_NUMBER})\s*$')

_OPERATIONS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': operator.truediv,
    '**': math.pow,
}


class InvalidCalculation(ValueError):
    """Raised when an expression cannot be evaluated to a finite number."""

    def __init__(self, expression, reason="Invalid calculation"):
        super().__init__(f"{reason}: {expression!r}")
        self.expression = expression


def translate(expression):
    """Replace display-only operator glyphs with their Python equivalents."""
    for display, python_op in OPERATOR_MAP.items():
        expression = expression.replace(display, python_op)
    return expression


def sanitize(expression):
    """Strip every character outside the evaluator's allow-list."""
    return _DISALLOWED.sub('', expression)


def _to_number(operand):
    text = operand.replace('(', '').replace(')', '').replace(' ', '')
    return float(text)


def evaluate_expression(expression):
    """Evaluate a two-operand expression string such as ``"12 × -3"``.

    Returns the numeric result. Raises InvalidCalculation when the
    expression is malformed or the result is not finite.
    """
    cleaned = sanitize(translate(expression))
    match = _BINARY.match(cleaned)
    if not match:
        raise InvalidCalculation(expression, "Malformed expression")

    left, op, right = match.groups()
    try:
        result = _OPERATIONS[op](_to_number(left), _to_number(right))
    except (ArithmeticError, ValueError) as e:
        raise InvalidCalculation(expression, str(e) or "Invalid calculation") from e

    if not math.isfinite(result):
        raise InvalidCalculation(expression)
    return result


def evaluate(previous_input, current_input):
    """Evaluate ``previous_input`` ("<operand> <operator>") with ``current_input``."""
    return evaluate_expression(f"{previous_input} {current_input}")
