"""
Number formatting for CalcPad
Rounds computed results and turns numbers into display strings
"""
import math
import re
from decimal import Decimal, ROUND_FLOOR

import config

_THOUSANDS = re.compile(r'\B(?=(\d{3})+(?!\d))')
_HALF = Decimal("0.5")


def round_result(value):
    """Round a computed value to a stable precision.

    Very small or very large magnitudes are pushed through exponential form
    with 7 fractional digits; everything else is rounded to 7 decimal places
    on its decimal string so that ``0.1 + 0.2`` comes back as ``0.3``.
    """
    if abs(value) < config.EXP_LOW or abs(value) > config.EXP_HIGH:
        return float(f"{value:.{config.ROUND_DECIMALS}e}")

    scaled = Decimal(repr(value)).scaleb(config.ROUND_DECIMALS)
    # Half-way cases go towards positive infinity
    rounded = (scaled + _HALF).to_integral_value(rounding=ROUND_FLOOR)
    return float(rounded.scaleb(-config.ROUND_DECIMALS))


def number_to_string(value):
    """Return the canonical string form of a number.

    Integral values print without a fractional part, negative zero prints
    as ``"0"``; magnitudes outside ``[1e-7, 1e21)`` use ``d.ddde+N`` notation.
    """
    if not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()[1:]
    digits = "".join(str(d) for d in digits_tuple)
    # Position of the decimal point relative to the start of the digits
    point = len(digits) + exponent

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
        shift = point - 1
        text = f"{mantissa}e{'+' if shift > 0 else '-'}{abs(shift)}"
    return sign + text


def format_number(text):
    """Insert thousands separators into a display string.

    ``"1234567"`` -> ``"1,234,567"``, ``"1234.5"`` -> ``"1,234.5"``. A trailing
    point is kept while an operand is being typed (``"12."``) and text without
    digit runs (``"Error"``) passes through unchanged.
    """
    if text == "":
        return ""
    integer, point, decimal = text.partition(".")
    return _THOUSANDS.sub(",", integer) + point + decimal


def format_previous(text):
    """Format the operand part of an ``"<operand> <operator>"`` string."""
    if not text:
        return ""
    operand, sep, op = text.rpartition(" ")
    if not sep:
        return format_number(text)
    return f"{format_number(operand)} {op}"
