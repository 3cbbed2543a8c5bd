"""
Input mapping for CalcPad
Classifies keyboard keys and button presses into calculator commands
"""
import calculator
import config
from calculator import CommandType

DIGIT_KEYS = "0123456789."

KEY_MAP = {
    '+': calculator.operator('+'),
    '-': calculator.operator('−'),
    '*': calculator.operator('×'),
    'x': calculator.operator('×'),
    '/': calculator.operator('÷'),
    '^': calculator.operator('^'),
    'Enter': calculator.EQUALS,
    '=': calculator.EQUALS,
    'c': calculator.CLEAR,
    '%': calculator.PERCENT,
}

BUTTON_TYPES = {
    'equals': calculator.EQUALS,
    'clear': calculator.CLEAR,
    'percentage': calculator.PERCENT,
    'sign': calculator.TOGGLE_SIGN,
    'history': calculator.OPEN_HISTORY,
    'close-history': calculator.CLOSE_HISTORY,
    'clear-history': calculator.CLEAR_HISTORY,
}


def command_for_key(key, repeat=False, history_open=False):
    """Map a key name to a command, or None when the key is ignored.

    Escape closes an open history view and clears otherwise. While the
    history view is open every other key is ignored, as are auto-repeat events.
    """
    if repeat:
        return None

    if key == 'Escape':
        return calculator.CLOSE_HISTORY if history_open else calculator.CLEAR
    if history_open:
        return None

    if len(key) == 1 and key in DIGIT_KEYS:
        return calculator.digit(key)
    return KEY_MAP.get(key)


def command_for_button(button_type, value=None):
    """Map a button's type (and value for number/operator buttons) to a command.

    Raises ValueError for an unknown type or value.
    """
    if button_type == 'number':
        return calculator.digit(value)
    if button_type == 'operator':
        return calculator.operator(value)
    try:
        return BUTTON_TYPES[button_type]
    except KeyError:
        raise ValueError(f"Unknown button type: {button_type!r}") from None


def command_from_payload(payload):
    """Build a command from a ``{"type": ..., "value": ...}`` mapping.

    Accepts both command type names ("toggle_sign") and button types ("sign").
    """
    kind = payload.get("type")
    value = payload.get("value")
    if not isinstance(kind, str):
        raise ValueError("Missing command type")
    try:
        command_type = CommandType(kind)
    except ValueError:
        return command_for_button(kind, value)

    if command_type is CommandType.DIGIT:
        return calculator.digit(value)
    if command_type is CommandType.OPERATOR:
        return calculator.operator(value)
    return calculator.Command(command_type)


class KeyRepeatFilter:
    """Tells held-key auto-repeat apart from fresh keystrokes.

    Some window systems (X11) report a held key as a stream of
    release/press pairs carrying the same timestamp, so "still held" alone
    is not enough: a press that follows a release of the same key within
    ``gap_ms`` also counts as a repeat.
    """

    def __init__(self, gap_ms=config.KEY_REPEAT_GAP_MS):
        self.gap_ms = gap_ms
        self._held = set()
        self._released_at = {}

    def press(self, keysym, time_ms):
        """Record a key press; return True when it is an auto-repeat."""
        released = self._released_at.pop(keysym, None)
        repeat = keysym in self._held or (
            released is not None and 0 <= time_ms - released <= self.gap_ms
        )
        self._held.add(keysym)
        return repeat

    def release(self, keysym, time_ms):
        self._held.discard(keysym)
        self._released_at[keysym] = time_ms
