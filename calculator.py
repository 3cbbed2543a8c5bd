"""
Calculator Engine for CalcPad
Input state machine: turns digit/operator/equals/... commands into session state
"""
import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

import config
from evaluator import InvalidCalculation, evaluate
from number_format import format_number, format_previous, number_to_string, round_result
from history_manager import HistoryManager

logger = logging.getLogger(__name__)

MINUS = '−'
OPERATORS = ('+', MINUS, '×', '÷', '^')


class CommandType(Enum):
    DIGIT = "digit"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    PERCENT = "percent"
    TOGGLE_SIGN = "toggle_sign"
    OPEN_HISTORY = "open_history"
    CLOSE_HISTORY = "close_history"
    CLEAR_HISTORY = "clear_history"


@dataclass(frozen=True)
class Command:
    type: CommandType
    value: Optional[str] = None


def digit(value):
    """Digit command for "0"-"9" or "."."""
    value = str(value)
    if len(value) != 1 or value not in "0123456789.":
        raise ValueError(f"Not a digit: {value!r}")
    return Command(CommandType.DIGIT, value)


def operator(glyph):
    """Operator command for one of the display glyphs + − × ÷ ^."""
    if glyph not in OPERATORS:
        raise ValueError(f"Unknown operator: {glyph!r}")
    return Command(CommandType.OPERATOR, glyph)


EQUALS = Command(CommandType.EQUALS)
CLEAR = Command(CommandType.CLEAR)
PERCENT = Command(CommandType.PERCENT)
TOGGLE_SIGN = Command(CommandType.TOGGLE_SIGN)
OPEN_HISTORY = Command(CommandType.OPEN_HISTORY)
CLOSE_HISTORY = Command(CommandType.CLOSE_HISTORY)
CLEAR_HISTORY = Command(CommandType.CLEAR_HISTORY)


@dataclass(frozen=True)
class SessionState:
    """The operand being typed, the pending "<operand> <operator>" and the reset flag.

    ``operation`` is set exactly when ``previous_input`` is non-empty.
    """
    current_input: str = "0"
    previous_input: str = ""
    operation: Optional[str] = None
    should_reset_screen: bool = False

    @property
    def is_error(self):
        return self.current_input == config.ERROR_TEXT


@dataclass(frozen=True)
class Transition:
    state: SessionState
    history_entry: Optional[str] = None


@dataclass(frozen=True)
class Render:
    """What the display surfaces should show after a command."""
    current_display: str
    previous_operation: str
    history_open: bool = False
    history_lines: Tuple[str, ...] = ()


def _count_digits(text):
    return sum(ch.isdigit() for ch in text)


def _append_digit(state, d):
    if state.is_error:
        return state

    current = state.current_input
    if state.should_reset_screen:
        return replace(state, current_input=d, should_reset_screen=False)

    # Results in exponential form ("1e-9") cannot be extended by typing
    if 'e' in current:
        return state
    # Prevent numbers that are too long
    if _count_digits(current) >= config.MAX_DIGITS:
        return state
    if d == '.' and '.' in current:
        return state

    if current == '0' and d != '.':
        return replace(state, current_input=d)
    return replace(state, current_input=current + d)


def _calculate(state):
    """Equals: evaluate the pending operation, returning (state, history entry)."""
    if state.operation is None or state.is_error:
        return state, None

    try:
        result = round_result(evaluate(state.previous_input, state.current_input))
    except InvalidCalculation as e:
        logger.debug("Calculation failed: %s", e)
        return replace(state, current_input=config.ERROR_TEXT,
                       previous_input="", operation=None), None

    result_text = number_to_string(result)
    entry = f"{state.previous_input} {state.current_input} = {result_text}"
    new_state = SessionState(current_input=result_text, should_reset_screen=True)
    return new_state, entry


def _append_operator(state, op):
    if state.is_error:
        return state, None

    entry = None
    if state.operation is not None:
        # Chained operators: finish the pending calculation first
        state, entry = _calculate(state)
        if state.is_error:
            return state, None

    if state.current_input == '0' and op == MINUS:
        # Lets the user begin a negative number
        return replace(state, current_input='-0'), entry

    return replace(state,
                   previous_input=f"{state.current_input} {op}",
                   operation=op,
                   should_reset_screen=True), entry


def _percentage(state):
    if state.is_error:
        return state
    try:
        value = float(state.current_input)
    except ValueError:
        return state
    return replace(state, current_input=number_to_string(round_result(value / 100)))


def _toggle_sign(state):
    if state.is_error or state.current_input == '0':
        return state
    try:
        value = float(state.current_input)
    except ValueError:
        return state
    return replace(state, current_input=number_to_string(-value))


def transition(state, command):
    """Apply one session command to ``state``.

    Pure: returns a Transition holding the new state and, when a calculation
    completed, the history entry to record. History view commands leave the
    session state untouched.
    """
    kind = command.type
    if kind is CommandType.DIGIT:
        return Transition(_append_digit(state, command.value))
    if kind is CommandType.OPERATOR:
        return Transition(*_append_operator(state, command.value))
    if kind is CommandType.EQUALS:
        return Transition(*_calculate(state))
    if kind is CommandType.CLEAR:
        return Transition(SessionState())
    if kind is CommandType.PERCENT:
        return Transition(_percentage(state))
    if kind is CommandType.TOGGLE_SIGN:
        return Transition(_toggle_sign(state))
    return Transition(state)


class Calculator:
    """Owns the session state, the history log and the history view flag."""

    def __init__(self, history=None):
        self.state = SessionState()
        self.history = history if history is not None else HistoryManager()
        self.history_open = False
        # Commands from concurrent callers (web requests) run one at a time
        self.lock = threading.RLock()

    def dispatch(self, command):
        """Run one command to completion and return the render instructions"""
        with self.lock:
            kind = command.type
            if kind is CommandType.OPEN_HISTORY:
                self.history_open = True
            elif kind is CommandType.CLOSE_HISTORY:
                self.history_open = False
            elif kind is CommandType.CLEAR_HISTORY:
                self.history.clear_calculation_history()
            else:
                result = transition(self.state, command)
                self.state = result.state
                if result.history_entry is not None:
                    self.history.add_calculation(result.history_entry)
            return self.render()

    def render(self):
        with self.lock:
            lines = ()
            if self.history_open:
                lines = tuple(self.history.format_calculation_history())
            return Render(
                current_display=format_number(self.state.current_input),
                previous_operation=format_previous(self.state.previous_input),
                history_open=self.history_open,
                history_lines=lines,
            )

    # Convenience wrappers used by the display surfaces

    def add_digit(self, d):
        return self.dispatch(digit(d))

    def add_operator(self, op):
        return self.dispatch(operator(op))

    def evaluate(self):
        return self.dispatch(EQUALS)

    def clear(self):
        return self.dispatch(CLEAR)

    def percentage(self):
        return self.dispatch(PERCENT)

    def toggle_sign(self):
        return self.dispatch(TOGGLE_SIGN)

    def open_history(self):
        return self.dispatch(OPEN_HISTORY)

    def close_history(self):
        return self.dispatch(CLOSE_HISTORY)

    def clear_history(self):
        return self.dispatch(CLEAR_HISTORY)

    def get_expression(self):
        """Get current input"""
        return self.state.current_input
