"""Tests for keyboard and button classification."""

import pytest

import calculator
from keymap import KeyRepeatFilter, command_for_button, command_for_key, command_from_payload


@pytest.mark.parametrize("key,expected", [
    ("7", calculator.digit("7")),
    (".", calculator.digit(".")),
    ("+", calculator.operator("+")),
    ("-", calculator.operator("−")),
    ("*", calculator.operator("×")),
    ("x", calculator.operator("×")),
    ("/", calculator.operator("÷")),
    ("^", calculator.operator("^")),
    ("Enter", calculator.EQUALS),
    ("=", calculator.EQUALS),
    ("c", calculator.CLEAR),
    ("Escape", calculator.CLEAR),
    ("%", calculator.PERCENT),
])
def test_recognised_keys(key, expected):
    assert command_for_key(key) == expected


@pytest.mark.parametrize("key", ["a", "Shift", "Tab", "", "12"])
def test_unrecognised_keys_are_ignored(key):
    assert command_for_key(key) is None


def test_auto_repeat_is_ignored():
    assert command_for_key("7", repeat=True) is None
    assert command_for_key("Escape", repeat=True) is None


def test_escape_closes_open_history():
    assert command_for_key("Escape", history_open=True) == calculator.CLOSE_HISTORY


def test_other_keys_ignored_while_history_open():
    assert command_for_key("7", history_open=True) is None
    assert command_for_key("Enter", history_open=True) is None


@pytest.mark.parametrize("button_type,value,expected", [
    ("number", "5", calculator.digit("5")),
    ("operator", "÷", calculator.operator("÷")),
    ("equals", None, calculator.EQUALS),
    ("clear", None, calculator.CLEAR),
    ("percentage", None, calculator.PERCENT),
    ("sign", None, calculator.TOGGLE_SIGN),
    ("history", None, calculator.OPEN_HISTORY),
    ("close-history", None, calculator.CLOSE_HISTORY),
    ("clear-history", None, calculator.CLEAR_HISTORY),
])
def test_buttons(button_type, value, expected):
    assert command_for_button(button_type, value) == expected


def test_unknown_button_raises():
    with pytest.raises(ValueError):
        command_for_button("memory")
    with pytest.raises(ValueError):
        command_for_button("operator", "*")


def test_payload_accepts_command_and_button_types():
    assert command_from_payload({"type": "digit", "value": "3"}) == calculator.digit("3")
    assert command_from_payload({"type": "operator", "value": "+"}) == calculator.operator("+")
    assert command_from_payload({"type": "toggle_sign"}) == calculator.TOGGLE_SIGN
    assert command_from_payload({"type": "sign"}) == calculator.TOGGLE_SIGN
    assert command_from_payload({"type": "number", "value": "9"}) == calculator.digit("9")


@pytest.mark.parametrize("payload", [
    {},
    {"type": "bogus"},
    {"type": "digit"},
    {"type": "operator", "value": "%"},
    {"type": 3},
])
def test_payload_rejects_bad_commands(payload):
    with pytest.raises(ValueError):
        command_from_payload(payload)


def test_repeat_filter_first_press_is_fresh():
    keys = KeyRepeatFilter(gap_ms=10)
    assert keys.press("7", 1000) is False


def test_repeat_filter_held_key_without_release():
    keys = KeyRepeatFilter(gap_ms=10)
    keys.press("7", 1000)
    assert keys.press("7", 1500) is True


def test_repeat_filter_release_press_pairs_are_repeats():
    # X11 auto-repeat: every repeat arrives as release + press at the same time
    keys = KeyRepeatFilter(gap_ms=10)
    assert keys.press("7", 1000) is False
    for t in (1500, 1533, 1566):
        keys.release("7", t)
        assert keys.press("7", t) is True
    keys.release("7", 1600)
    assert keys.press("7", 1800) is False


def test_repeat_filter_tracks_keys_separately():
    keys = KeyRepeatFilter(gap_ms=10)
    keys.press("7", 1000)
    keys.release("7", 1100)
    assert keys.press("8", 1100) is False
    assert keys.press("7", 1300) is False
