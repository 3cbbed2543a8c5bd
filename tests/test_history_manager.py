"""Tests for the calculation history log."""

from history_manager import HistoryManager


def test_history_starts_empty():
    history = HistoryManager()
    assert len(history) == 0
    assert history.get_calculation_history() == []
    assert history.format_calculation_history() == ["No history"]


def test_history_keeps_every_entry_but_shows_last_twenty():
    history = HistoryManager()
    for i in range(25):
        history.add_calculation(f"{i} + 0 = {i}")

    assert len(history) == 25
    shown = history.get_calculation_history()
    assert len(shown) == 20
    assert shown[0] == "5 + 0 = 5"
    assert shown[-1] == "24 + 0 = 24"
    assert len(history.get_calculation_history(None)) == 25
    assert history.get_calculation_history(3) == ["22 + 0 = 22", "23 + 0 = 23", "24 + 0 = 24"]
    assert history.get_calculation_history(0) == []


def test_clear_history():
    history = HistoryManager()
    history.add_calculation("2 + 3 = 5")
    history.clear_calculation_history()
    assert len(history) == 0
    assert history.format_calculation_history() == ["No history"]


def test_returned_history_does_not_alias_storage():
    history = HistoryManager()
    history.add_calculation("2 + 3 = 5")
    shown = history.get_calculation_history()
    shown.append("bogus")
    assert history.get_calculation_history() == ["2 + 3 = 5"]
