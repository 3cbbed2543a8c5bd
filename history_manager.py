"""
History Manager for CalcPad
Keeps the log of completed calculations for the history view
"""
import config


class HistoryManager:
    def __init__(self):
        # Storage is unbounded; only what is shown gets capped
        self._entries = []

    def add_calculation(self, entry):
        """Append a completed calculation ("a op b = result")"""
        self._entries.append(entry)

    def get_calculation_history(self, limit=config.MAX_HISTORY):
        """Get the most recent calculations, oldest first"""
        if limit is None:
            return list(self._entries)
        if limit <= 0:
            return []
        return self._entries[-limit:]

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self._entries.clear()

    def format_calculation_history(self):
        """Format calculation history for display"""
        history = self.get_calculation_history()
        if not history:
            return [config.EMPTY_HISTORY_TEXT]
        return history

    def __len__(self):
        return len(self._entries)
