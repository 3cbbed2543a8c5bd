"""
CalcPad Configuration Settings
"""
import os

# Application Settings
APP_NAME = "CalcPad"
VERSION = "1.0.0"

# Calculator limits
MAX_DIGITS = 12          # digits allowed in a single operand
MAX_HISTORY = 20         # history entries shown in the history view
ROUND_DECIMALS = 7
EXP_LOW = 1e-7           # below this magnitude results switch to exponential form
EXP_HIGH = 1e10          # above this magnitude results switch to exponential form

ERROR_TEXT = "Error"
EMPTY_HISTORY_TEXT = "No history"

# Display Settings
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 520
DISPLAY_FONT = ("Consolas", 32, "bold")
PREVIOUS_FONT = ("Consolas", 14)
BUTTON_FONT = ("Segoe UI", 16)
LABEL_FONT = ("Segoe UI", 11)

# ── Neumorphic Palettes ────────────────────────────────────────────────────────

NEU_LIGHT = {
    "bg":           "#DDE6ED",
    "bg_dark":      "#C8D4DF",
    "shadow_dark":  "#B2BFC8",
    "shadow_lite":  "#FFFFFF",
    "display_bg":   "#C8D4DF",
    "display_fg":   "#1A2332",
    "btn_bg":       "#DDE6ED",
    "btn_fg":       "#2B3A4A",
    "operator_fg":  "#1E7A56",
    "equals_bg":    "#2E8B57",
    "equals_fg":    "#FFFFFF",
    "accent":       "#2E8B57",
    "text":         "#2B3A4A",
    "subtext":      "#6E8090",
    "danger":       "#B03A2E",
    "hdr_bg":       "#C8D4DF",
}

NEU_DARK = {
    "bg":           "#1E2530",
    "bg_dark":      "#161C26",
    "shadow_dark":  "#10161E",
    "shadow_lite":  "#283040",
    "display_bg":   "#161C26",
    "display_fg":   "#9ADDB0",   # LCD green-on-dark
    "btn_bg":       "#1E2530",
    "btn_fg":       "#BDD0E0",
    "operator_fg":  "#4DB888",
    "equals_bg":    "#2D8A58",
    "equals_fg":    "#FFFFFF",
    "accent":       "#4DB888",
    "text":         "#BDD0E0",
    "subtext":      "#4E6070",
    "danger":       "#E55A4E",
    "hdr_bg":       "#161C26",
}


def get_theme(dark: bool) -> dict:
    """Return the active neumorphic colour palette."""
    return NEU_DARK if dark else NEU_LIGHT


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DARK_MODE = _env_flag("CALCPAD_DARK_MODE")

# Logging
LOG_LEVEL = os.environ.get("CALCPAD_LOG_LEVEL", "WARNING").upper()

# Web Portal settings
WEB_HOST = os.environ.get("CALCPAD_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("CALCPAD_WEB_PORT", "8888"))
WEB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")

# Keyboard: a release followed by a press of the same key within this many
# milliseconds is the toolkit's auto-repeat, not a new keystroke
KEY_REPEAT_GAP_MS = 10
