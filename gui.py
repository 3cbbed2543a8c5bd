"""
GUI for CalcPad
Tkinter widget: display, button grid and history overlay
"""
import tkinter as tk
from tkinter import ttk
import config
import keymap
from calculator import Calculator

# (label, button type, value) rows of the keypad
BUTTON_ROWS = [
    [("C", "clear", None), ("±", "sign", None), ("%", "percentage", None), ("÷", "operator", "÷")],
    [("7", "number", "7"), ("8", "number", "8"), ("9", "number", "9"), ("×", "operator", "×")],
    [("4", "number", "4"), ("5", "number", "5"), ("6", "number", "6"), ("−", "operator", "−")],
    [("1", "number", "1"), ("2", "number", "2"), ("3", "number", "3"), ("+", "operator", "+")],
    [("^", "operator", "^"), ("0", "number", "0"), (".", "number", "."), ("=", "equals", None)],
]

# Tk keysyms that carry no usable event.char
KEYSYM_NAMES = {
    "Return": "Enter",
    "KP_Enter": "Enter",
    "Escape": "Escape",
}


class CalculatorGUI:
    def __init__(self, root, calculator=None, dark_mode=config.DARK_MODE):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        self.calculator = calculator if calculator is not None else Calculator()
        self.dark_mode = dark_mode
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])

        self._repeat_filter = keymap.KeyRepeatFilter()
        self._history_overlay = None

        self.create_widgets()
        self.root.bind('<KeyPress>', self.on_key_press)
        self.root.bind('<KeyRelease>', self.on_key_release)
        self.update_display(self.calculator.render())

    # ── Theme helpers ──────────────────────────────────────────────────────────
    def apply_theme(self):
        """Refresh T, then destroy+rebuild all widgets."""
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self._history_overlay = None
        self.create_widgets()
        self.update_display(self.calculator.render())

    def _toggle_dark_mode(self):
        self.dark_mode = not self.dark_mode
        self.apply_theme()

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a neumorphic styled flat button."""
        T = self.T
        if kind == "equals":
            bg, fg, abg = T["equals_bg"], T["equals_fg"], T["accent"]
        elif kind == "operator":
            bg, fg, abg = T["btn_bg"], T["operator_fg"], T["bg_dark"]
        elif kind == "danger":
            bg, fg, abg = T["danger"], "#FFFFFF", T["bg_dark"]
        else:
            bg, fg, abg = T["btn_bg"], T["btn_fg"], T["bg_dark"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=abg, activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            highlightcolor=T["shadow_lite"],
            **kw
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T
        # Top bar
        top_frame = tk.Frame(self.root, bg=T["hdr_bg"], height=40)
        top_frame.pack(fill=tk.X, padx=2, pady=2)

        tk.Label(top_frame, text=config.APP_NAME,
                 font=(config.LABEL_FONT[0], 13, "bold"),
                 bg=T["hdr_bg"], fg=T["accent"]).pack(side=tk.LEFT, padx=8)
        self._neu_btn(top_frame, "History", command=lambda: self.press("history"),
                      font=config.LABEL_FONT).pack(side=tk.RIGHT, padx=4, pady=4)
        self._neu_btn(top_frame, "◐", command=self._toggle_dark_mode,
                      font=config.LABEL_FONT).pack(side=tk.RIGHT, padx=2, pady=4)

        # Display area: inset card with previous operation above current input
        outer = tk.Frame(self.root, bg=T["shadow_dark"], bd=0)
        outer.pack(fill=tk.X, padx=6, pady=(4, 6))
        display_frame = tk.Frame(outer, bg=T["display_bg"])
        display_frame.pack(fill=tk.X, padx=1, pady=1)

        self.previous_display = tk.Label(
            display_frame, text="", font=config.PREVIOUS_FONT,
            bg=T["display_bg"], fg=T["subtext"], anchor=tk.E, padx=12
        )
        self.previous_display.pack(side=tk.TOP, fill=tk.X, pady=(6, 0))

        self.display = tk.Label(
            display_frame, text="0", font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=12
        )
        self.display.pack(side=tk.TOP, fill=tk.X, pady=(0, 8))

        # Keypad
        grid = tk.Frame(self.root, bg=T["bg"])
        grid.pack(fill=tk.BOTH, expand=True, padx=6, pady=4)
        for r, row in enumerate(BUTTON_ROWS):
            grid.rowconfigure(r, weight=1)
            for c, (label, button_type, value) in enumerate(row):
                grid.columnconfigure(c, weight=1)
                kind = button_type if button_type in ("operator", "equals") else "normal"
                if button_type == "clear":
                    kind = "danger"
                btn = self._neu_btn(grid, label, kind=kind,
                                    command=lambda t=button_type, v=value: self.press(t, v))
                btn.grid(row=r, column=c, sticky="nsew", padx=3, pady=3)

    # ── Input ──────────────────────────────────────────────────────────────────
    def press(self, button_type, value=None):
        """Handle a button click"""
        self.run_command(keymap.command_for_button(button_type, value))

    def run_command(self, command):
        render = self.calculator.dispatch(command)
        self.update_display(render)

    def _key_name(self, event):
        if event.keysym in KEYSYM_NAMES:
            return KEYSYM_NAMES[event.keysym]
        return event.char

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = self._key_name(event)
        if not key:
            return
        repeat = self._repeat_filter.press(event.keysym, event.time)

        command = keymap.command_for_key(key, repeat=repeat,
                                         history_open=self.calculator.history_open)
        if command is not None:
            self.run_command(command)
            return "break"

    def on_key_release(self, event):
        self._repeat_filter.release(event.keysym, event.time)

    # ── Output ─────────────────────────────────────────────────────────────────
    def update_display(self, render):
        """Update the displays and the history overlay"""
        self.display.config(text=render.current_display)
        self.previous_display.config(text=render.previous_operation)
        if render.history_open:
            self._show_history(render.history_lines)
        else:
            self._hide_history()

    def _show_history(self, lines):
        """Full-window history overlay; ESC or Back closes it."""
        T = self.T
        if self._history_overlay is None:
            ov = tk.Frame(self.root, bg=T["bg"])
            ov.place(x=0, y=0, relwidth=1, relheight=1)
            ov.lift()

            hdr = tk.Frame(ov, bg=T["hdr_bg"], height=32)
            hdr.pack(fill=tk.X)
            hdr.pack_propagate(False)
            tk.Button(hdr, text="← Back",
                      font=(config.LABEL_FONT[0], config.LABEL_FONT[1], "bold"),
                      bg=T["hdr_bg"], fg=T["subtext"],
                      relief=tk.FLAT, bd=0, cursor="hand2",
                      activebackground=T["shadow_dark"],
                      command=lambda: self.press("close-history")).pack(side=tk.LEFT, padx=6)
            tk.Label(hdr, text="History",
                     font=(config.LABEL_FONT[0], config.LABEL_FONT[1], "bold"),
                     bg=T["hdr_bg"], fg=T["text"]).pack(side=tk.LEFT, padx=4)
            self._neu_btn(hdr, "Clear", kind="danger", font=config.LABEL_FONT,
                          command=lambda: self.press("clear-history")).pack(side=tk.RIGHT, padx=6)

            body = tk.Frame(ov, bg=T["bg"])
            body.pack(fill=tk.BOTH, expand=True, padx=12, pady=8)
            self._history_list = tk.Listbox(
                body, font=(config.PREVIOUS_FONT[0], 12),
                bg=T["display_bg"], fg=T["display_fg"],
                relief=tk.FLAT, highlightthickness=0, activestyle="none"
            )
            sb = ttk.Scrollbar(body, orient=tk.VERTICAL, command=self._history_list.yview)
            self._history_list.configure(yscrollcommand=sb.set)
            self._history_list.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
            sb.pack(side=tk.RIGHT, fill=tk.Y)
            self._history_overlay = ov

        self._history_list.delete(0, tk.END)
        for entry in lines:
            self._history_list.insert(tk.END, entry)
        # Newest entry stays in view
        self._history_list.yview_moveto(1.0)

    def _hide_history(self):
        if self._history_overlay is not None:
            self._history_overlay.destroy()
            self._history_overlay = None
