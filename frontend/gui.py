#!/usr/bin/env python3
"""
Calculator GUI

Dark-themed Tkinter front end for the keypad calculator.

Input paths (all feed the same backend engine):
- 4x4 keypad (plus a row with "." and backspace).
- Keyboard keys mapped to the same symbols (see frontend.keymap).
- A free-text expression field; Return evaluates it into the display.
- The display itself is editable; its text becomes the buffer before each keypad press.
"""

import logging
import tkinter as tk
from typing import Optional

from backend.config import AppConfig, load_config
from backend.engine import CalculatorEngine
from backend.logging_config import setup_logging
from frontend.keymap import EXTRA_ROW, KEYPAD_ROWS, button_role, key_to_symbol

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
BG = "#1b1b1b"          # main app background
DISPLAY_BG = "#323232"  # display frame fill
BORDER = "#4682b4"      # display border (steel blue)
FG = "#ffffff"          # foreground text
TITLE_FG = "#c8c8ff"    # title colour
FOOTER_FG = "#d3d3d3"   # footer / status text

BUTTON_COLORS = {
    "clear": "#dc143c",    # crimson
    "equals": "#228b22",   # forest green
    "default": "#4682b4",  # steel blue
}

TITLE_FONT = ("Segoe UI", 20, "bold")
DISPLAY_FONT = ("Consolas", 28)
STATUS_FONT = ("Consolas", 12)
BUTTON_FONT = ("Segoe UI", 20)

# Keys that act on the calculator even while the display has focus
DISPLAY_COMMAND_KEYS = ("Return", "KP_Enter", "Escape")


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, config: Optional[AppConfig] = None, engine: Optional[CalculatorEngine] = None):
        super().__init__()
        self.app_config = config or AppConfig()
        self.engine = engine or CalculatorEngine()

        # Window setup
        self.title(self.app_config.title)
        self.geometry(f"{self.app_config.width}x{self.app_config.height}")
        self.minsize(320, 480)
        self.configure(bg=BG)

        self.buttons = {}

        self._build_header()
        self._build_display()
        self._build_expression_entry()
        self._build_keypad()
        self._build_footer()

        # Keyboard input for the whole window; the expression entry filters itself out
        self.bind("<Key>", self._on_key, add="+")
        self._refresh()
        logger.debug("Calculator window built with %d buttons", len(self.buttons))

    # -------------------------
    # Layout
    # -------------------------
    def _build_header(self):
        tk.Label(self, text=self.app_config.title, bg=BG, fg=TITLE_FG,
                 font=TITLE_FONT).pack(fill="x", pady=(20, 10))

    def _build_display(self):
        """Editable display (buffer/result/error) with a status line for the pending operation."""
        frame = tk.Frame(self, bg=DISPLAY_BG, highlightbackground=BORDER,
                         highlightcolor=BORDER, highlightthickness=1)
        frame.pack(fill="x", padx=12, pady=(10, 6))

        self.status_var = tk.StringVar()
        tk.Label(frame, textvariable=self.status_var, bg=DISPLAY_BG, fg=FOOTER_FG,
                 anchor="e", font=STATUS_FONT).pack(fill="x", padx=10, pady=(6, 0))

        self.display_var = tk.StringVar()
        self.display_entry = tk.Entry(frame, textvariable=self.display_var, bg=DISPLAY_BG, fg=FG,
                                      insertbackground=FG, relief="flat",
                                      justify="right", font=DISPLAY_FONT)
        self.display_entry.pack(fill="x", padx=10, pady=(0, 10), ipady=4)

    def _build_expression_entry(self):
        """Free-text expression field, evaluated on Return."""
        self.expr_var = tk.StringVar()
        self.expr_entry = tk.Entry(self, textvariable=self.expr_var, bg=BG, fg=FG,
                                   insertbackground=FG, relief="flat", font=STATUS_FONT)
        self.expr_entry.pack(fill="x", padx=12, pady=(0, 10), ipady=6)
        self.expr_entry.bind("<Return>", lambda e: self._evaluate_expression())

    def _build_keypad(self):
        """Keypad grid; buttons are uniform-sized by grid weight."""
        grid = tk.Frame(self, bg=BG)
        grid.pack(fill="both", expand=True, padx=8)

        for r, row in enumerate(KEYPAD_ROWS):
            for c, symbol in enumerate(row):
                self._make_button(grid, symbol).grid(row=r, column=c, sticky="nsew", padx=5, pady=5)
                grid.grid_columnconfigure(c, weight=1)
            grid.grid_rowconfigure(r, weight=1)

        # Extra row: each symbol spans two columns
        r = len(KEYPAD_ROWS)
        for i, symbol in enumerate(EXTRA_ROW):
            self._make_button(grid, symbol).grid(row=r, column=i * 2, columnspan=2,
                                                 sticky="nsew", padx=5, pady=5)
        grid.grid_rowconfigure(r, weight=1)

    def _make_button(self, parent, symbol: str) -> tk.Button:
        color = BUTTON_COLORS[button_role(symbol)]
        btn = tk.Button(parent, text=symbol, bg=color, fg=FG, activebackground=color,
                        activeforeground=FG, relief="flat", font=BUTTON_FONT,
                        command=lambda s=symbol: self.press(s))
        self.buttons[symbol] = btn
        return btn

    def _build_footer(self):
        tk.Label(self, text="Made with Python and Tkinter", bg=BG, fg=FOOTER_FG).pack(
            side="bottom", pady=(6, 14))

    # -------------------------
    # Input handling
    # -------------------------
    def press(self, symbol: str):
        """Feed one symbol to the engine and redraw."""
        # the display is editable, so its text is the current buffer
        self.engine.set_display(self.display_var.get())
        self.engine.press(symbol)
        self._refresh()

    def _on_key(self, event):
        # Typing in the expression field edits the expression, not the keypad buffer
        if event.widget is self.expr_entry:
            return None
        symbol = key_to_symbol(event.char, event.keysym)
        if symbol is None:
            return None
        # Entry's own bindings already edited the display; only commands pass through
        if event.widget is self.display_entry and event.keysym not in DISPLAY_COMMAND_KEYS:
            return None
        self.press(symbol)
        return "break"

    def _evaluate_expression(self):
        """Evaluate the expression field; malformed input leaves the display alone."""
        expr = self.expr_var.get()
        if self.engine.evaluate_expression(expr):
            self._refresh()
        else:
            logger.debug("Expression %r left the display unchanged", expr)
        return "break"

    def _refresh(self):
        self.display_var.set(self.engine.display)
        self.status_var.set(self.engine.pending_text())


# -------------------------
# Run the application
# -------------------------
def main():
    config = load_config()
    setup_logging(level=config.log_level_value, log_file=config.log_file)
    app = CalculatorGUI(config=config)
    app.mainloop()


if __name__ == "__main__":
    main()
