"""
Keypad layout and keyboard-to-symbol mapping.

Kept free of tkinter imports so the mapping can be used (and tested) without a display.
"""
from typing import Optional

from backend.engine import BACKSPACE

# 4x4 keypad, plus a bottom row for the decimal point and backspace
KEYPAD_ROWS = [
    ["7", "8", "9", "/"],
    ["4", "5", "6", "*"],
    ["1", "2", "3", "-"],
    ["C", "0", "=", "+"],
]
EXTRA_ROW = [".", BACKSPACE]

# Tk keysyms that don't arrive as a usable printable char
KEYSYM_SYMBOLS = {
    "Return": "=",
    "KP_Enter": "=",
    "Escape": "C",
    "Delete": "C",
    "BackSpace": BACKSPACE,
    "KP_Decimal": ".",
    "KP_Add": "+",
    "KP_Subtract": "-",
    "KP_Multiply": "*",
    "KP_Divide": "/",
}
KEYSYM_SYMBOLS.update({f"KP_{d}": str(d) for d in range(10)})

CHAR_SYMBOLS = {str(d): str(d) for d in range(10)}
CHAR_SYMBOLS.update({
    ".": ".",
    ",": ".",
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "=": "=",
    "c": "C",
    "C": "C",
})


def key_to_symbol(char: str, keysym: str) -> Optional[str]:
    """
    Translate a key event (its char and keysym, as Tk reports them) into a
    calculator input symbol, or None if the key means nothing to the calculator.
    """
    if keysym in KEYSYM_SYMBOLS:
        return KEYSYM_SYMBOLS[keysym]
    return CHAR_SYMBOLS.get(char)


def button_role(symbol: str) -> str:
    """Colour role of a keypad button: "clear", "equals" or "default"."""
    if symbol == "C":
        return "clear"
    if symbol == "=":
        return "equals"
    return "default"
