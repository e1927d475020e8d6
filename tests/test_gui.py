"""Smoke tests for the Tkinter window (skipped without a display)."""

import pytest

tk = pytest.importorskip("tkinter")

from backend.config import AppConfig  # noqa: E402
from backend.engine import ERROR_TOKEN  # noqa: E402


@pytest.fixture
def app():
    from frontend.gui import CalculatorGUI

    try:
        window = CalculatorGUI(config=AppConfig(title="Test Calculator"))
    except tk.TclError:
        pytest.skip("No display available for Tk")
    window.withdraw()
    yield window
    window.destroy()


class TestCalculatorGUI:
    """Tests for CalculatorGUI."""

    def test_keypad_buttons(self, app):
        """Clicking keypad buttons should update the display and status line."""
        for symbol in "12+":
            app.buttons[symbol].invoke()
        assert app.display_var.get() == ""
        assert app.status_var.get() == "12 +"

        app.buttons["3"].invoke()
        app.buttons["="].invoke()
        assert app.display_var.get() == "15"
        assert app.status_var.get() == ""

    def test_divide_by_zero(self, app):
        """The error token should reach the display."""
        for symbol in "5/0=":
            app.press(symbol)
        assert app.display_var.get() == ERROR_TOKEN

    def test_expression_entry(self, app):
        """Return in the expression field evaluates it."""
        app.expr_var.set("2+3*4")
        app._evaluate_expression()
        assert app.display_var.get() == "14"

    def test_malformed_expression_keeps_display(self, app):
        """A malformed expression leaves the display unchanged."""
        app.press("7")
        app.expr_var.set("2+")
        app._evaluate_expression()
        assert app.display_var.get() == "7"

    def test_window_title(self, app):
        """The configured title is used."""
        assert app.title() == "Test Calculator"

    def test_edited_display_feeds_engine(self, app):
        """Text typed into the display becomes the buffer for the next press."""
        app.display_var.set("7*")
        app.press("+")
        assert app.status_var.get() == "7 +"

        app.display_var.set("3")
        app.buttons["="].invoke()
        assert app.display_var.get() == "10"


class TestGuiMain:
    """Tests for the GUI module's main()."""

    def test_main_reads_environment(self, monkeypatch):
        """main() should build the window from CALCULATOR_* settings and set up logging."""
        import frontend.gui as gui

        calls = {}

        class FakeWindow:
            def __init__(self, config=None, engine=None):
                calls["config"] = config

            def mainloop(self):
                calls["ran"] = True

        monkeypatch.setenv("CALCULATOR_TITLE", "From Env")
        monkeypatch.setenv("CALCULATOR_LOG_LEVEL", "DEBUG")
        monkeypatch.setattr(gui, "CalculatorGUI", FakeWindow)
        monkeypatch.setattr(gui, "setup_logging", lambda **kw: calls.setdefault("logging", kw))

        gui.main()

        assert calls["config"].title == "From Env"
        assert calls["logging"]["level"] == 10
        assert calls["ran"] is True
