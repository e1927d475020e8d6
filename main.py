#!/usr/bin/env python3
"""
Entry point for the Calculator application.

Run:

    python main.py

Settings come from CALCULATOR_* environment variables (see backend/config.py).
"""
import logging
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so `backend` and `frontend` import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import load_config
from backend.logging_config import setup_logging

logger = logging.getLogger("main")


def main():
    config = load_config()
    setup_logging(level=config.log_level_value, log_file=config.log_file)

    # tkinter is imported here so config/logging errors surface before any window work
    from frontend.gui import CalculatorGUI

    logger.info("Starting %s (%dx%d)", config.title, config.width, config.height)
    app = CalculatorGUI(config=config)
    app.mainloop()


if __name__ == "__main__":
    main()
