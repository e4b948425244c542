"""Punto de entrada de la calculadora científica."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


DEFAULT_ANGLE_MODE = "rad"
START_IN_ENGINEERING_MODE = True
START_WITH_DARK_THEME = True
LOG_LEVEL = logging.WARNING


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    root = tk.Tk()
    root.geometry("460x640")
    root.minsize(420, 520)
    engine = CalculatorEngine(angle_mode=DEFAULT_ANGLE_MODE)
    CalculatorApp(
        root,
        engine=engine,
        engineering_mode=START_IN_ENGINEERING_MODE,
        dark_theme=START_WITH_DARK_THEME,
    )
    root.mainloop()


if __name__ == "__main__":
    main()
