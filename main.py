"""Punto de entrada de la calculadora."""

import tkinter as tk

from calculator_controller import CalculatorController
from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from config import DEFAULT_PRECISION, LOG_FILE, LOG_LEVEL, Settings
from logging_config import setup_logging


def main():
    setup_logging(LOG_LEVEL, LOG_FILE)
    root = tk.Tk()
    root.geometry("460x680")
    root.minsize(420, 600)
    controller = CalculatorController(
        engine=CalculatorEngine(),
        settings=Settings(precision=DEFAULT_PRECISION),
    )
    CalculatorApp(root, controller=controller)
    root.mainloop()


if __name__ == "__main__":
    main()
