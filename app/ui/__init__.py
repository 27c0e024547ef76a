"""UI layer - PySide6 GUI components"""

from .evaluator_app import EvaluatorApp
from .main_window import MainWindow

__all__ = ["EvaluatorApp", "MainWindow"]
