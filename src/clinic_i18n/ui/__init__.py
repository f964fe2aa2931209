"""UI layer - PySide6 widgets that translate themselves."""

from .language_selector import LanguageSelector
from .main_window import MainWindow
from .translated_label import TranslatedLabel

__all__ = ["MainWindow", "TranslatedLabel", "LanguageSelector"]
