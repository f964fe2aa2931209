"""Translated Label - QLabel that shows its source text in the active language."""

from typing import Optional

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QLabel, QWidget

from clinic_i18n.coordinators import LanguageContext, current_context


class TranslatedLabel(QLabel):
    """
    Label holding an English source string.

    `refresh` is the widget's render pass: it registers the string and shows
    whatever the context currently has for it. The label re-renders when new
    translations arrive or the language changes.
    """

    def __init__(
        self,
        source_text: str,
        context: Optional[LanguageContext] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._context = context if context is not None else current_context()
        self._source_text = source_text

        self._context.translations_updated.connect(self._on_translations_updated)
        self._context.language_changed.connect(self._on_language_changed)

        self.refresh()

    @property
    def source_text(self) -> str:
        return self._source_text

    def set_source_text(self, source_text: str) -> None:
        self._source_text = source_text
        self.refresh()

    def refresh(self) -> None:
        """Register the source text and display the current translation."""
        if self._context.is_closed:
            return
        self.setText(self._context.text(self._source_text))

    @Slot(str)
    def _on_translations_updated(self, language: str) -> None:
        if language == self._context.language:
            self.refresh()

    @Slot(str)
    def _on_language_changed(self, language: str) -> None:
        self.refresh()
