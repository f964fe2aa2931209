"""Language Selector - Combo box switching the UI language."""

from typing import Optional

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QComboBox, QWidget

from clinic_i18n.coordinators import LanguageContext, current_context
from clinic_i18n.core import LANGUAGE_NAMES


class LanguageSelector(QComboBox):
    """Lists the supported languages by (translated) name and switches the context on selection."""

    def __init__(
        self,
        context: Optional[LanguageContext] = None,
        languages: Optional[dict[str, str]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._context = context if context is not None else current_context()
        self._languages = dict(languages or LANGUAGE_NAMES)

        for code in self._languages:
            self.addItem(self._languages[code], code)

        self._sync_selection()
        self._refresh_names()

        self.currentIndexChanged.connect(self._on_index_changed)
        self._context.language_changed.connect(self._on_language_changed)
        self._context.translations_updated.connect(self._on_translations_updated)

    def selected_language(self) -> str:
        return self.currentData()

    def _sync_selection(self) -> None:
        index = self.findData(self._context.language)
        if index >= 0 and index != self.currentIndex():
            self.blockSignals(True)
            self.setCurrentIndex(index)
            self.blockSignals(False)

    def _refresh_names(self) -> None:
        if self._context.is_closed:
            return
        for index in range(self.count()):
            code = self.itemData(index)
            self.setItemText(index, self._context.text(self._languages[code]))

    @Slot(int)
    def _on_index_changed(self, index: int) -> None:
        code = self.itemData(index)
        if code and code != self._context.language:
            self._context.set_language(code)

    @Slot(str)
    def _on_language_changed(self, language: str) -> None:
        self._sync_selection()
        self._refresh_names()

    @Slot(str)
    def _on_translations_updated(self, language: str) -> None:
        if language == self._context.language:
            self._refresh_names()
