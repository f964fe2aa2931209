"""Main Window - Application shell with the language selector and translated labels."""

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QVBoxLayout, QWidget

from clinic_i18n.coordinators import LanguageContext
from clinic_i18n.ui.language_selector import LanguageSelector
from clinic_i18n.ui.translated_label import TranslatedLabel

# Sample of the clinic screens' labels
DEFAULT_LABELS = (
    "Patients",
    "Add patient",
    "Patient intake",
    "Protocols",
    "Treatment history",
    "Save",
    "Cancel",
)


class MainWindow(QMainWindow):
    """Provides the application shell and reports dispatch progress in the status bar."""

    def __init__(self, context: LanguageContext, labels=DEFAULT_LABELS):
        super().__init__()
        self.context = context
        self.setGeometry(100, 100, 480, 360)

        self._setup_ui(labels)

        context.dispatch_started.connect(self._on_dispatch_started)
        context.dispatch_finished.connect(self._on_dispatch_finished)
        context.dispatch_failed.connect(self._on_dispatch_failed)
        context.language_changed.connect(self._refresh_title)
        context.translations_updated.connect(self._refresh_title)
        self._refresh_title()

    def _setup_ui(self, labels):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)

        header = QHBoxLayout()
        self.language_label = TranslatedLabel("Language", context=self.context)
        self.language_selector = LanguageSelector(context=self.context)
        header.addWidget(self.language_label)
        header.addWidget(self.language_selector)
        header.addStretch()
        self.main_layout.addLayout(header)

        self.labels = [TranslatedLabel(text, context=self.context) for text in labels]
        for label in self.labels:
            self.main_layout.addWidget(label)
        self.main_layout.addStretch()

    def _refresh_title(self, language: str = ""):
        if not self.context.is_closed:
            self.setWindowTitle(self.context.text("Clinic"))

    @Slot(str)
    def _on_dispatch_started(self, language: str):
        self.statusBar().showMessage(self.context.text("Translating..."))

    @Slot(str)
    def _on_dispatch_finished(self, language: str):
        self.statusBar().clearMessage()

    @Slot(str, str)
    def _on_dispatch_failed(self, language: str, error: str):
        self.statusBar().showMessage(self.context.text("Some text could not be translated"), 5000)

    def closeEvent(self, event):
        self.context.close()
        super().closeEvent(event)
