"""Services layer - dispatch logic and external integrations."""

from clinic_i18n.services.settings_manager import SettingsManager

# Text processing services
from clinic_i18n.services.text_processing import clean_translation, strip_hebrew_niqqud

# Translation services
from clinic_i18n.services.translation import (
    BatchTranslationResult,
    GeminiTranslationProvider,
    GoogleTranslateProvider,
    TranslationProvider,
    create_translation_provider,
)

# Dispatch
from clinic_i18n.services.batch_dispatcher import BatchDispatcher, DispatchOutcome
from clinic_i18n.services.api_workers import DispatchWorker, WorkerSignals

__all__ = [
    "SettingsManager",
    "clean_translation",
    "strip_hebrew_niqqud",
    "TranslationProvider",
    "BatchTranslationResult",
    "GoogleTranslateProvider",
    "GeminiTranslationProvider",
    "create_translation_provider",
    "BatchDispatcher",
    "DispatchOutcome",
    "DispatchWorker",
    "WorkerSignals",
]
