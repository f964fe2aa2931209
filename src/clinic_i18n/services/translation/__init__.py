"""Translation services - abstract batch provider and concrete implementations."""

from clinic_i18n.services.translation.translation_provider import BatchTranslationResult, TranslationProvider
from clinic_i18n.services.translation.google_translate_provider import GoogleTranslateProvider
from clinic_i18n.services.translation.gemini_translation_provider import GeminiTranslationProvider
from clinic_i18n.services.translation.provider_factory import PROVIDERS, create_translation_provider

__all__ = [
    "TranslationProvider",
    "BatchTranslationResult",
    "GoogleTranslateProvider",
    "GeminiTranslationProvider",
    "create_translation_provider",
    "PROVIDERS",
]
