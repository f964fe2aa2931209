"""Builds the configured translation provider."""

from clinic_i18n.services.translation.gemini_translation_provider import GeminiTranslationProvider
from clinic_i18n.services.translation.google_translate_provider import GoogleTranslateProvider
from clinic_i18n.services.translation.translation_provider import TranslationProvider

PROVIDERS = ("google", "gemini")


def create_translation_provider(name: str) -> TranslationProvider:
    """
    Instantiate a provider by name.

    Raises:
        ValueError: Unknown provider name.
    """
    name = name.strip().lower()
    if name == "google":
        return GoogleTranslateProvider()
    if name == "gemini":
        return GeminiTranslationProvider()
    raise ValueError(f"Unknown translation provider {name!r}; expected one of {PROVIDERS}")
