"""Text processing services - cleanup of translated text."""

from clinic_i18n.services.text_processing.text_normalization import clean_translation, strip_hebrew_niqqud

__all__ = [
    "clean_translation",
    "strip_hebrew_niqqud",
]
