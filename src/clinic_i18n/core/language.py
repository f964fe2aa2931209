"""Language codes known to the application."""

SOURCE_LANGUAGE = "en"

# English display names; shown through the translator like any other UI string.
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "he": "Hebrew",
    "ar": "Arabic",
    "ru": "Russian",
}


def is_source_language(language: str, source_language: str = SOURCE_LANGUAGE) -> bool:
    """True if strings in `language` are displayed as written, without translation."""
    return language == source_language


def display_name(language: str) -> str:
    """English display name for a language code, or the code itself if unknown."""
    return LANGUAGE_NAMES.get(language, language)
