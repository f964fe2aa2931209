"""Domain layer - Pure in-memory state for translations and pending registrations."""

from .language import LANGUAGE_NAMES, SOURCE_LANGUAGE, display_name, is_source_language
from .registration_tracker import RegistrationTracker
from .translation_store import TranslationStore

__all__ = [
    "SOURCE_LANGUAGE",
    "LANGUAGE_NAMES",
    "display_name",
    "is_source_language",
    "TranslationStore",
    "RegistrationTracker",
]
