"""
Clinic i18n - On-demand UI-string translation for the clinical workflow app.

This package provides:
- A per-session in-memory translation store
- Render-safe registration of UI strings
- Coalesced batch dispatch against a shared persistent cache and a provider
- PySide6 widgets that translate themselves
"""

__version__ = "0.1.0"

from clinic_i18n.core import RegistrationTracker, SOURCE_LANGUAGE, TranslationStore
from clinic_i18n.exceptions import CacheGatewayError, ClinicI18nError, TranslationContextError

__all__ = [
    "TranslationStore",
    "RegistrationTracker",
    "SOURCE_LANGUAGE",
    "ClinicI18nError",
    "CacheGatewayError",
    "TranslationContextError",
]
