"""Coordinators - Orchestration layer connecting widgets with translation services."""

from .language_context import LanguageContext, current_context, install_context, tr

__all__ = [
    "LanguageContext",
    "install_context",
    "current_context",
    "tr",
]
