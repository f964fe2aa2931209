"""Exception types raised by the translation subsystem."""

from typing import Optional


class ClinicI18nError(Exception):
    """Base class for all clinic_i18n errors."""


class CacheGatewayError(ClinicI18nError):
    """A persistent cache read or write failed (I/O, permissions, corrupt document)."""

    def __init__(self, message: str, language: Optional[str] = None, operation: str = ""):
        super().__init__(message)
        self.language = language
        self.operation = operation


class TranslationContextError(ClinicI18nError, RuntimeError):
    """Programming error: the language context is missing or already closed."""
