"""Settings Manager - Handles API keys, backend selection and the language preference."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from PySide6.QtCore import QSettings

from clinic_i18n.core.language import SOURCE_LANGUAGE


class SettingsManager:
    """
    Manages settings and API key configuration.

    Service configuration comes from the .env file in the project root.
    The user's chosen UI language is a per-user preference kept in QSettings
    so it survives restarts.
    """

    LANGUAGE_KEY = "appLanguage"
    DEFAULT_FLUSH_DELAY_MS = 50

    def __init__(self, project_root: Optional[Path] = None, preferences: Optional[QSettings] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
            preferences: Store for per-user preferences. Defaults to the
                         application's native QSettings.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root
        self._preferences = preferences if preferences is not None else QSettings("ClinicI18n", "ClinicI18n")

    def get_google_translate_api_key(self) -> Optional[str]:
        """Get the Google Translate API key from environment."""
        return self._get_stripped("GOOGLE_TRANSLATE_API_KEY")

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        return self._get_stripped("GEMINI_API_KEY")

    def get_provider_name(self) -> str:
        """Which external provider to use: "google" (default) or "gemini"."""
        return (self._get_stripped("TRANSLATION_PROVIDER") or "google").lower()

    def get_provider_api_key(self) -> Optional[str]:
        """API key of the selected provider, or None when it is not configured."""
        if self.get_provider_name() == "gemini":
            return self.get_gemini_api_key()
        return self.get_google_translate_api_key()

    def get_cache_backend(self) -> str:
        """Persistent cache backend: "sqlite" (default), "file" or "memory"."""
        return (self._get_stripped("TRANSLATION_CACHE_BACKEND") or "sqlite").lower()

    def get_cache_path(self) -> Path:
        """Database file or document directory for the persistent cache."""
        value = self._get_stripped("TRANSLATION_CACHE_PATH")
        if value is None:
            return self._project_root / "translations.db"
        path = Path(value).expanduser()
        return path if path.is_absolute() else self._project_root / path

    def get_flush_delay_ms(self) -> int:
        """Coalescing window between the first registration of a pass and dispatch."""
        value = self._get_stripped("TRANSLATION_FLUSH_DELAY_MS")
        try:
            return max(0, int(value)) if value is not None else self.DEFAULT_FLUSH_DELAY_MS
        except ValueError:
            return self.DEFAULT_FLUSH_DELAY_MS

    def get_source_language(self) -> str:
        return self._get_stripped("SOURCE_LANGUAGE") or SOURCE_LANGUAGE

    def get_language(self) -> str:
        """The user's last chosen UI language."""
        value = self._preferences.value(self.LANGUAGE_KEY, self.get_source_language())
        return str(value) if value else self.get_source_language()

    def set_language(self, language: str) -> None:
        """Remember the user's UI language for the next session."""
        self._preferences.setValue(self.LANGUAGE_KEY, language)
        self._preferences.sync()

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _get_stripped(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
