"""Registration Tracker - Collects strings seen during a rendering pass."""

from clinic_i18n.core.language import SOURCE_LANGUAGE
from clinic_i18n.core.translation_store import TranslationStore


class RegistrationTracker:
    """
    Accumulates untranslated source strings per language until the next dispatch.

    `register` runs inline while widgets build their text, so it only touches
    the pending sets: no I/O, no signals, nothing visible outside the pass.
    Pending sets keep insertion order so a batch is sent in the order strings
    were first seen.
    """

    def __init__(self, store: TranslationStore, source_language: str = SOURCE_LANGUAGE):
        self._store = store
        self._source_language = source_language
        # Structure: {language: {source_text: None}} (dict as an ordered set)
        self._pending: dict[str, dict[str, None]] = {}

    @property
    def source_language(self) -> str:
        return self._source_language

    def register(self, language: str, source_text: str) -> bool:
        """
        Queue a source string for translation into `language`.

        Safe to call on every render for the same string.

        Returns:
            True if the string was newly queued, False if nothing changed
            (source language, empty text, already translated, or already pending).
        """
        if language == self._source_language or not source_text:
            return False
        if self._store.get(language, source_text) is not None:
            return False

        pending = self._pending.setdefault(language, {})
        if source_text in pending:
            return False
        pending[source_text] = None
        return True

    def pending(self, language: str) -> tuple[str, ...]:
        """Ordered view of the strings waiting for `language`."""
        return tuple(self._pending.get(language, ()))

    def has_pending(self, language: str) -> bool:
        return bool(self._pending.get(language))

    def take(self, language: str) -> list[str]:
        """
        Snapshot and clear the pending set for a language in one step.

        Strings registered after this call land in a fresh set and are picked
        up by the next dispatch cycle.
        """
        pending = self._pending.pop(language, None)
        return list(pending) if pending else []

    def discard(self, language: str) -> None:
        """Forget everything pending for a language without dispatching it."""
        self._pending.pop(language, None)

    def clear(self) -> None:
        """Forget everything pending for every language."""
        self._pending.clear()
