"""Translation Store - Per-session in-memory map of resolved translations."""

from typing import Mapping, Optional


class TranslationStore:
    """
    Session-level cache: language -> (source string -> translated string).

    Pure in-memory, no I/O and no eviction. Lookups happen synchronously while
    widgets render, so every method here returns immediately.
    """

    def __init__(self):
        # Structure: {language: {source_text: translated_text}}
        self._entries: dict[str, dict[str, str]] = {}

    def get(self, language: str, source_text: str) -> Optional[str]:
        """Return the translation if one is known, else None."""
        return self._entries.get(language, {}).get(source_text)

    def contains(self, language: str, source_text: str) -> bool:
        return source_text in self._entries.get(language, {})

    def set(self, language: str, source_text: str, translated_text: str) -> None:
        """Store a translation. Re-setting a different value replaces it locally."""
        self._entries.setdefault(language, {})[source_text] = translated_text

    def merge(self, language: str, entries: Mapping[str, str]) -> int:
        """
        Store many translations for one language.

        Args:
            language: Target language of every entry.
            entries: Mapping of source text to translated text.

        Returns:
            Number of keys that were added or whose value changed.
        """
        bucket = self._entries.setdefault(language, {})
        changed = 0
        for source_text, translated_text in entries.items():
            if bucket.get(source_text) != translated_text:
                bucket[source_text] = translated_text
                changed += 1
        return changed

    def known_keys(self, language: str) -> frozenset[str]:
        """Snapshot of the source strings resolved for a language."""
        return frozenset(self._entries.get(language, {}))

    def entries(self, language: str) -> dict[str, str]:
        """Copy of every translation held for a language."""
        return dict(self._entries.get(language, {}))

    def languages(self) -> list[str]:
        return list(self._entries)

    def size(self, language: Optional[str] = None) -> int:
        """Entry count for one language, or across all languages."""
        if language is not None:
            return len(self._entries.get(language, {}))
        return sum(len(bucket) for bucket in self._entries.values())

    def clear(self) -> None:
        """Drop everything (session end)."""
        self._entries.clear()
